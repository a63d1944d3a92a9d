"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS ouvert à toutes les origines (API consommée par le front).
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def register_basic_middlewares(app: FastAPI) -> None:
    """
    Ajoute les middlewares « de base »:
    - CORSMiddleware: toutes origines, méthodes et en-têtes (pas de cookies, donc pas de credentials).
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
