"""
Gestionnaire d'exceptions HTTP.
- Toutes les erreurs sortent en JSON avec au minimum une clé "message".
- detail dict (ex: erreur fournisseur normalisée) -> renvoyé tel quel.
- detail str -> {"message": detail}.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


def register_exception_handlers(app: FastAPI) -> None:
    # StarletteHTTPException couvre aussi les 404/405 du routeur
    @app.exception_handler(StarletteHTTPException)
    async def json_message_on_http_errors(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = {"message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))
