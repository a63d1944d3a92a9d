"""
Factory d'application recommandée pour les entrypoints (ex: checkout_api.asgi).
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from checkout_api.config import Settings, load_settings
from checkout_api.payments.mercadopago_client import MercadoPagoPreferenceClient
from checkout_api.payments.service import PreferenceClient
from .lifespan import lifespan
from .middlewares import register_basic_middlewares
from .exceptions import register_exception_handlers
from .routers import register_routers


def create_app(
    settings: Optional[Settings] = None,
    preference_client: Optional[PreferenceClient] = None,
) -> FastAPI:
    """
    Construit l'app FastAPI avec le lifespan et enregistre:
      - Settings (lues une seule fois) et client Mercado Pago partagé sur app.state
      - middleware CORS, gestionnaire d'exceptions, routers (payments, health)
    Paramètres:
      - settings: configuration explicite, sinon load_settings() (RuntimeError si token absent)
      - preference_client: client injectable (tests), sinon MercadoPagoPreferenceClient
    Retour:
      FastAPI prêt à être utilisé par le serveur ASGI.
    """
    settings = settings or load_settings()
    app = FastAPI(title="Checkout API (Mercado Pago)", lifespan=lifespan)
    app.state.settings = settings
    app.state.preference_client = preference_client or MercadoPagoPreferenceClient(
        settings.mp_access_token,
        locale=settings.locale,
    )
    register_basic_middlewares(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
