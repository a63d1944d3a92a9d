# module checkout_api.utils.dependencies
from fastapi import Request

from checkout_api.config import Settings
from checkout_api.payments.service import PreferenceClient


def get_settings(request: Request) -> Settings:
    """Settings immuables posées sur app.state par create_app()."""
    return request.app.state.settings


def get_preference_client(request: Request) -> PreferenceClient:
    """Client Mercado Pago partagé, construit une fois au démarrage."""
    return request.app.state.preference_client
