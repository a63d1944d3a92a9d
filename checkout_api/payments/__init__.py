"""
Module 'payments' (feature-first): point d'entrée public.
Réunit validation du panier, construction de la préférence, client Mercado Pago et service.
"""

from .cart import CartItem, validate_items, serialize_item, cart_summary
from .preference import round_price, build_back_urls, to_preference_items, build_preference
from .errors import (
    DEFAULT_ERROR_MESSAGE,
    ProviderError,
    ProviderTransportError,
    ProviderHTTPError,
    normalize_error,
)
from .mercadopago_client import MercadoPagoPreferenceClient
from .service import PreferenceClient, create_checkout_preference

__all__ = [
    # cart
    "CartItem",
    "validate_items",
    "serialize_item",
    "cart_summary",
    # preference
    "round_price",
    "build_back_urls",
    "to_preference_items",
    "build_preference",
    # errors
    "DEFAULT_ERROR_MESSAGE",
    "ProviderError",
    "ProviderTransportError",
    "ProviderHTTPError",
    "normalize_error",
    # mercado pago
    "MercadoPagoPreferenceClient",
    # services
    "PreferenceClient",
    "create_checkout_preference",
]
