"""
Construction du corps "preference" attendu par Mercado Pago (pur, sans réseau).
"""
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, List

from checkout_api.config import normalize_base_url
from .cart import CartItem, Number

BACK_URL_SUFFIXES = {
    "success": "/success",
    "failure": "/failure",
    "pending": "/pending",
}

_CENTS = Decimal("0.01")


# module checkout_api.payments.preference
def round_price(value: Number) -> float:
    """
    Arrondit un prix unitaire à 2 décimales (half-up), précision monétaire MP.
    Passe par str() pour arrondir la valeur décimale saisie et non sa représentation binaire.
    """
    price = Decimal(str(value))
    with localcontext() as ctx:
        # quantize() exige assez de chiffres pour la partie entière + 2 décimales
        ctx.prec = max(28, price.adjusted() + 3)
        return float(price.quantize(_CENTS, rounding=ROUND_HALF_UP))


def build_back_urls(base_url: str) -> Dict[str, str]:
    base = normalize_base_url(base_url)
    return {name: f"{base}{suffix}" for name, suffix in BACK_URL_SUFFIXES.items()}


def to_preference_items(items: List[CartItem]) -> List[Dict[str, Any]]:
    """Lignes MP dans l'ordre du panier; seul unit_price est transformé."""
    return [
        {
            "title": item.title,
            "quantity": item.quantity,
            "unit_price": round_price(item.unit_price),
        }
        for item in items
    ]


def build_preference(items: List[CartItem], base_url: str) -> Dict[str, Any]:
    """
    Corps de la requête "create preference":
    - items: [{title, quantity, unit_price arrondi}]
    - back_urls: {success, failure, pending} dérivées de base_url
    """
    return {
        "items": to_preference_items(items),
        "back_urls": build_back_urls(base_url),
    }
