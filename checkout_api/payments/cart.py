"""
Logique panier pure (pas de Mercado Pago, pas de réseau).
"""
import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Union
from fastapi import HTTPException

INVALID_ITEMS_MESSAGE = "Items inválidos: se requiere un array de items no vacío."
INVALID_ITEM_MESSAGE = (
    "Estructura de item inválida. Cada item debe tener 'title' (string no vacío), "
    "'quantity' (number > 0) y 'unit_price' (number > 0). Item defectuoso: {item}"
)

Number = Union[int, float]


# module checkout_api.payments.cart
@dataclass(frozen=True)
class CartItem:
    title: str
    quantity: Number
    unit_price: Number


def _is_positive_number(value: Any) -> bool:
    # bool est un int en Python, mais pas un nombre côté JSON
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0


def _is_valid_item(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        return False
    return _is_positive_number(item.get("quantity")) and _is_positive_number(item.get("unit_price"))


def _js_number(value: Any) -> Any:
    # JSON.stringify écrit 1.0 comme 1 (notation non exponentielle jusqu'à 1e21)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {k: _js_number(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_js_number(v) for v in value]
    return value


def serialize_item(item: Any) -> str:
    """JSON compact de l'item brut, tel que renvoyé au client pour le debug."""
    return json.dumps(_js_number(item), ensure_ascii=False, separators=(",", ":"), default=str)


def validate_items(body: Any) -> List[CartItem]:
    """
    Valide le corps brut {items: [{title, quantity, unit_price}, ...]}.
    - Soulève HTTPException(400) si items est absent, n'est pas une liste ou est vide.
    - Soulève HTTPException(400) dès le premier item invalide, avec son JSON dans le message.
    - Les champs supplémentaires (pedidoId, datosEnvio, ...) sont ignorés.
    """
    items = body.get("items") if isinstance(body, dict) else None
    if not isinstance(items, list) or not items:
        raise HTTPException(status_code=400, detail=INVALID_ITEMS_MESSAGE)

    cart: List[CartItem] = []
    for item in items:
        if not _is_valid_item(item):
            raise HTTPException(status_code=400, detail=INVALID_ITEM_MESSAGE.format(item=serialize_item(item)))
        cart.append(CartItem(title=item["title"], quantity=item["quantity"], unit_price=item["unit_price"]))
    return cart


def cart_summary(items: List[CartItem]) -> Dict[str, Any]:
    """Résumé loggable du panier (nombre de lignes, unités, total arrondi)."""
    total = sum(i.quantity * i.unit_price for i in items)
    return {
        "lines": len(items),
        "units": sum(i.quantity for i in items),
        "total": f"{total:.2f}",
    }
