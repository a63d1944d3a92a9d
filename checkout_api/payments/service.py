"""
Cas d'usage 'payments': orchestre cart, preference et le client Mercado Pago.
"""
import json
import logging
from typing import Any, List, Protocol, Dict

from fastapi.concurrency import run_in_threadpool

from .cart import CartItem, cart_summary
from .errors import ProviderError
from .preference import build_preference

logger = logging.getLogger(__name__)


class PreferenceClient(Protocol):
    def create(self, preference: Dict[str, Any]) -> Dict[str, Any]: ...


# module checkout_api.payments.service
async def create_checkout_preference(
    *,
    items: List[CartItem],
    base_url: str,
    client: PreferenceClient,
) -> str:
    """
    Crée la préférence Mercado Pago pour un panier déjà validé et retourne son init_point.
    - Les back_urls sont recalculées à chaque requête depuis base_url
    - L'appel SDK (bloquant) s'exécute dans le threadpool pour ne pas bloquer l'event loop
    - Toute erreur du fournisseur est propagée telle quelle à la vue
    """
    preference = build_preference(items, base_url)
    logger.info("payments.preference cart=%s", cart_summary(items))
    logger.info("Datos de la preferencia enviados a MP: %s", json.dumps(preference, indent=2, ensure_ascii=False))

    response = await run_in_threadpool(client.create, preference)

    init_point = response.get("init_point") if isinstance(response, dict) else None
    if not init_point:
        raise ProviderError("La respuesta de Mercado Pago no contiene init_point.")
    logger.info("Respuesta exitosa de Mercado Pago (init_point): %s", init_point)
    return init_point
