import logging
from typing import Any, Dict

from fastapi import APIRouter, Request, Depends, HTTPException

from checkout_api.config import Settings
from checkout_api.utils.dependencies import get_settings, get_preference_client
from checkout_api.utils.rate_limit import optional_rate_limit
from checkout_api.payments import cart as payments_cart
from checkout_api.payments.errors import normalize_error
from checkout_api.payments.schemas import PreferenceResponse, MessageResponse, ErrorResponse
from checkout_api.payments.service import PreferenceClient, create_checkout_preference

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])

INVALID_BODY_MESSAGE = "Cuerpo de la solicitud inválido: se esperaba JSON."


# module checkout_api.payments.views
@router.post(
    "/create_preference",
    response_model=PreferenceResponse,
    responses={400: {"model": MessageResponse}, 429: {"model": MessageResponse}, 500: {"model": ErrorResponse}},
    dependencies=[Depends(optional_rate_limit())],
)
async def create_preference(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: PreferenceClient = Depends(get_preference_client),
) -> Dict[str, Any]:
    """
    Crée une préférence Mercado Pago et renvoie l'URL de checkout hébergée.
    - Entrée JSON: { "items": [ { "title": str, "quantity": number, "unit_price": number }, ... ], ... }
      (pedidoId, datosEnvio et autres champs sont acceptés et ignorés)
    - 200: { "init_point": "<url>" }
    - 400: { "message": "..." } payload ou item invalide
    - 500: { "message": "...", "details": {status?, cause?, apiResponse?} } échec Mercado Pago
    """
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail=INVALID_BODY_MESSAGE)

    items = payments_cart.validate_items(body)
    if isinstance(body, dict) and body.get("pedidoId"):
        logger.info("payments.create_preference pedidoId=%s", body.get("pedidoId"))

    try:
        init_point = await create_checkout_preference(
            items=items,
            base_url=settings.base_url,
            client=client,
        )
    except Exception as e:
        logger.exception("Error en /create_preference (servidor)")
        raise HTTPException(status_code=500, detail=normalize_error(e))
    return {"init_point": init_point}
