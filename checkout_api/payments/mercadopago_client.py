"""
Adaptateur Mercado Pago: centralise la configuration du SDK et l'appel "create preference".
"""
import logging
from typing import Any, Dict, Optional

import mercadopago
import requests
from mercadopago.config import RequestOptions
from mercadopago.errors import MercadoPagoError

from .errors import ProviderError, ProviderHTTPError, ProviderTransportError

logger = logging.getLogger(__name__)


# module checkout_api.payments.mercadopago_client
class MercadoPagoPreferenceClient:
    """
    Client partagé (construit une fois au démarrage), sans état entre requêtes.
    - access_token: token privé Mercado Pago (MP_ACCESS_TOKEN)
    - locale: envoyée en Accept-Language sur chaque appel (ex: "es-MX")
    - sdk: instance SDK injectable (tests)
    """

    def __init__(self, access_token: str, locale: str = "es-MX", sdk: Optional[Any] = None):
        self.locale = locale
        if sdk is None:
            options = RequestOptions(custom_headers={"Accept-Language": locale})
            sdk = mercadopago.SDK(access_token, request_options=options)
        self._sdk = sdk

    def create(self, preference: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crée la préférence et retourne le corps de réponse MP (dict avec init_point, id, ...).
        - Appel bloquant, sans retry ni timeout spécifique (défauts du SDK)
        - Soulève ProviderTransportError si le réseau échoue
        - Soulève ProviderHTTPError si MP répond avec un statut non 2xx
        """
        try:
            result = self._sdk.preference().create(preference)
        except requests.RequestException as e:
            raise ProviderTransportError(
                f"No se pudo contactar a Mercado Pago: {e}",
                cause=f"{type(e).__name__}: {e}",
            ) from e
        except MercadoPagoError as e:
            # Erreurs typées du SDK (ex: MPServerError si le corps n'est pas du JSON)
            raise ProviderHTTPError(
                getattr(e, "status_code", None),
                getattr(e, "response", None),
                message=str(e) or None,
            ) from e

        if not isinstance(result, dict):
            raise ProviderError("Respuesta inesperada del SDK de Mercado Pago.")

        status = result.get("status")
        body = result.get("response")
        if not isinstance(status, int) or not 200 <= status < 300:
            logger.warning("mercadopago.preference.create status=%s", status)
            raise ProviderHTTPError(status, body)
        if not isinstance(body, dict):
            raise ProviderHTTPError(status, body, message="Respuesta de Mercado Pago sin cuerpo JSON.")
        return body
