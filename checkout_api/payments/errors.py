"""
Erreurs du fournisseur de paiement et normalisation pour la réponse HTTP 500.

Trois variantes:
- ProviderTransportError: réseau/transport (timeout, DNS, connexion refusée)
- ProviderHTTPError: Mercado Pago a répondu avec un statut non 2xx et un corps
- toute autre exception: forme inconnue, message générique en dernier recours
"""
from typing import Any, Dict, Optional

DEFAULT_ERROR_MESSAGE = "Error desconocido al procesar la solicitud."


class ProviderError(Exception):
    """Échec côté fournisseur sans information structurée."""


class ProviderTransportError(ProviderError):
    def __init__(self, message: str, cause: Optional[str] = None):
        super().__init__(message)
        self.cause = cause


class ProviderHTTPError(ProviderError):
    def __init__(self, status: Optional[int], body: Any = None, message: Optional[str] = None):
        super().__init__(message or f"Mercado Pago respondió con estado {status}")
        self.status = status
        self.body = body


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


# module checkout_api.payments.errors
def normalize_error(exc: BaseException) -> Dict[str, Any]:
    """
    Construit {message, details} à partir d'une erreur quelconque.
    - message n'est jamais vide (DEFAULT_ERROR_MESSAGE en dernier recours)
    - details ne contient que les clés disponibles: status, cause, apiResponse
    """
    message = _text(str(exc)) or DEFAULT_ERROR_MESSAGE
    details: Dict[str, Any] = {}

    if isinstance(exc, ProviderHTTPError):
        if exc.status:
            details["status"] = exc.status
        body = exc.body if isinstance(exc.body, dict) else {}
        if body.get("cause"):
            details["cause"] = body["cause"]
        if exc.body:
            details["apiResponse"] = exc.body
        message = _text(body.get("message")) or message
    elif isinstance(exc, ProviderTransportError):
        if exc.cause:
            details["cause"] = exc.cause

    return {"message": message, "details": details}
