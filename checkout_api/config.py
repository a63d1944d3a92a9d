# checkout_api.config
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import logging
import os
from dotenv import load_dotenv

# Racine du projet: le fichier .env y est chargé explicitement
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Construit une seule fois un objet Settings immuable au démarrage
- Le token Mercado Pago est obligatoire: sans lui, le process refuse de démarrer
"""

logger = logging.getLogger(__name__)

# Port d'écoute fixe (non configurable)
PORT = 5000
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_LOCALE = "es-MX"


def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _flag(v: Optional[str]) -> bool:
    return _clean_env(v).lower() in ("1", "true", "yes")


def _int(v: Optional[str], default: int) -> int:
    try:
        return int(_clean_env(v) or default)
    except ValueError:
        logger.warning("Valeur entière invalide %r, utilisation de %s", v, default)
        return default


def normalize_base_url(url: Optional[str]) -> str:
    """Retire les slashs finaux pour éviter les `//` lors des concaténations."""
    return _clean_env(url).rstrip("/")


def mask_secret(value: str, visible: int = 10) -> str:
    """Affiche seulement le début d'un secret (logs de démarrage)."""
    if not value:
        return "NO DEFINIDO"
    return value[:visible] + "..."


@dataclass(frozen=True)
class Settings:
    """Configuration lue une fois au démarrage puis injectée dans les handlers."""
    mp_access_token: str
    base_url: str = DEFAULT_BASE_URL
    locale: str = DEFAULT_LOCALE
    log_level: str = "info"
    # Rate limiting (fastapi-limiter + redis)
    rate_limit_times: int = 10
    rate_limit_seconds: int = 60
    rate_limit_redis_url: str = "redis://127.0.0.1:6379/0"
    rate_limit_disabled: bool = False
    rate_limit_local_fallback: bool = False
    use_fake_redis: bool = False

    @property
    def masked_access_token(self) -> str:
        return mask_secret(self.mp_access_token)


def load_env_file(path: Path = ENV_PATH) -> None:
    load_dotenv(dotenv_path=path, override=True)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Construit Settings depuis l'environnement.
    - environ: mapping explicite (tests); sinon .env puis os.environ
    - Soulève RuntimeError si MP_ACCESS_TOKEN est absent ou vide
    """
    if environ is None:
        load_env_file()
        environ = os.environ

    token = _clean_env(environ.get("MP_ACCESS_TOKEN"))
    if not token:
        logger.critical(
            "ERROR FATAL: MP_ACCESS_TOKEN no está definido en las variables de entorno. "
            "Por favor, configúralo en tu archivo .env"
        )
        raise RuntimeError("MP_ACCESS_TOKEN manquant: configurez-le dans .env ou l'environnement")

    # NEXT_PUBLIC_BASE_URL est partagée avec le front, BASE_URL en secours
    base_url = normalize_base_url(
        environ.get("NEXT_PUBLIC_BASE_URL") or environ.get("BASE_URL") or DEFAULT_BASE_URL
    )

    return Settings(
        mp_access_token=token,
        base_url=base_url or DEFAULT_BASE_URL,
        locale=_clean_env(environ.get("MP_LOCALE")) or DEFAULT_LOCALE,
        log_level=_clean_env(environ.get("LOG_LEVEL")).lower() or "info",
        rate_limit_times=_int(environ.get("RATE_LIMIT_TIMES"), 10),
        rate_limit_seconds=_int(environ.get("RATE_LIMIT_SECONDS"), 60),
        rate_limit_redis_url=_clean_env(environ.get("RATE_LIMIT_REDIS_URL")) or "redis://127.0.0.1:6379/0",
        rate_limit_disabled=_flag(environ.get("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")),
        rate_limit_local_fallback=_flag(environ.get("LOCAL_RATE_LIMIT_FALLBACK")),
        use_fake_redis=_flag(environ.get("USE_FAKE_REDIS_FOR_TESTS")),
    )
