from typing import Optional, Dict, Any
from urllib.parse import urlparse
import logging
import time

from fastapi import Request, Response, HTTPException
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

logger = logging.getLogger(__name__)


def _client_key(req: Request) -> str:
    # Pas de session: la clé est l'IP du client + le chemin
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{req.url.path}"


async def _identifier(req: Request) -> str:
    return _client_key(req)


def optional_rate_limit(times: Optional[int] = None, seconds: Optional[int] = None):
    """
    Dépendance de rate limiting tolérante.
    - times/seconds: fenêtre explicite, sinon lue dans app.state.settings
    - LOCAL_RATE_LIMIT_FALLBACK: compteur mémoire par (ip, chemin)
    - rate_limit_enabled=False: aucun contrôle
    - sinon fastapi-limiter (redis); s'il n'est pas prêt, la requête passe
    """
    async def _dep(request: Request, response: Response):
        settings = request.app.state.settings
        limit = times or settings.rate_limit_times
        window = seconds or settings.rate_limit_seconds

        if settings.rate_limit_local_fallback:
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            # Purge des clés dont toutes les entrées sont sorties de la fenêtre
            for stale_key in [k for k, ts in store.items() if not any(now - t < window for t in ts)]:
                del store[stale_key]
            hits = [t for t in store.get(key, []) if now - t < window]
            if len(hits) >= limit:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = hits
            request.app.state._rl_store = store
            return

        if getattr(request.app.state, "rate_limit_enabled", None) is False:
            return

        if FastAPILimiter.redis is None:
            logger.debug("fastapi-limiter non initialisé, rate limit ignoré path=%s", request.url.path)
            return
        limiter = RateLimiter(times=limit, seconds=window, identifier=_identifier)
        await limiter(request, response)
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)
    limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    backend = "redis" if limiter_ready else None

    info: Dict[str, Any] = {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": backend,
    }

    if backend == "redis":
        p = urlparse(request.app.state.settings.rate_limit_redis_url)
        info["redis"] = {
            "scheme": p.scheme,
            "host": p.hostname,
            "port": p.port,
            "db": (p.path or "/0").lstrip("/") or "0",
        }
    return info
