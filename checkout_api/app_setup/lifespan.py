"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Journalise la configuration effective (token masqué, BASE_URL).
- Initialise FastAPILimiter (Redis) avec options de test (fakeredis).
- Options (Settings):
  - rate_limit_disabled: désactive complètement (tests)
  - use_fake_redis: utilise fakeredis (tests)
  - rate_limit_local_fallback: active un fallback local si l'init échoue
"""
import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter


def _log_startup(logger: logging.Logger, app: FastAPI) -> None:
    settings = app.state.settings
    logger.info("--- DEPURACIÓN DE SERVIDOR ---")
    logger.info("Valor de MP_ACCESS_TOKEN (parcial): %s", settings.masked_access_token)
    logger.info("Valor de BASE_URL cargado: %s", settings.base_url)
    logger.info("-------------------------------")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Configure le rate limiting et gère les fallbacks.
    - En cas d'échec de Redis et sans fallback, le rate limiting est désactivé proprement.
    - Les logs indiquent l'état effectif (enabled/disabled) pour observabilité.
    """
    logger = logging.getLogger("uvicorn.error")
    settings = app.state.settings
    _log_startup(logger, app)

    if settings.rate_limit_disabled:
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        yield
        return

    initialized = False
    try:
        if settings.use_fake_redis:
            from fakeredis.aioredis import FakeRedis  # tests only
            r = FakeRedis(decode_responses=True)
        else:
            r = aioredis.from_url(settings.rate_limit_redis_url, encoding="utf-8", decode_responses=True)

        await FastAPILimiter.init(r)
        initialized = True
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        # init() pose FastAPILimiter.redis avant de charger le script Lua
        FastAPILimiter.redis = None
        if settings.rate_limit_local_fallback:
            app.state.rate_limit_enabled = True
            logger.warning("Rate limiting falling back to local in-memory due to init error: %s", e)
        else:
            app.state.rate_limit_enabled = False
            logger.warning("Rate limiting disabled due to init error: %s", e)

    yield

    if initialized:
        await FastAPILimiter.close()
