"""
Registre central des routers.
- API: payments (POST /create_preference)
- Health: health_router
"""
from fastapi import FastAPI
from checkout_api.payments import views as payments_views
from checkout_api.health.router import router as health_router


def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    # Health & monitoring
    app.include_router(health_router)
