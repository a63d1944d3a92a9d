"""
ASGI entrypoint: expose `app` for process managers / deployments.

- En production, un process manager (ex: gunicorn/uvicorn-workers) importe `checkout_api.asgi:app`.
- Toute la configuration (settings, routes, middlewares, client Mercado Pago) est centralisée
  dans checkout_api.app, ce fichier ne fait qu'exposer l'instance `app`.
"""

from checkout_api.app import app

if __name__ == "__main__":
    # Exécution directe utile en développement local (uvicorn standalone).
    import uvicorn
    from checkout_api.config import PORT
    uvicorn.run(
        "checkout_api.asgi:app",
        host="0.0.0.0",
        port=PORT,
        reload=True,
    )
