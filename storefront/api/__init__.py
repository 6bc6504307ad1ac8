# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.routers import addresses, carts, customers, health, orders, products, variants


def register_routers(app: FastAPI) -> FastAPI:
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(variants.router)
    app.include_router(customers.router)
    app.include_router(addresses.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    return app
