# storefront/api/__init__.py
from storefront.api.routers import admin, carts, catalog, checkout, health, orders, promotions

ROUTERS = [
    health.router,
    catalog.router,
    promotions.router,
    carts.router,
    checkout.router,
    orders.router,
    admin.router,
]
