from gamestore.api.cart import router as cart_router
from gamestore.api.customers import router as customers_router
from gamestore.api.games import router as games_router
from gamestore.api.health import router as health_router
from gamestore.api.purchases import router as purchases_router

__all__ = [
    "cart_router",
    "customers_router",
    "games_router",
    "health_router",
    "purchases_router",
]
