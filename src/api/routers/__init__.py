"""Resource routers mounted by ``create_app``."""

from src.api.routers import auth, cart, costumes, rentals

__all__ = ["auth", "cart", "costumes", "rentals"]
