"""HTTP routers mounted by :mod:`marketplace_api.main`."""

from . import auth, products

__all__ = ["auth", "products"]
