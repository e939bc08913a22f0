"""Repository package for the database access layer.

``UserRepository`` is the credential store (users and their favorites) and
``ProductRepository`` the product store.
"""

from marketplace_api.db.repositories.base import BaseRepository, escape_like
from marketplace_api.db.repositories.products import ProductRepository
from marketplace_api.db.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "UserRepository",
    "escape_like",
]
