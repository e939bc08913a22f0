"""Client library for the marketplace API.

Holds the session, the optimistic favorite controller and the catalog
screen models that web and mobile front-ends share.
"""

from .api import ApiClient
from .catalog import CatalogBrowser, Debouncer, FavoritesView
from .channel import FavoritesChannel
from .errors import ApiError, NotAuthenticatedError, NotFoundError, UnauthenticatedError
from .favorites import FavoriteController, FavoriteToggle, ToggleEvent, ToggleState
from .models import AuthPayload, Product, ProductPage, UserProfile
from .session import AuthContext, AuthSession
from .settings import ClientSettings, get_client_settings
from .storage import InMemoryStorage, JsonFileStorage, KeyValueStorage

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiError",
    "AuthContext",
    "AuthPayload",
    "AuthSession",
    "CatalogBrowser",
    "ClientSettings",
    "Debouncer",
    "FavoriteController",
    "FavoriteToggle",
    "FavoritesChannel",
    "FavoritesView",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "NotAuthenticatedError",
    "NotFoundError",
    "Product",
    "ProductPage",
    "ToggleEvent",
    "ToggleState",
    "UnauthenticatedError",
    "UserProfile",
    "get_client_settings",
]
