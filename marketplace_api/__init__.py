"""REST backend for the marketplace: auth, product catalog and favorites."""

__version__ = "0.1.0"
