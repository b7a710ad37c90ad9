"""
URL store module.

Implements the Strategy Pattern for the durable store of URL records and
their click events.
"""

from .strategies import UrlStoreStrategy, SQLAlchemyUrlStore, InMemoryUrlStore
from .factory import UrlStoreFactory, UrlStoreBackend

__all__ = [
    "UrlStoreStrategy",
    "SQLAlchemyUrlStore",
    "InMemoryUrlStore",
    "UrlStoreFactory",
    "UrlStoreBackend",
]
