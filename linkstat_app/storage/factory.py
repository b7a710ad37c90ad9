"""
Factory for creating URL store instances.
Simple factory with singleton caching.
"""

import logging
from enum import Enum
from .strategies import UrlStoreStrategy, SQLAlchemyUrlStore, InMemoryUrlStore


logger = logging.getLogger(__name__)


class UrlStoreBackend(Enum):
    """Available store backends"""
    SQLALCHEMY = "sqlalchemy"
    MEMORY = "memory"


class UrlStoreFactory:
    """
    Creates the process-wide store instance.

    The SQLAlchemy backend uses the application's session factory.
    """

    _instance: UrlStoreStrategy = None

    @classmethod
    def create(cls, backend: UrlStoreBackend) -> UrlStoreStrategy:
        """
        Create or return the cached store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton store instance
        """
        if cls._instance is not None:
            return cls._instance

        if backend == UrlStoreBackend.SQLALCHEMY:
            from linkstat_app.database.connection import SessionLocal

            cls._instance = SQLAlchemyUrlStore(SessionLocal)
            logger.info("SQLAlchemy URL store initialized")

        elif backend == UrlStoreBackend.MEMORY:
            cls._instance = InMemoryUrlStore()
            logger.info("In-memory URL store initialized")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
