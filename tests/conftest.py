"""
Test configuration and fixtures for the shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from main import app
from linkstat_app.cache.strategies import InMemoryCache
from linkstat_app.database.connection import Base
from linkstat_app.dependencies import get_cache, get_store
from linkstat_app.services.alias_strategies import RandomAliasStrategy
from linkstat_app.services.shortener_service import ShortenerService
from linkstat_app.storage.strategies import InMemoryUrlStore, SQLAlchemyUrlStore

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def session_factory():
    """
    Fresh tables for each test.
    Yields the session factory the SQL store opens its sessions from.
    """
    Base.metadata.create_all(bind=engine)
    try:
        yield TestingSessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def sql_store(session_factory):
    return SQLAlchemyUrlStore(session_factory)


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryUrlStore()


@pytest.fixture(scope="function")
def memory_cache():
    return InMemoryCache()


@pytest.fixture(scope="function")
def service(memory_store, memory_cache):
    """Service wired to in-memory store and cache"""
    return ShortenerService(
        store=memory_store,
        cache=memory_cache,
        alias_strategy=RandomAliasStrategy(length=6),
    )


@pytest.fixture(scope="function")
def client(sql_store, memory_cache):
    """
    Create a test client with store and cache dependencies overridden.
    This is the main fixture that API tests use.
    """
    app.dependency_overrides[get_store] = lambda: sql_store
    app.dependency_overrides[get_cache] = lambda: memory_cache

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
