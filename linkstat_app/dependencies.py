"""
FastAPI dependencies for dependency injection.

This module provides the process-wide cache, store, alias strategy and
user-agent parser, and builds a ShortenerService from them per request.
Tests override these with ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from linkstat_app.cache.factory import CacheFactory, CacheBackend
from linkstat_app.cache.strategies import CacheStrategy
from linkstat_app.config import settings
from linkstat_app.services.alias_strategies import AliasStrategy, RandomAliasStrategy
from linkstat_app.services.shortener_service import ShortenerService
from linkstat_app.services.user_agent import UserAgentParser
from linkstat_app.storage.factory import UrlStoreFactory, UrlStoreBackend
from linkstat_app.storage.strategies import UrlStoreStrategy


@lru_cache()
def get_cache() -> CacheStrategy:
    """Cache instance chosen by ``settings.cache_backend``"""
    return CacheFactory.create(CacheBackend(settings.cache_backend))


@lru_cache()
def get_store() -> UrlStoreStrategy:
    """Store instance chosen by ``settings.store_backend``"""
    return UrlStoreFactory.create(UrlStoreBackend(settings.store_backend))


@lru_cache()
def get_alias_strategy() -> AliasStrategy:
    return RandomAliasStrategy(length=settings.alias_length)


@lru_cache()
def get_user_agent_parser() -> UserAgentParser:
    return UserAgentParser()


def get_shortener_service(
    store: UrlStoreStrategy = Depends(get_store),
    cache: CacheStrategy = Depends(get_cache),
    alias_strategy: AliasStrategy = Depends(get_alias_strategy),
    ua_parser: UserAgentParser = Depends(get_user_agent_parser),
) -> ShortenerService:
    """
    Get ShortenerService with all dependencies injected.

    Controllers depend on the service; the service depends on the
    shared infrastructure.
    """
    return ShortenerService(
        store=store,
        cache=cache,
        alias_strategy=alias_strategy,
        ua_parser=ua_parser,
    )
