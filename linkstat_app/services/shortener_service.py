import asyncio
import logging
from typing import List, Optional

from linkstat_app.analytics.aggregator import (
    bucket_by_recent_days,
    group_by_field,
    pool_events,
    unique_user_count,
)
from linkstat_app.cache.strategies import CacheStrategy
from linkstat_app.config import settings
from linkstat_app.errors import (
    AliasConflict,
    AliasNotFound,
    AliasSpaceExhausted,
    AliasTaken,
    InternalError,
    InvalidInput,
    NoData,
    ShortenerError,
)
from linkstat_app.schemas.analytics import (
    AliasAnalytics,
    OverallAnalytics,
    TopicAnalytics,
    TopicUrlSummary,
)
from linkstat_app.schemas.records import AnalyticsEvent, RequestContext, UrlRecord, UNKNOWN
from linkstat_app.schemas.url import ShortUrlResponse
from linkstat_app.services.alias_strategies import AliasStrategy, is_reserved_alias, is_valid_alias
from linkstat_app.services.user_agent import UserAgentParser
from linkstat_app.storage.strategies import UrlStoreStrategy


logger = logging.getLogger(__name__)


class ShortenerService:
    """
    Creates short URLs, resolves them and reports click analytics.

    Store, cache, alias strategy and user-agent parser are injected, so
    tests can pass in-memory versions and production passes the shared
    singletons from ``linkstat_app.dependencies``.

    The store is the source of truth. The cache is best-effort: any cache
    failure or timeout counts as a miss and never fails a request.
    """

    def __init__(
        self,
        store: UrlStoreStrategy,
        cache: CacheStrategy,
        alias_strategy: AliasStrategy,
        ua_parser: Optional[UserAgentParser] = None,
        *,
        max_alias_retries: int = settings.max_alias_retries,
        cache_ttl: int = settings.cache_ttl,
        cache_timeout: float = settings.cache_timeout,
        store_timeout: float = settings.store_timeout,
        analytics_days: int = settings.analytics_days,
    ):
        self.store = store
        self.cache = cache
        self.alias_strategy = alias_strategy
        self.ua_parser = ua_parser or UserAgentParser()
        self.max_alias_retries = max_alias_retries
        self.cache_ttl = cache_ttl
        self.cache_timeout = cache_timeout
        self.store_timeout = store_timeout
        self.analytics_days = analytics_days

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    async def create_short_url(
        self,
        long_url: Optional[str],
        custom_alias: Optional[str] = None,
        topic: Optional[str] = None,
    ) -> ShortUrlResponse:
        """Create a new short URL

        Flow:
        1. Validate input
        2. Custom alias: fail with AliasTaken if it exists.
           Otherwise generate aliases until the store accepts one.
        3. Persist (the store's insert is the uniqueness guard)
        4. Populate the cache, best-effort
        """
        long_url = (long_url or "").strip()
        if not long_url:
            raise InvalidInput("long_url is required")

        topic = (topic or "").strip() or None

        if custom_alias:
            record = await self._create_with_custom_alias(long_url, custom_alias, topic)
        else:
            record = await self._create_with_generated_alias(long_url, topic)

        await self._cache_set(record.alias, record.long_url)

        logger.info("Created short URL %s -> %s", record.alias, record.long_url)
        return ShortUrlResponse.model_validate(record.model_dump())

    async def _create_with_custom_alias(
        self, long_url: str, alias: str, topic: Optional[str]
    ) -> UrlRecord:
        if not is_valid_alias(alias, settings.custom_alias_max_length):
            raise InvalidInput(
                "custom_alias must be 1-"
                f"{settings.custom_alias_max_length} characters of letters, digits, '_' or '-'"
                " and not a reserved path name"
            )

        if await self._store_call(self.store.find_by_alias(alias)):
            raise AliasTaken(f"Custom alias '{alias}' is already in use")

        try:
            return await self._store_call(
                self.store.create_if_alias_free(UrlRecord(long_url=long_url, alias=alias, topic=topic))
            )
        except AliasConflict:
            # Lost a race with a concurrent create of the same alias
            raise AliasTaken(f"Custom alias '{alias}' is already in use")

    async def _create_with_generated_alias(self, long_url: str, topic: Optional[str]) -> UrlRecord:
        for attempt in range(1, self.max_alias_retries + 1):
            alias = self.alias_strategy.generate()
            if is_reserved_alias(alias):
                logger.info("Generated reserved alias on attempt %d/%d", attempt, self.max_alias_retries)
                continue
            try:
                return await self._store_call(
                    self.store.create_if_alias_free(UrlRecord(long_url=long_url, alias=alias, topic=topic))
                )
            except AliasConflict:
                logger.info("Alias collision on attempt %d/%d", attempt, self.max_alias_retries)

        logger.error("Could not generate a free alias after %d attempts", self.max_alias_retries)
        raise AliasSpaceExhausted(
            f"Could not generate unique alias after {self.max_alias_retries} attempts"
        )

    # ------------------------------------------------------------------
    # Resolve
    # ------------------------------------------------------------------

    async def resolve_alias(self, alias: str, context: Optional[RequestContext] = None) -> str:
        """
        Get the long URL for a redirect and record the click.

        Flow:
        1. Check cache (a failure or timeout is a miss)
        2. On miss, query the store and backfill the cache
        3. Append a click event; a failure here is logged and the
           redirect still succeeds
        """
        long_url = await self._cache_get(alias)

        if long_url is None:
            record = await self._store_call(self.store.find_by_alias(alias))
            if record is None:
                raise AliasNotFound(alias)
            long_url = record.long_url
            await self._cache_set(alias, long_url)

        await self._record_click(alias, context or RequestContext())
        return long_url

    async def _record_click(self, alias: str, context: RequestContext) -> None:
        agent = self.ua_parser.parse(context.user_agent)
        event = AnalyticsEvent(
            ip=context.ip or UNKNOWN,
            os=agent.os,
            device=agent.device,
            browser=agent.browser,
        )

        try:
            appended = await asyncio.wait_for(
                self.store.append_click_event(alias, event), timeout=self.store_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Timed out recording click for %s", alias)
            return
        except Exception as e:
            logger.warning("Failed to record click for %s: %s", alias, e)
            return

        if not appended:
            logger.warning("Click for %s not recorded: alias vanished from store", alias)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    async def get_alias_analytics(self, alias: str) -> AliasAnalytics:
        record = await self._store_call(self.store.find_by_alias(alias))
        if record is None:
            raise AliasNotFound(alias)

        events = record.click_events
        return AliasAnalytics(
            alias=record.alias,
            total_clicks=len(events),
            unique_users=unique_user_count(events),
            clicks_by_date=bucket_by_recent_days(events, self.analytics_days),
            os_breakdown=group_by_field(events, "os"),
            device_breakdown=group_by_field(events, "device"),
        )

    async def get_overall_analytics(self) -> OverallAnalytics:
        records = await self._store_call(self.store.find_all())
        if not records:
            raise NoData("No URLs found")

        events = pool_events(records)
        return OverallAnalytics(
            total_urls=len(records),
            total_clicks=len(events),
            unique_users=unique_user_count(events),
            clicks_by_date=bucket_by_recent_days(events, self.analytics_days),
            os_breakdown=group_by_field(events, "os"),
            device_breakdown=group_by_field(events, "device"),
        )

    async def get_topic_analytics(self, topic: str) -> TopicAnalytics:
        records = await self._store_call(self.store.find_by_topic(topic))
        if not records:
            raise NoData(f"No URLs found for topic '{topic}'")

        events = pool_events(records)
        urls: List[TopicUrlSummary] = [
            TopicUrlSummary(
                alias=record.alias,
                short_url=f"{settings.base_url}/{record.alias}",
                total_clicks=len(record.click_events),
                unique_users=unique_user_count(record.click_events),
            )
            for record in records
        ]
        return TopicAnalytics(
            topic=topic,
            total_clicks=len(events),
            unique_users=unique_user_count(events),
            clicks_by_date=bucket_by_recent_days(events, self.analytics_days),
            urls=urls,
        )

    # ------------------------------------------------------------------
    # Cache and store wrappers
    # ------------------------------------------------------------------

    @staticmethod
    def _cache_key(alias: str) -> str:
        return f"url:{alias}"

    async def _cache_get(self, alias: str) -> Optional[str]:
        try:
            return await asyncio.wait_for(
                self.cache.get(self._cache_key(alias)), timeout=self.cache_timeout
            )
        except asyncio.TimeoutError:
            logger.warning("Cache get timed out for %s", alias)
        except Exception as e:
            logger.warning("Cache get failed for %s: %s", alias, e)
        return None

    async def _cache_set(self, alias: str, long_url: str) -> None:
        try:
            ok = await asyncio.wait_for(
                self.cache.set(self._cache_key(alias), long_url, ttl=self.cache_ttl),
                timeout=self.cache_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Cache set timed out for %s", alias)
            return
        except Exception as e:
            logger.warning("Cache set failed for %s: %s", alias, e)
            return
        if not ok:
            logger.warning("Cache set rejected for %s", alias)

    async def _store_call(self, awaitable):
        """Await a store operation under the store timeout.

        AliasConflict passes through for the caller to handle. Timeouts
        and other storage failures become InternalError.
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.store_timeout)
        except asyncio.TimeoutError:
            logger.error("Store call timed out after %ss", self.store_timeout)
            raise InternalError("Storage timed out")
        except ShortenerError:
            raise
        except Exception as e:
            logger.exception("Unexpected store failure")
            raise InternalError(f"Storage failure: {e}") from e
