"""
Tests for the URL stores.

Both backends must honour the same contract, so most tests run against
each of them.
"""
import asyncio
from datetime import timedelta

import pytest

from linkstat_app.errors import AliasConflict
from linkstat_app.schemas.records import AnalyticsEvent, UrlRecord
from linkstat_app.storage.factory import UrlStoreBackend, UrlStoreFactory
from linkstat_app.storage.strategies import InMemoryUrlStore, SQLAlchemyUrlStore


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request, session_factory):
    if request.param == "memory":
        return InMemoryUrlStore()
    return SQLAlchemyUrlStore(session_factory)


def record(alias: str, long_url: str = "https://www.example.com/", topic=None) -> UrlRecord:
    return UrlRecord(long_url=long_url, alias=alias, topic=topic)


class TestStoreContract:
    """Test the behaviour shared by every store backend"""

    def test_create_and_find(self, store):
        """Test creating a record and finding it by alias"""
        created = asyncio.run(store.create_if_alias_free(record("abc123")))

        assert created.id is not None
        assert created.alias == "abc123"

        found = asyncio.run(store.find_by_alias("abc123"))
        assert found is not None
        assert found.long_url == "https://www.example.com/"
        assert found.click_events == []

    def test_find_missing_alias(self, store):
        """Test looking up an alias that was never created"""
        assert asyncio.run(store.find_by_alias("zzzzzz")) is None

    def test_duplicate_alias_conflicts_without_mutation(self, store):
        """Test that a taken alias raises AliasConflict and keeps the first record"""
        asyncio.run(store.create_if_alias_free(record("taken1", "https://first.example/")))

        with pytest.raises(AliasConflict):
            asyncio.run(store.create_if_alias_free(record("taken1", "https://second.example/")))

        all_records = asyncio.run(store.find_all())
        assert len(all_records) == 1
        assert all_records[0].long_url == "https://first.example/"

    def test_find_by_topic(self, store):
        """Test filtering records by topic"""
        asyncio.run(store.create_if_alias_free(record("news01", topic="news")))
        asyncio.run(store.create_if_alias_free(record("news02", topic="news")))
        asyncio.run(store.create_if_alias_free(record("sport1", topic="sport")))

        news = asyncio.run(store.find_by_topic("news"))

        assert sorted(r.alias for r in news) == ["news01", "news02"]
        assert asyncio.run(store.find_by_topic("weather")) == []

    def test_append_click_event(self, store):
        """Test appending click events in order"""
        asyncio.run(store.create_if_alias_free(record("click1")))

        ok = asyncio.run(store.append_click_event("click1", AnalyticsEvent(ip="1.2.3.4", os="Linux")))
        asyncio.run(store.append_click_event("click1", AnalyticsEvent(ip="5.6.7.8")))

        assert ok is True
        events = asyncio.run(store.find_by_alias("click1")).click_events
        assert [event.ip for event in events] == ["1.2.3.4", "5.6.7.8"]
        assert events[0].os == "Linux"

    def test_append_to_missing_alias(self, store):
        """Test appending to an unknown alias"""
        assert asyncio.run(store.append_click_event("nothere", AnalyticsEvent())) is False

    def test_created_at_is_utc_aware(self, store):
        """Test that created_at comes back timezone-aware in UTC"""
        asyncio.run(store.create_if_alias_free(record("when01")))

        found = asyncio.run(store.find_by_alias("when01"))

        assert found.created_at.tzinfo is not None
        assert found.created_at.utcoffset() == timedelta(0)


class TestStoreConcurrency:
    """Test concurrent access against every store backend"""

    def test_one_winner_for_same_alias(self, store):
        """Test that racing creates for one alias produce exactly one record"""

        async def race():
            return await asyncio.gather(
                *(store.create_if_alias_free(record("race01", f"https://{i}.example/")) for i in range(10)),
                return_exceptions=True,
            )

        results = asyncio.run(race())

        winners = [r for r in results if isinstance(r, UrlRecord)]
        conflicts = [r for r in results if isinstance(r, AliasConflict)]
        assert len(winners) == 1
        assert len(conflicts) == 9
        assert len(asyncio.run(store.find_all())) == 1

    def test_concurrent_appends_are_not_lost(self, store):
        """Test that parallel click appends all land"""
        asyncio.run(store.create_if_alias_free(record("busy01")))

        async def burst():
            return await asyncio.gather(
                *(store.append_click_event("busy01", AnalyticsEvent(ip=f"10.0.0.{i}")) for i in range(20))
            )

        assert all(asyncio.run(burst()))

        events = asyncio.run(store.find_by_alias("busy01")).click_events
        assert len(events) == 20
        assert {event.ip for event in events} == {f"10.0.0.{i}" for i in range(20)}


class TestInMemoryStore:
    """Test in-memory store specifics"""

    def test_returned_records_are_snapshots(self):
        """Test that mutating a returned record leaves the store untouched"""
        store = InMemoryUrlStore()
        asyncio.run(store.create_if_alias_free(record("snap01")))

        snapshot = asyncio.run(store.find_by_alias("snap01"))
        snapshot.click_events.append(AnalyticsEvent())

        assert asyncio.run(store.find_by_alias("snap01")).click_events == []


class TestUrlStoreFactory:
    """Test store factory"""

    def test_creates_memory_store(self):
        """Test that the factory returns one shared in-memory store"""
        UrlStoreFactory.clear_instance()
        try:
            store = UrlStoreFactory.create(UrlStoreBackend.MEMORY)
            assert isinstance(store, InMemoryUrlStore)
            assert UrlStoreFactory.create(UrlStoreBackend.MEMORY) is store
        finally:
            UrlStoreFactory.clear_instance()
