"""
URL store strategies using Strategy Pattern.

The store is the source of truth for URL records and their click events:
- SQLAlchemyUrlStore: durable, any SQLAlchemy-supported database
- InMemoryUrlStore: development/testing

``create_if_alias_free`` is the single place where alias uniqueness is
enforced. It must behave as an atomic check-and-set.
"""

import asyncio
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from linkstat_app.errors import AliasConflict, StorageError
from linkstat_app.models.url import URL, ClickEvent
from linkstat_app.schemas.records import AnalyticsEvent, UrlRecord


logger = logging.getLogger(__name__)


class UrlStoreStrategy(ABC):
    """
    Abstract base class for URL stores.

    Implementations are shared by all requests and must tolerate
    interleaved calls. Unexpected backend failures raise ``StorageError``.
    """

    @abstractmethod
    async def create_if_alias_free(self, record: UrlRecord) -> UrlRecord:
        """
        Insert ``record`` if no record uses its alias.

        Returns:
            The stored record (with ``id`` assigned)

        Raises:
            AliasConflict: alias already taken; nothing was written
        """
        pass

    @abstractmethod
    async def find_by_alias(self, alias: str) -> Optional[UrlRecord]:
        """Get a record by alias, or None"""
        pass

    @abstractmethod
    async def find_by_topic(self, topic: str) -> List[UrlRecord]:
        """Get all records with the given topic (possibly empty)"""
        pass

    @abstractmethod
    async def find_all(self) -> List[UrlRecord]:
        """Get every record"""
        pass

    @abstractmethod
    async def append_click_event(self, alias: str, event: AnalyticsEvent) -> bool:
        """
        Append one click event to the record with ``alias``.

        Each append is all-or-nothing; concurrent appends are never lost.

        Returns:
            True if appended, False if the alias does not exist
        """
        pass


class SQLAlchemyUrlStore(UrlStoreStrategy):
    """
    Store backed by SQLAlchemy.

    Every operation opens its own session and runs in a worker thread
    (``asyncio.to_thread``), so a slow database never blocks the event loop
    and requests never share a session. Uniqueness comes from the UNIQUE
    constraint on ``urls.alias``; a click is a single INSERT into
    ``click_events``.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """
        Args:
            session_factory: sessionmaker bound to the target engine
        """
        self.session_factory = session_factory

    async def _run(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as e:
            logger.error("Database error in %s: %s", fn.__name__, e)
            raise StorageError(f"Database error: {e}") from e

    async def create_if_alias_free(self, record: UrlRecord) -> UrlRecord:
        return await self._run(self._create, record)

    async def find_by_alias(self, alias: str) -> Optional[UrlRecord]:
        return await self._run(self._find_by_alias, alias)

    async def find_by_topic(self, topic: str) -> List[UrlRecord]:
        return await self._run(self._find_by_topic, topic)

    async def find_all(self) -> List[UrlRecord]:
        return await self._run(self._find_all)

    async def append_click_event(self, alias: str, event: AnalyticsEvent) -> bool:
        return await self._run(self._append_click_event, alias, event)

    def _create(self, record: UrlRecord) -> UrlRecord:
        with self.session_factory() as db:
            url = URL(
                alias=record.alias,
                long_url=record.long_url,
                topic=record.topic,
                created_at=record.created_at,
            )
            db.add(url)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise AliasConflict(record.alias)
            db.refresh(url)
            return UrlRecord.model_validate(url)

    def _find_by_alias(self, alias: str) -> Optional[UrlRecord]:
        with self.session_factory() as db:
            url = db.query(URL).filter(URL.alias == alias).first()
            return UrlRecord.model_validate(url) if url else None

    def _find_by_topic(self, topic: str) -> List[UrlRecord]:
        with self.session_factory() as db:
            urls = db.query(URL).filter(URL.topic == topic).order_by(URL.id).all()
            return [UrlRecord.model_validate(url) for url in urls]

    def _find_all(self) -> List[UrlRecord]:
        with self.session_factory() as db:
            urls = db.query(URL).order_by(URL.id).all()
            return [UrlRecord.model_validate(url) for url in urls]

    def _append_click_event(self, alias: str, event: AnalyticsEvent) -> bool:
        with self.session_factory() as db:
            url_id = db.query(URL.id).filter(URL.alias == alias).scalar()
            if url_id is None:
                return False
            db.add(ClickEvent(url_id=url_id, **event.model_dump()))
            db.commit()
            return True


class InMemoryUrlStore(UrlStoreStrategy):
    """
    Store kept in a dict, guarded by one asyncio.Lock.

    Lost on restart and not shared between processes. Callers get copies,
    so a returned record is a snapshot.
    """

    def __init__(self):
        self._records: Dict[str, UrlRecord] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create_if_alias_free(self, record: UrlRecord) -> UrlRecord:
        async with self._lock:
            if record.alias in self._records:
                raise AliasConflict(record.alias)
            stored = record.model_copy(
                update={"id": next(self._ids), "click_events": list(record.click_events)}
            )
            self._records[stored.alias] = stored
            return stored.model_copy(deep=True)

    async def find_by_alias(self, alias: str) -> Optional[UrlRecord]:
        async with self._lock:
            record = self._records.get(alias)
            return record.model_copy(deep=True) if record else None

    async def find_by_topic(self, topic: str) -> List[UrlRecord]:
        async with self._lock:
            return [
                record.model_copy(deep=True)
                for record in self._records.values()
                if record.topic == topic
            ]

    async def find_all(self) -> List[UrlRecord]:
        async with self._lock:
            return [record.model_copy(deep=True) for record in self._records.values()]

    async def append_click_event(self, alias: str, event: AnalyticsEvent) -> bool:
        async with self._lock:
            record = self._records.get(alias)
            if record is None:
                return False
            record.click_events.append(event)
            return True
