from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional
from uuid import UUID

from .codec import DecodeFailure, EncodeFailure, decode_records, encode_records
from .models import CountdownRecord, display_sort, sort_key
from .settings import DEFAULT_STORAGE_KEY, Settings, get_settings
from .storage import KeyValueStore, get_store

logger = logging.getLogger(__name__)

RefreshSignal = Callable[[], None]


def _noop() -> None:
    return None


def _dedupe(records: Iterable[CountdownRecord]) -> List[CountdownRecord]:
    by_id: Dict[UUID, CountdownRecord] = {}
    for record in records:
        by_id[record.id] = record
    return list(by_id.values())


# PUBLIC_INTERFACE
class CountdownRepository:
    """
    Owns the canonical, ordered collection of countdown records.

    Every mutation re-establishes display order, writes the whole collection
    to the shared store and then fires the refresh signal so widget surfaces
    reload. Write failures are logged and swallowed; the in-memory collection
    stays authoritative until the next successful write.

    The repository is meant to be driven from one context (one UI thread or
    one worker); it does no locking of its own.
    """

    def __init__(
        self,
        store: KeyValueStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
        on_persist: Optional[RefreshSignal] = None,
    ) -> None:
        self._store = store
        self._key = storage_key
        self._on_persist = on_persist or _noop
        self._items: List[CountdownRecord] = []

    @property
    def records(self) -> List[CountdownRecord]:
        """Current records in display order, as a new list."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, record_id: UUID) -> Optional[CountdownRecord]:
        for record in self._items:
            if record.id == record_id:
                return record
        return None

    def _index_of(self, record_id: UUID) -> Optional[int]:
        for i, record in enumerate(self._items):
            if record.id == record_id:
                return i
        return None

    def add(self, record: CountdownRecord) -> None:
        """Insert a record; a record already holding its id is replaced."""
        index = self._index_of(record.id)
        if index is None:
            self._items.append(record)
        else:
            self._items[index] = record
        self._reorder()
        self._persist()

    def update(self, record: CountdownRecord) -> bool:
        """
        Replace the record sharing record.id.

        Returns False and leaves everything untouched if no such record exists.
        """
        index = self._index_of(record.id)
        if index is None:
            logger.debug("Ignoring update for unknown countdown %s", record.id)
            return False
        self._items[index] = record
        self._reorder()
        self._persist()
        return True

    def delete(self, record_id: UUID) -> bool:
        """Remove the record with record_id. Unknown ids are a no-op returning False."""
        index = self._index_of(record_id)
        if index is None:
            logger.debug("Ignoring delete for unknown countdown %s", record_id)
            return False
        del self._items[index]
        self._persist()
        return True

    def delete_at(self, indices: Iterable[int]) -> int:
        """
        Remove the records at the given positions of the current display order.

        Out-of-range positions are ignored. Returns how many records were removed.
        """
        doomed = {i for i in indices if 0 <= i < len(self._items)}
        if not doomed:
            return 0
        self._items = [r for i, r in enumerate(self._items) if i not in doomed]
        self._persist()
        return len(doomed)

    def replace_all(self, records: Iterable[CountdownRecord]) -> None:
        """Replace the whole collection (fixtures, backup restore). Later duplicates of an id win."""
        self._items = display_sort(_dedupe(records))
        self._persist()

    def load(self) -> None:
        """
        Restore the collection from the shared store.

        An absent key, a failed read or an undecodable blob leaves an empty
        collection. Loading never writes back to the store and never fires the
        refresh signal.
        """
        try:
            blob = self._store.get(self._key)
        except OSError:
            logger.error("Failed to read countdowns under key %r", self._key, exc_info=True)
            self._items = []
            return
        if blob is None:
            self._items = []
            return
        try:
            decoded = decode_records(blob)
        except DecodeFailure:
            logger.warning("Discarding unreadable countdown data under key %r", self._key, exc_info=True)
            self._items = []
            return
        self._items = display_sort(_dedupe(decoded))
        logger.debug("Loaded %d countdowns", len(self._items))

    def _reorder(self) -> None:
        self._items.sort(key=sort_key)

    def _persist(self) -> None:
        try:
            blob = encode_records(self._items)
        except EncodeFailure:
            logger.error("Skipping countdown write; collection could not be encoded", exc_info=True)
            return
        try:
            self._store.set(self._key, blob)
        except OSError:
            logger.error("Failed to write countdowns under key %r", self._key, exc_info=True)
            return
        try:
            self._on_persist()
        except Exception:
            logger.exception("Refresh signal raised after persisting countdowns")


# PUBLIC_INTERFACE
def load_shared_records(store: KeyValueStore, storage_key: str = DEFAULT_STORAGE_KEY) -> List[CountdownRecord]:
    """
    Read-only view of the shared collection for widget surfaces.

    Returns records in display order; an absent or unreadable blob gives [].
    """
    try:
        blob = store.get(storage_key)
    except OSError:
        logger.error("Failed to read countdowns under key %r", storage_key, exc_info=True)
        return []
    if blob is None:
        return []
    try:
        return display_sort(_dedupe(decode_records(blob)))
    except DecodeFailure:
        logger.warning("Failed to decode countdowns under key %r", storage_key, exc_info=True)
        return []


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None, on_persist: Optional[RefreshSignal] = None) -> CountdownRepository:
    """
    Factory to return a repository over the configured shared store.
    The collection starts empty; call load() once the host is up.
    """
    settings = settings or get_settings()
    return CountdownRepository(get_store(settings), settings.storage_key, on_persist)
