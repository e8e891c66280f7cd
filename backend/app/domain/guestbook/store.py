"""Store boundary for guestbook entries and its reference adapters."""

from __future__ import annotations

from itertools import count
from threading import RLock
from typing import Any, Dict, List, Mapping, Optional, Protocol

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Integer,
    MetaData,
    Table,
    Text,
    delete,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Connection, Engine

from ...config import Settings, load_settings
from ...infra.db import engine_for, get_engine
from ...infra.logging import get_logger
from ...infra.metrics import get_metrics_client
from .models import GuestbookEntry, IdentityAlreadyAssigned

__all__ = [
    "ENTRIES_TABLE_NAME",
    "GuestbookStore",
    "InMemoryGuestbookStore",
    "SqlGuestbookStore",
    "build_guestbook_store",
    "guestbook_entries_table",
]

ENTRIES_TABLE_NAME = "guestbook_entries"

logger = get_logger(__name__)
metrics = get_metrics_client()


def guestbook_entries_table(metadata: MetaData) -> Table:
    """Describe the entries table on ``metadata``; mirrors the initial migration."""

    return Table(
        ENTRIES_TABLE_NAME,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", Text, nullable=False),
        Column("text", Text, nullable=False),
        Column("submitted_at", DateTime(timezone=False), nullable=False),
        Column("birth", Date, nullable=False),
    )


class GuestbookStore(Protocol):  # pragma: no cover - interface only
    """Persistence collaborator that owns entry identities."""

    def save(self, entry: GuestbookEntry) -> GuestbookEntry: ...

    def get_entry(self, entry_id: int) -> GuestbookEntry: ...

    def list_entries(self) -> List[GuestbookEntry]: ...

    def delete_entry(self, entry_id: int) -> GuestbookEntry: ...


class InMemoryGuestbookStore(GuestbookStore):
    """Dictionary-backed store used for local development and tests."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._entries: Dict[int, GuestbookEntry] = {}
        self._ids = count(1)

    def save(self, entry: GuestbookEntry) -> GuestbookEntry:
        _ensure_persistable(entry)
        with self._lock:
            stored = entry.with_identity(next(self._ids))
            self._entries[stored.entry_id] = stored
            total = len(self._entries)
        _record_saved(stored, total)
        return stored

    def get_entry(self, entry_id: int) -> GuestbookEntry:
        with self._lock:
            entry = self._entries.get(entry_id)
        if entry is None:
            raise KeyError(f"Entry {entry_id} not found")
        return entry

    def list_entries(self) -> List[GuestbookEntry]:
        with self._lock:
            entries = list(self._entries.values())
        return sorted(entries, key=lambda item: (item.submitted_at, item.entry_id))

    def delete_entry(self, entry_id: int) -> GuestbookEntry:
        with self._lock:
            entry = self._entries.pop(entry_id, None)
            total = len(self._entries)
        if entry is None:
            raise KeyError(f"Entry {entry_id} not found")
        _record_deleted(entry_id, total)
        return entry


class SqlGuestbookStore(GuestbookStore):
    """SQLAlchemy-backed adapter persisting entries to ``guestbook_entries``."""

    def __init__(
        self,
        engine: Optional[Engine] = None,
        *,
        table: Optional[Table] = None,
    ) -> None:
        self._engine = engine or get_engine()
        if table is not None:
            self._entries = table
        else:
            self._entries = Table(
                ENTRIES_TABLE_NAME, MetaData(), autoload_with=self._engine
            )

    def save(self, entry: GuestbookEntry) -> GuestbookEntry:
        _ensure_persistable(entry)
        stmt = insert(self._entries).values(
            name=entry.name,
            text=entry.text,
            submitted_at=entry.submitted_at,
            birth=entry.birth,
        )
        with self._engine.begin() as conn:
            result = conn.execute(stmt)
            new_id = result.inserted_primary_key[0]
            total = self._count(conn)
        stored = entry.with_identity(int(new_id))
        _record_saved(stored, total)
        return stored

    def get_entry(self, entry_id: int) -> GuestbookEntry:
        with self._engine.begin() as conn:
            row = self._fetch_entry(conn, entry_id)
        return _row_to_entry(row)

    def list_entries(self) -> List[GuestbookEntry]:
        table = self._entries
        stmt = select(table).order_by(table.c.submitted_at.asc(), table.c.id.asc())
        with self._engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [_row_to_entry(row) for row in rows]

    def delete_entry(self, entry_id: int) -> GuestbookEntry:
        table = self._entries
        with self._engine.begin() as conn:
            row = self._fetch_entry(conn, entry_id)
            conn.execute(delete(table).where(table.c.id == entry_id))
            total = self._count(conn)
        _record_deleted(entry_id, total)
        return _row_to_entry(row)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _fetch_entry(self, conn: Connection, entry_id: int) -> Mapping[str, Any]:
        stmt = select(self._entries).where(self._entries.c.id == entry_id)
        row = conn.execute(stmt).mappings().first()
        if row is None:
            raise KeyError(f"Entry {entry_id} not found")
        return row

    def _count(self, conn: Connection) -> int:
        stmt = select(func.count()).select_from(self._entries)
        return int(conn.execute(stmt).scalar_one())


def build_guestbook_store(
    settings: Optional[Settings] = None,
    *,
    engine: Optional[Engine] = None,
) -> GuestbookStore:
    """Factory returning the store backend selected by configuration."""

    settings = settings or load_settings()
    backend = settings.store.backend
    if backend == "memory":
        return InMemoryGuestbookStore()
    if backend != "sql":
        raise ValueError(f"Unknown guestbook store backend: {backend}")

    try:
        return SqlGuestbookStore(engine or engine_for(settings.database_url))
    except Exception:
        if not settings.store.fallback_to_memory:
            raise
        logger.warning(
            "sql_guestbook_store_unavailable_falling_back",
            exc_info=True,
        )
    return InMemoryGuestbookStore()


def _ensure_persistable(entry: GuestbookEntry) -> None:
    if entry.entry_id is not None:
        raise IdentityAlreadyAssigned(entry.entry_id)
    missing = [
        name
        for name in ("name", "text", "submitted_at", "birth")
        if getattr(entry, name) is None
    ]
    if missing:
        raise ValueError(f"Cannot persist entry with unset fields: {missing}")


def _record_saved(entry: GuestbookEntry, total: int) -> None:
    metrics.increment("guestbook.entries_saved")
    metrics.gauge("guestbook.entries_total", total)
    logger.info("guestbook_entry_saved", extra={"entry_id": entry.entry_id})


def _record_deleted(entry_id: int, total: int) -> None:
    metrics.increment("guestbook.entries_deleted")
    metrics.gauge("guestbook.entries_total", total)
    logger.info("guestbook_entry_deleted", extra={"entry_id": entry_id})


def _row_to_entry(row: Mapping[str, Any]) -> GuestbookEntry:
    return GuestbookEntry.rehydrate(
        entry_id=row["id"],
        name=row["name"],
        text=row["text"],
        submitted_at=row["submitted_at"],
        birth=row["birth"],
    )
