"""Tests for the Alembic migration creating the guestbook table."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
import sqlalchemy as sa
from alembic import command
from alembic.config import Config

from backend.app.domain.guestbook.models import GuestbookEntry
from backend.app.domain.guestbook.store import ENTRIES_TABLE_NAME, SqlGuestbookStore

pytestmark = [pytest.mark.store]

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "backend" / "migrations"


def _alembic_config(database_url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.set_main_option("sqlalchemy.url", database_url)
    return config


def test_upgrade_creates_table_usable_by_sql_store(tmp_path):
    database_url = f"sqlite+pysqlite:///{tmp_path / 'guestbook.db'}"
    command.upgrade(_alembic_config(database_url), "head")

    engine = sa.create_engine(database_url, future=True)
    inspector = sa.inspect(engine)
    columns = {col["name"] for col in inspector.get_columns(ENTRIES_TABLE_NAME)}
    assert columns == {"id", "name", "text", "submitted_at", "birth"}

    store = SqlGuestbookStore(engine)
    saved = store.save(GuestbookEntry.new("Eve", "Msg", "2020-02-01"))

    assert store.get_entry(saved.entry_id).birth == date(1899, 1, 1)
    engine.dispose()


def test_downgrade_drops_table(tmp_path):
    database_url = f"sqlite+pysqlite:///{tmp_path / 'guestbook.db'}"
    config = _alembic_config(database_url)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = sa.create_engine(database_url, future=True)
    assert ENTRIES_TABLE_NAME not in sa.inspect(engine).get_table_names()
    engine.dispose()
