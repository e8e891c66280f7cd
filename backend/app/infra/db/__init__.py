"""Database connection helpers."""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ...config import load_settings


@lru_cache()
def engine_for(database_url: str) -> Engine:
    """Return a shared engine for ``database_url``, creating it on first use."""

    return create_engine(database_url, echo=False, future=True)


def get_engine() -> Engine:
    """Return the engine for the database URL of the active settings profile."""

    return engine_for(load_settings().database_url)
