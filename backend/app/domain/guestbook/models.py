"""Guestbook entry value object."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional

from .birth import parse_birth

__all__ = [
    "GuestbookEntry",
    "IdentityAlreadyAssigned",
    "InvalidInput",
    "now",
]


def now() -> datetime:
    """Return the local wall-clock time used to stamp new entries."""

    return datetime.now()


class InvalidInput(ValueError):
    """Raised when a required text field is missing or blank."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field.capitalize()} must not be null or empty!")
        self.field = field


class IdentityAlreadyAssigned(RuntimeError):
    """Raised when a store tries to assign an identity a second time."""

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"Entry already has identity {entry_id}")
        self.entry_id = entry_id


def _require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(field)
    return value


@dataclass(frozen=True)
class GuestbookEntry:
    """A single guestbook record: who wrote what, when, and their birth date.

    Instances are immutable. The only field that changes over an entry's
    life is ``entry_id``, which a store sets exactly once through
    :meth:`with_identity`.
    """

    entry_id: Optional[int] = None
    name: Optional[str] = None
    text: Optional[str] = None
    submitted_at: Optional[datetime] = None
    birth: Optional[date] = None

    @classmethod
    def new(cls, name: str, text: str, birth: str) -> "GuestbookEntry":
        """Validate user input and build an unsaved entry.

        ``name`` and ``text`` are stored verbatim; ``birth`` goes through
        :func:`parse_birth` and silently falls back to the sentinel date.
        """

        _require_text("name", name)
        _require_text("text", text)
        _require_text("birth", birth)

        return cls(
            entry_id=None,
            name=name,
            text=text,
            submitted_at=now(),
            birth=parse_birth(birth),
        )

    @classmethod
    def empty(cls) -> "GuestbookEntry":
        """Placeholder with every field unset, for persistence reconstitution only."""

        return cls()

    @classmethod
    def rehydrate(
        cls,
        *,
        entry_id: Optional[int],
        name: Optional[str],
        text: Optional[str],
        submitted_at: Optional[datetime],
        birth: Optional[date],
    ) -> "GuestbookEntry":
        """Rebuild a stored entry from its persisted fields without validation."""

        return cls(
            entry_id=entry_id,
            name=name,
            text=text,
            submitted_at=submitted_at,
            birth=birth,
        )

    @property
    def has_identity(self) -> bool:
        return self.entry_id is not None

    def with_identity(self, entry_id: int) -> "GuestbookEntry":
        """Return a copy carrying the store-assigned identity."""

        if self.entry_id is not None:
            raise IdentityAlreadyAssigned(self.entry_id)
        return replace(self, entry_id=entry_id)
