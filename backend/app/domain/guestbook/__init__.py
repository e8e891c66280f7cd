"""Guestbook domain package."""

from .birth import BIRTH_SENTINEL, parse_birth
from .models import GuestbookEntry, IdentityAlreadyAssigned, InvalidInput
from .store import (
    GuestbookStore,
    InMemoryGuestbookStore,
    SqlGuestbookStore,
    build_guestbook_store,
)

__all__ = [
    "BIRTH_SENTINEL",
    "GuestbookEntry",
    "GuestbookStore",
    "IdentityAlreadyAssigned",
    "InMemoryGuestbookStore",
    "InvalidInput",
    "SqlGuestbookStore",
    "build_guestbook_store",
    "parse_birth",
]
