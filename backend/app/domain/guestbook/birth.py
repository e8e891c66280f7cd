"""Birth-date parsing for hand-typed European day-month-year input."""

from __future__ import annotations

import re
from datetime import date

__all__ = [
    "BIRTH_SENTINEL",
    "parse_birth",
]

BIRTH_SENTINEL = date(1899, 1, 1)

_SEPARATORS = re.compile(r"[.\-]")
_INTEGER = re.compile(r"[+-]?\d+")


def parse_birth(value: str) -> date:
    """Parse ``dd.mm.yyyy`` / ``dd-mm-yyyy`` input into a calendar date.

    Never raises: anything that is not exactly three integer components
    forming a valid date maps to :data:`BIRTH_SENTINEL`. Components are not
    trimmed, so ``" 1.2.2020"`` is rejected, and two-digit years are kept
    literally (``"1.1.99"`` is year 99). Trailing separators are ignored
    (``"1.2.2020."`` parses); leading and interior ones are not.
    Years outside 1..9999 map to the sentinel because :class:`date` cannot
    hold them.
    """

    components = _SEPARATORS.split(value)
    while components and components[-1] == "":
        components.pop()
    if len(components) != 3:
        return BIRTH_SENTINEL

    numbers = []
    for component in components:
        if not _INTEGER.fullmatch(component):
            return BIRTH_SENTINEL
        numbers.append(int(component))

    day, month, year = numbers
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return BIRTH_SENTINEL
