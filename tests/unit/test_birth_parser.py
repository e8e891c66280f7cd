"""Tests for the birth-date parser."""

from __future__ import annotations

from datetime import date

import pytest

from backend.app.domain.guestbook.birth import BIRTH_SENTINEL, parse_birth

pytestmark = [pytest.mark.guestbook]


def test_sentinel_is_first_of_january_1899():
    assert BIRTH_SENTINEL == date(1899, 1, 1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1.2.2020", date(2020, 2, 1)),
        ("01-02-2020", date(2020, 2, 1)),
        ("10.12.1815", date(1815, 12, 10)),
        ("10-12-1815", date(1815, 12, 10)),
        ("29.2.2024", date(2024, 2, 29)),
        ("1.1.1", date(1, 1, 1)),
        ("31.12.9999", date(9999, 12, 31)),
        ("1.2-2020", date(2020, 2, 1)),
        ("+1.+2.+2020", date(2020, 2, 1)),
        ("1.2.2020.", date(2020, 2, 1)),
        ("1.2.2020..", date(2020, 2, 1)),
        ("1-2-2020-", date(2020, 2, 1)),
    ],
)
def test_parse_birth_accepts_day_month_year(raw, expected):
    assert parse_birth(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "2020",
        "1.2",
        "1.2.3.4",
        "1/2/2020",
        "aa.bb.cccc",
        "1..2020",
        "..",
        "31.2.2020",
        "29.2.2023",
        "31.4.2020",
        "0.1.2020",
        "1.0.2020",
        "1.13.2020",
        "2020-02-01",
        "1.1.0",
        "1.1.10000",
        "1.1.99999999999999999999",
        "1.2.2020\n",
        "1,5.2.2020",
    ],
)
def test_parse_birth_falls_back_to_sentinel(raw):
    assert parse_birth(raw) == BIRTH_SENTINEL


def test_parse_birth_never_sees_negative_numbers():
    # '-' is a separator, so a sign produces an empty component instead.
    assert parse_birth("-1.2.2020") == BIRTH_SENTINEL
    assert parse_birth("1.-2.2020") == BIRTH_SENTINEL


def test_parse_birth_does_not_trim_components():
    assert parse_birth(" 1 . 2 . 2020") == BIRTH_SENTINEL
    assert parse_birth("1.2.2020 ") == BIRTH_SENTINEL


def test_parse_birth_keeps_two_digit_years_literal():
    assert parse_birth("1.1.99") == date(99, 1, 1)


def test_parse_birth_sentinel_text_round_trips():
    assert parse_birth("1.1.1899") == BIRTH_SENTINEL
    assert parse_birth("01-01-1899") == BIRTH_SENTINEL


@pytest.mark.parametrize("separator", [".", "-"])
@pytest.mark.parametrize(
    "value",
    [date(2000, 2, 29), date(1970, 1, 1), date(1815, 12, 10), date(12, 7, 3)],
)
def test_parse_birth_round_trips_formatted_dates(separator, value):
    raw = separator.join(str(part) for part in (value.day, value.month, value.year))

    assert parse_birth(raw) == value


def test_parse_birth_drops_only_trailing_empty_components():
    assert parse_birth("1.2.2020.-.") == date(2020, 2, 1)
    assert parse_birth(".1.2.2020") == BIRTH_SENTINEL
    assert parse_birth("1..2020.") == BIRTH_SENTINEL
    assert parse_birth("1.2.") == BIRTH_SENTINEL
    assert parse_birth("...") == BIRTH_SENTINEL
