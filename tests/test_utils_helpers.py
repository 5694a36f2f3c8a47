"""Coverage-oriented tests for utils.helpers functions."""

from __future__ import annotations

import datetime as dt

from utils import helpers


def test_format_mention_and_roles() -> None:
    assert helpers.format_mention("1001") == "<@1001>"
    assert helpers.format_roles({"mod", "admin"}) == "admin, mod"
    assert helpers.format_roles([]) == "-"


def test_parse_roles_ignores_blanks() -> None:
    assert helpers.parse_roles("admin, family,,") == frozenset({"admin", "family"})
    assert helpers.parse_roles(None) == frozenset()
    assert helpers.parse_roles("") == frozenset()


def test_mask_secret() -> None:
    assert helpers.mask_secret("abcdef") == "ab****"
    assert helpers.mask_secret("ab") == "**"
    assert helpers.mask_secret("") == ""


def test_format_timestamp_handles_epoch_and_strings() -> None:
    epoch = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc).timestamp()
    formatted = helpers.format_timestamp(epoch)
    assert formatted.startswith("2024-01-01 00:00:00")
    assert formatted.endswith("UTC")

    assert helpers.format_timestamp(str(int(epoch))).startswith("2024-01-01")
    assert helpers.format_timestamp("yesterday") == "yesterday"
    assert helpers.format_timestamp(None) == "-"


def test_format_timestamp_converts_timezone() -> None:
    epoch = dt.datetime(2024, 7, 1, 12, tzinfo=dt.timezone.utc).timestamp()
    assert "14:00:00" in helpers.format_timestamp(epoch, timezone="Europe/Warsaw")
    assert helpers.format_timestamp(epoch, timezone="Not/AZone") == str(epoch)
