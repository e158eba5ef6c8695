"""Tests for month key helpers."""

import pytest

from fuel_logbook.services.months import is_month_key, month_label, parse_month_filter


def test_month_label_capitalizes() -> None:
    assert month_label("2023-11") == "November 2023"
    assert month_label("2023-11", "it") == "Novembre 2023"


def test_month_label_unknown_locale_falls_back_to_english() -> None:
    assert month_label("2024-05", "xx") == "May 2024"


def test_is_month_key() -> None:
    assert is_month_key("2024-01")
    assert not is_month_key("2024-13")
    assert not is_month_key("2024-1")
    assert not is_month_key("2024-01-05")


def test_parse_month_filter_accepts_lists_and_commas() -> None:
    assert parse_month_filter(None) == set()
    assert parse_month_filter("2024-01, 2024-02,") == {"2024-01", "2024-02"}
    assert parse_month_filter(["2024-03", "2024-01,2024-03"]) == {
        "2024-01",
        "2024-03",
    }


def test_parse_month_filter_rejects_bad_keys() -> None:
    with pytest.raises(ValueError, match="Invalid month key"):
        parse_month_filter(["2024-1"])
