"""Month key helpers and localized month labels."""

import re

DEFAULT_LOCALE = "en"

MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "en": (
        "january",
        "february",
        "march",
        "april",
        "may",
        "june",
        "july",
        "august",
        "september",
        "october",
        "november",
        "december",
    ),
    "it": (
        "gennaio",
        "febbraio",
        "marzo",
        "aprile",
        "maggio",
        "giugno",
        "luglio",
        "agosto",
        "settembre",
        "ottobre",
        "novembre",
        "dicembre",
    ),
}

_MONTH_KEY_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def is_month_key(value: str) -> bool:
    """Return true when the value is a YYYY-MM month key."""
    return bool(_MONTH_KEY_RE.match(value))


def month_label(month_key: str, locale: str = DEFAULT_LOCALE) -> str:
    """Render a month key as a capitalized "Month Year" label."""
    names = MONTH_NAMES.get(locale, MONTH_NAMES[DEFAULT_LOCALE])
    year, month = month_key.split("-", maxsplit=1)
    label = f"{names[int(month) - 1]} {year}"
    return label[:1].upper() + label[1:]


def parse_month_filter(raw: list[str] | str | None) -> set[str]:
    """Normalize repeated or comma separated month keys into a set.

    Raises ValueError for any chunk that is not a YYYY-MM key.
    """
    if raw is None:
        return set()
    values = [raw] if isinstance(raw, str) else raw
    selected: set[str] = set()
    for value in values:
        for chunk in value.split(","):
            cleaned = chunk.strip()
            if not cleaned:
                continue
            if not is_month_key(cleaned):
                raise ValueError(f"Invalid month key: {cleaned!r}")
            selected.add(cleaned)
    return selected
