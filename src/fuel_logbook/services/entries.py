"""Entry store service for logbook entries."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from fuel_logbook.domain.entries import GAS, EntryDraft, EntryType, LogEntry, PriceMode
from fuel_logbook.services.stats import sort_entries

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for the whole entry sequence."""

    def list_all(self) -> list[LogEntry]:
        """Return all stored entries, or an empty list."""

    def replace_all(self, entries: list[LogEntry]) -> None:
        """Replace the stored sequence with the given entries."""


def default_price_mode(entry_type: EntryType) -> PriceMode:
    """Return how the cost input is read for an entry type."""
    return "total" if entry_type == GAS else "unit"


def derive_pricing(
    amount: float, cost_input: float, price_mode: PriceMode
) -> tuple[float, float]:
    """Return (total cost, unit price) from the entered cost figure."""
    if price_mode == "total":
        price_per_unit = cost_input / amount if amount > 0 else 0.0
        return cost_input, price_per_unit
    return amount * cost_input, cost_input


@dataclass
class EntryService:
    """Application service for creating, editing and listing entries."""

    repository: EntryRepository

    def list_entries(self) -> list[LogEntry]:
        """Return all entries sorted by odometer, highest first."""
        return self._load() or []

    def get_entry(self, entry_id: str) -> LogEntry | None:
        """Return an entry by id, if present."""
        for entry in self.list_entries():
            if entry.id == entry_id:
                return entry
        return None

    def create_entry(self, draft: EntryDraft) -> LogEntry:
        """Price the draft, store it and return the new entry.

        When the stored sequence cannot be read the entry is returned but not
        written, so a failed read never overwrites existing data.
        """
        entry = _build_entry(str(uuid4()), draft)
        entries = self._load()
        if entries is None:
            logger.warning(
                "Skipping save of new logbook entry", extra={"entry_id": entry.id}
            )
            return entry
        self._save([*entries, entry])
        logger.info(
            "Logbook entry created",
            extra={"entry_id": entry.id, "entry_type": entry.type},
        )
        return entry

    def update_entry(self, entry_id: str, draft: EntryDraft) -> LogEntry | None:
        """Replace an entry's fields, keeping its id."""
        entries = self._load() or []
        if not any(entry.id == entry_id for entry in entries):
            return None
        updated = _build_entry(entry_id, draft)
        self._save([updated if entry.id == entry_id else entry for entry in entries])
        return updated

    def delete_entry(self, entry_id: str) -> bool:
        """Remove an entry and return whether it existed."""
        entries = self._load() or []
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._save(remaining)
        return True

    def _load(self) -> list[LogEntry] | None:
        """Return the sorted entries, or None when storage cannot be read."""
        try:
            entries = self.repository.list_all()
        except Exception:
            logger.exception("Failed to load logbook entries")
            return None
        return sort_entries(entries)

    def _save(self, entries: list[LogEntry]) -> None:
        try:
            self.repository.replace_all(sort_entries(entries))
        except Exception:
            logger.exception("Failed to save logbook entries")


def _build_entry(entry_id: str, draft: EntryDraft) -> LogEntry:
    price_mode = draft.price_mode or default_price_mode(draft.type)
    cost, price_per_unit = derive_pricing(draft.amount, draft.cost_input, price_mode)
    return LogEntry(
        id=entry_id,
        date=draft.date,
        type=draft.type,
        odometer=draft.odometer,
        amount=draft.amount,
        cost=cost,
        price_per_unit=price_per_unit,
        note=draft.note,
    )

