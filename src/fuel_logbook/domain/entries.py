"""Domain models for logbook entries."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

EntryType = Literal["gas", "electric"]
PriceMode = Literal["total", "unit"]

GAS: EntryType = "gas"
ELECTRIC: EntryType = "electric"


@dataclass(frozen=True)
class LogEntry:
    """A single refueling or recharging event."""

    id: str
    date: date
    type: EntryType
    odometer: float
    amount: float
    cost: float
    price_per_unit: float
    note: str | None = None

    @property
    def month_key(self) -> str:
        """Return the YYYY-MM key used to group entries by month."""
        return self.date.isoformat()[:7]


@dataclass(frozen=True)
class EntryDraft:
    """User input for creating or editing an entry, before pricing."""

    date: date
    type: EntryType
    odometer: float
    amount: float
    cost_input: float
    price_mode: PriceMode | None = None
    note: str | None = None
