"""Supabase repository storing the logbook as a single key-value row."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from fuel_logbook.domain.entries import LogEntry
from fuel_logbook.services.entries import EntryRepository


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation keeping all entries under one storage key."""

    client: Client
    table: str
    storage_key: str

    def list_all(self) -> list[LogEntry]:
        """Return the stored entries, or an empty list when none are saved."""
        response = (
            self.client.table(self.table)
            .select("payload")
            .eq("key", self.storage_key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return []
        payload = response.data[0].get("payload") or []
        return [_parse_entry(row) for row in payload]

    def replace_all(self, entries: list[LogEntry]) -> None:
        """Overwrite the stored sequence with the given entries."""
        self.client.table(self.table).upsert(
            {
                "key": self.storage_key,
                "payload": [_serialize_entry(entry) for entry in entries],
            },
            on_conflict="key",
        ).execute()


def _serialize_entry(entry: LogEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "type": entry.type,
        "odometer": entry.odometer,
        "amount": entry.amount,
        "cost": entry.cost,
        "pricePerUnit": entry.price_per_unit,
        "note": entry.note,
    }


def _parse_entry(row: dict[str, object]) -> LogEntry:
    return LogEntry(
        id=str(row["id"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        type="electric" if row.get("type") == "electric" else "gas",
        odometer=float(row.get("odometer", 0.0)),
        amount=float(row.get("amount", 0.0)),
        cost=float(row.get("cost", 0.0)),
        price_per_unit=float(row.get("pricePerUnit", 0.0)),
        note=row.get("note") or None,
    )
