"""CSV export of logbook rows."""

import csv
import io
from collections.abc import Collection, Iterable
from datetime import date

from fuel_logbook.domain.entries import GAS, LogEntry
from fuel_logbook.services.months import DEFAULT_LOCALE, month_label

EXPORT_COLUMNS = [
    "Date",
    "Type",
    "Odometer (km)",
    "Quantity",
    "Unit",
    "Total Cost",
    "Unit Price",
]


def export_rows(rows: Iterable[LogEntry]) -> list[LogEntry]:
    """Return rows in chronological order, by date then odometer."""
    return sorted(rows, key=lambda entry: (entry.date, entry.odometer))


def render_csv(rows: Iterable[LogEntry]) -> str:
    """Render rows as CSV text, oldest first."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for entry in export_rows(rows):
        writer.writerow(
            [
                entry.date.strftime("%d/%m/%Y"),
                "Gasoline" if entry.type == GAS else "Electric",
                f"{entry.odometer:g}",
                f"{entry.amount:g}",
                "Liters" if entry.type == GAS else "kWh",
                f"{entry.cost:.2f}",
                f"{entry.price_per_unit:.3f}",
            ]
        )
    return output.getvalue()


def export_filename(
    selected_months: Collection[str],
    today: date,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Return the download filename for a month selection."""
    if not selected_months:
        return f"Fuel_Report_{today.isoformat()}.csv"
    ordered = sorted(selected_months)
    if len(ordered) == 1:
        label = month_label(ordered[0], locale).replace(" ", "_")
        return f"Fuel_Report_{label}.csv"
    return f"Fuel_Report_{ordered[0]}_{ordered[-1]}.csv"
