"""Statistics engine for logbook entries.

All functions here are pure: they take the entry sequence as an argument,
never touch storage and never raise for odd data. Entries are expected
newest-first by odometer; every entry point re-applies that ordering with a
stable sort, so correctly ordered input passes through unchanged.
"""

from collections import defaultdict
from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass

from fuel_logbook.domain.entries import ELECTRIC, GAS, LogEntry
from fuel_logbook.domain.stats import ChartPoint, FilteredView, MonthlyStats, Stats
from fuel_logbook.services.months import DEFAULT_LOCALE, month_label

MIN_GLOBAL_ENTRIES = 2
MIN_CHART_MONTHS = 2


def sort_entries(entries: Iterable[LogEntry]) -> list[LogEntry]:
    """Return entries ordered by odometer, highest reading first."""
    return sorted(entries, key=lambda entry: entry.odometer, reverse=True)


def global_stats(entries: Sequence[LogEntry]) -> Stats | None:
    """Return rolling statistics over the whole logbook.

    The oldest reading only anchors the distance interval; its cost and
    volume were spent before the interval started and are left out.
    """
    ordered = sort_entries(entries)
    if len(ordered) < MIN_GLOBAL_ENTRIES:
        return None

    total_distance = ordered[0].odometer - ordered[-1].odometer
    if total_distance <= 0:
        return None

    active = ordered[:-1]
    total_cost = sum(entry.cost for entry in active)
    electric_cost = sum(entry.cost for entry in active if entry.type == ELECTRIC)
    return _build_stats(
        total_distance=total_distance,
        total_cost=total_cost,
        total_gas_volume=_volume(active, GAS),
        total_elec_volume=_volume(active, ELECTRIC),
        electric_cost=electric_cost,
    )


def monthly_stats(
    entries: Sequence[LogEntry], locale: str = DEFAULT_LOCALE
) -> list[MonthlyStats]:
    """Return per-month totals, newest month first.

    A month's distance runs from the highest reading of the previous month
    that has data to its own highest reading. The earliest month has no
    such reference and falls back to its own lowest reading.
    """
    groups: dict[str, list[LogEntry]] = defaultdict(list)
    for entry in sort_entries(entries):
        groups[entry.month_key].append(entry)

    month_keys = sorted(groups, reverse=True)
    results: list[MonthlyStats] = []
    for index, month_key in enumerate(month_keys):
        current = groups[month_key]
        max_current = max(entry.odometer for entry in current)
        if index + 1 < len(month_keys):
            previous = groups[month_keys[index + 1]]
            previous_max = max(entry.odometer for entry in previous)
        else:
            previous_max = min(entry.odometer for entry in current)

        distance = max_current - previous_max
        total_cost = sum(entry.cost for entry in current)
        results.append(
            MonthlyStats(
                month_key=month_key,
                label=month_label(month_key, locale),
                total_cost=total_cost,
                total_distance=distance,
                cost_per_100km=(total_cost / distance) * 100 if distance > 0 else 0,
                gas_volume=_volume(current, GAS),
                elec_volume=_volume(current, ELECTRIC),
            )
        )
    return results


def filtered_view(
    entries: Sequence[LogEntry],
    selected_months: Collection[str],
    locale: str = DEFAULT_LOCALE,
) -> FilteredView:
    """Return stats, monthly breakdown and rows for a month selection.

    An empty selection means all data. Otherwise the aggregate is built from
    the already attributed monthly figures, since filtering raw entries
    would lose the baseline reading carried over from earlier months.
    """
    ordered = sort_entries(entries)
    monthly = monthly_stats(ordered, locale)
    if not selected_months:
        return FilteredView(stats=global_stats(ordered), monthly=monthly, rows=ordered)

    selected = [month for month in monthly if month.month_key in selected_months]
    if not selected:
        return FilteredView(stats=None, monthly=[], rows=[])

    rows = [entry for entry in ordered if entry.month_key in selected_months]
    electric_cost = sum(entry.cost for entry in rows if entry.type == ELECTRIC)
    stats = _build_stats(
        total_distance=sum(month.total_distance for month in selected),
        total_cost=sum(month.total_cost for month in selected),
        total_gas_volume=sum(month.gas_volume for month in selected),
        total_elec_volume=sum(month.elec_volume for month in selected),
        electric_cost=electric_cost,
    )
    return FilteredView(stats=stats, monthly=selected, rows=rows)


def available_months(entries: Iterable[LogEntry]) -> list[str]:
    """Return the distinct month keys present in the data, newest first."""
    return sorted({entry.month_key for entry in entries}, reverse=True)


def chart_points(monthly: Sequence[MonthlyStats]) -> list[ChartPoint]:
    """Return chronological chart points, or nothing for a single month."""
    if len(monthly) < MIN_CHART_MONTHS:
        return []
    points = []
    for month in reversed(monthly):
        distance = month.total_distance
        points.append(
            ChartPoint(
                name=month.label.split(" ")[0][:3],
                full_label=month.label,
                cost=month.total_cost,
                distance=distance,
                gas_consumption=_per_100(month.gas_volume, distance),
                elec_consumption=_per_100(month.elec_volume, distance),
            )
        )
    return points


@dataclass
class StatsService:
    """Service exposing the statistics engine to the API layer."""

    locale: str = DEFAULT_LOCALE

    def get_view(
        self, entries: Sequence[LogEntry], selected_months: Collection[str]
    ) -> FilteredView:
        """Return the filtered view for a month selection."""
        return filtered_view(entries, selected_months, self.locale)

    def get_months(self, entries: Sequence[LogEntry]) -> list[tuple[str, str]]:
        """Return available month keys with their labels."""
        return [
            (month_key, month_label(month_key, self.locale))
            for month_key in available_months(entries)
        ]


def _volume(entries: Iterable[LogEntry], entry_type: str) -> float:
    return sum(entry.amount for entry in entries if entry.type == entry_type)


def _per_100(value: float, distance: float) -> float:
    return (value / distance) * 100 if distance > 0 else 0


def _build_stats(
    *,
    total_distance: float,
    total_cost: float,
    total_gas_volume: float,
    total_elec_volume: float,
    electric_cost: float,
) -> Stats:
    """Derive the per-distance ratios, defaulting to zero on empty denominators."""
    return Stats(
        total_distance=total_distance,
        total_cost=total_cost,
        total_gas_volume=total_gas_volume,
        total_elec_volume=total_elec_volume,
        cost_per_100km=_per_100(total_cost, total_distance),
        cost_per_km=total_cost / total_distance if total_distance > 0 else 0,
        gas_consumption=_per_100(total_gas_volume, total_distance),
        elec_consumption=_per_100(total_elec_volume, total_distance),
        percentage_electric_cost=(
            (electric_cost / total_cost) * 100 if total_cost > 0 else 0
        ),
    )
