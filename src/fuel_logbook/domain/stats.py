"""Domain models for statistics."""

from dataclasses import dataclass, field

from fuel_logbook.domain.entries import LogEntry


@dataclass(frozen=True)
class Stats:
    """Cost and consumption figures over a distance interval."""

    total_distance: float
    total_cost: float
    total_gas_volume: float
    total_elec_volume: float
    cost_per_100km: float
    cost_per_km: float
    gas_consumption: float
    elec_consumption: float
    percentage_electric_cost: float


@dataclass(frozen=True)
class MonthlyStats:
    """Totals attributed to one calendar month."""

    month_key: str
    label: str
    total_cost: float
    total_distance: float
    cost_per_100km: float
    gas_volume: float
    elec_volume: float


@dataclass(frozen=True)
class FilteredView:
    """Statistics, monthly breakdown and rows for a month selection."""

    stats: Stats | None
    monthly: list[MonthlyStats] = field(default_factory=list)
    rows: list[LogEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ChartPoint:
    """Chronological chart data for one month."""

    name: str
    full_label: str
    cost: float
    distance: float
    gas_consumption: float
    elec_consumption: float
