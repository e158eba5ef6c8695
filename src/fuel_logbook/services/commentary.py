"""Natural-language commentary on driving statistics using LLMs."""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from fuel_logbook.domain.entries import LogEntry
from fuel_logbook.domain.stats import Stats

logger = logging.getLogger(__name__)

MIN_ENTRIES = 3
SAMPLE_SIZE = 10
HIGH_COST_PER_100KM = 10
LOW_COST_PER_100KM = 6

NOT_CONFIGURED_MESSAGE = (
    "Commentary is not configured. Set an OpenAI API key to get driving tips."
)
NOT_ENOUGH_DATA_MESSAGE = (
    "Not enough data for a proper analysis yet. "
    "Add at least 3 refuels or recharges."
)
EMPTY_RESPONSE_MESSAGE = "Analysis complete, but no text was returned."
UNAVAILABLE_MESSAGE = "Driving commentary is unavailable right now."


class CommentaryClient(Protocol):
    """Interface for LLM text generation."""

    async def generate(self, *, model: str, store: bool, prompt: str) -> str:
        """Return generated text for a prompt."""


@dataclass
class CommentaryService:
    """Service that turns statistics into short driving feedback."""

    client: CommentaryClient | None
    model: str
    store: bool = False
    sample_size: int = SAMPLE_SIZE

    async def analyze(self, entries: Sequence[LogEntry], stats: Stats | None) -> str:
        """Return feedback text, or a fallback message when it can't be produced."""
        if self.client is None:
            return NOT_CONFIGURED_MESSAGE
        if stats is None or len(entries) < MIN_ENTRIES:
            return NOT_ENOUGH_DATA_MESSAGE

        prompt = build_prompt(stats, entries[: self.sample_size])
        try:
            text = await self.client.generate(
                model=self.model, store=self.store, prompt=prompt
            )
        except Exception:
            logger.exception("Commentary generation failed")
            return UNAVAILABLE_MESSAGE
        return text.strip() or EMPTY_RESPONSE_MESSAGE


def build_prompt(stats: Stats, recent: Sequence[LogEntry]) -> str:
    """Build the analysis prompt from stats and a sample of recent entries."""
    sample = [
        {
            "d": entry.date.isoformat(),
            "t": entry.type,
            "odo": entry.odometer,
            "c": entry.cost,
            "amt": entry.amount,
        }
        for entry in recent
    ]
    return (
        "Act as an engineer who knows plug-in hybrid cars well. "
        "Analyze this driving and refueling data.\n\n"
        "Current statistics:\n"
        f"- Cost per 100 km: {stats.cost_per_100km:.2f}\n"
        f"- Fuel consumption: {stats.gas_consumption:.1f} L/100km\n"
        f"- Electric consumption: {stats.elec_consumption:.1f} kWh/100km\n"
        f"- Electric share of spending: {stats.percentage_electric_cost:.0f}%\n"
        f"- Total tracked distance: {stats.total_distance:g} km\n\n"
        f"Latest {len(sample)} entries (simplified JSON):\n"
        f"{json.dumps(sample)}\n\n"
        "Give short, direct and useful feedback (max 3 sentences) on how the "
        "driver is using the plug-in hybrid. "
        f"If the cost per 100 km is high (>{HIGH_COST_PER_100KM}), suggest "
        "charging more. "
        f"If it is low (<{LOW_COST_PER_100KM}), compliment the driver. "
        "Use a sporty, technical, direct tone. Plain text only, no markdown."
    )
