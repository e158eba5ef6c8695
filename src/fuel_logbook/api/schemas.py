"""Pydantic models for API request payloads."""

import datetime as dt
import math
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

from fuel_logbook.domain.entries import EntryDraft
from fuel_logbook.services.entries import default_price_mode, derive_pricing


class EntryPayload(BaseModel):
    """Form data for a refuel or recharge.

    ``cost_input`` is the total cost or the unit price depending on
    ``price_mode``; when the mode is omitted gas entries take a total cost and
    electric entries a unit price.
    """

    date: dt.date
    type: Literal["gas", "electric"]
    odometer: float = Field(ge=0, allow_inf_nan=False)
    amount: float = Field(gt=0, allow_inf_nan=False)
    cost_input: float = Field(ge=0, allow_inf_nan=False)
    price_mode: Literal["total", "unit"] | None = None
    note: str | None = None

    @model_validator(mode="after")
    def check_derived_pricing(self) -> Self:
        """Reject inputs whose derived cost or unit price is not finite."""
        price_mode = self.price_mode or default_price_mode(self.type)
        cost, price_per_unit = derive_pricing(self.amount, self.cost_input, price_mode)
        if not (math.isfinite(cost) and math.isfinite(price_per_unit)):
            raise ValueError("Derived cost is out of range")
        return self

    def to_draft(self) -> EntryDraft:
        """Convert the payload into a domain draft."""
        return EntryDraft(
            date=self.date,
            type=self.type,
            odometer=self.odometer,
            amount=self.amount,
            cost_input=self.cost_input,
            price_mode=self.price_mode,
            note=self.note or None,
        )
