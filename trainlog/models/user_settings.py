"""
User settings model.

One record per store by convention only.  Duplicates can appear (two
writers seeding defaults at once, a sync merge) and are collapsed by
:func:`trainlog.sync.reconcile.collapse_settings`.
"""

import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from trainlog.models.base import new_id, utcnow

POUNDS_TO_KILOGRAMS = 0.45359237


class WeightUnit(str, Enum):
    """Display unit for weights.  Storage is always kilograms."""

    KG = "kg"
    LB = "lb"

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> "WeightUnit":
        """Parse a stored code, falling back to kilograms for unknown codes."""
        try:
            return cls(raw)
        except ValueError:
            return cls.KG

    def to_kilograms(self, value: float) -> float:
        return value * POUNDS_TO_KILOGRAMS if self is WeightUnit.LB else value


class UserSettings(SQLModel, table=True):
    __tablename__ = "user_settings"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    weight_unit_raw: str = Field(default=WeightUnit.KG.value, max_length=20)
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)

    @property
    def weight_unit(self) -> WeightUnit:
        return WeightUnit.from_raw(self.weight_unit_raw)
