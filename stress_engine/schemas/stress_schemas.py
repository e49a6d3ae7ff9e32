# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
import math
from datetime import datetime, timezone
from typing import Any, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RiskLevel(str, enum.Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class MoneyPersonality(str, enum.Enum):
    balanced = "Balanced"
    stress_spender = "Stress Spender"
    anxious_saver = "Anxious Saver"
    impulsive = "Impulsive"
    new_user = "New User"


def to_naive_utc(value: datetime) -> datetime:
    # Firestore hands back aware timestamps, SQL rows are naive UTC
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class UserRecord(BaseModel):
    id: str
    role: Optional[str] = None
    university_id: Optional[str] = None


class ProfileRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stress_triggers: List[str] = Field(default_factory=list, alias="stressTriggers")

    @field_validator("stress_triggers", mode="before")
    @classmethod
    def default_triggers(cls, value: Any):
        return value or []


class MoodEntryRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mood: Optional[str] = None
    money_mood: Optional[str] = Field(default=None, alias="money")
    money_caused_stress: bool = Field(default=False, alias="moneyCausedStress")
    time: datetime

    @field_validator("money_caused_stress", mode="before")
    @classmethod
    def truthy_flag(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class SpendingEntryRecord(BaseModel):
    """
    A spending entry with the two legacy planned flags ("isPlanned" and
    "planned") collapsed into a single ``unplanned`` boolean. Only an
    explicit False in either field marks the entry as unplanned.
    """
    model_config = ConfigDict(frozen=True)

    amount: float = 0.0
    unplanned: bool = False
    time: datetime

    @model_validator(mode="before")
    @classmethod
    def collapse_planned_flags(cls, data: Any):
        if not isinstance(data, dict) or "unplanned" in data:
            return data
        data = dict(data)
        is_planned = data.pop("isPlanned", data.pop("is_planned", None))
        planned = data.pop("planned", None)
        data["unplanned"] = is_planned is False or planned is False
        return data

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return 0.0
        if math.isnan(value):
            return 0.0
        return float(value)

    @field_validator("time")
    @classmethod
    def normalize_time(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class StressInputs(NamedTuple):
    user: UserRecord
    profile: ProfileRecord
    mood_entries: List[MoodEntryRecord]
    spending_entries: List[SpendingEntryRecord]


class StressSummaryRecord(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    financial_stress_index: float = Field(ge=0, le=100)
    risk_level: RiskLevel
    money_personality: MoneyPersonality
    trigger_types: List[str] = Field(default_factory=list)
    predicted_risk_window: Optional[str] = None

    def to_fields(self) -> dict:
        """Column-style field mapping used for merge-writes."""
        return self.model_dump()


class RecalculateResponse(BaseModel):
    success: bool
    financialStressIndex: float
