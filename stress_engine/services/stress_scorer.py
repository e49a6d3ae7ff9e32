# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime
from typing import Optional

from stress_engine.schemas.stress_schemas import (
    MoneyPersonality,
    RiskLevel,
    StressInputs,
    StressSummaryRecord,
)

BASELINE_SCORE = 30.0
WINDOW_DAYS = 7
MIN_RECENCY_WEIGHT = 0.5

STRESSED_MOODS = {"Stressed", "Anxious"}
STRESSED_MONEY_MOODS = {"Worried", "Guilty"}

MOOD_WEIGHT = 10
MONEY_MOOD_WEIGHT = 15
MONEY_CAUSED_STRESS_WEIGHT = 20
UNPLANNED_SPEND_WEIGHT = 5

TRIGGER_BONUSES = {
    "Exams": 10,
    "Financial Insecurity": 15,
}

# (unplanned count must exceed, bonus)
FREQUENCY_BONUSES = [(5, 10), (10, 10)]

PREDICTED_RISK_WINDOW = "Next 3 Days"


def recency_weight(entry_time: datetime, now: datetime) -> float:
    """Linear decay from 1.0 for a fresh entry to a floor of 0.5 at a week old."""
    days_ago = (now - entry_time).total_seconds() / 86400
    return max(MIN_RECENCY_WEIGHT, 1 - days_ago / WINDOW_DAYS)


def classify_risk_level(score: float) -> RiskLevel:
    if score > 75:
        return RiskLevel.high
    if score > 40:
        return RiskLevel.medium
    return RiskLevel.low


def classify_money_personality(
    score: float,
    unplanned_spend: float,
    mood_count: int,
    spending_count: int,
) -> MoneyPersonality:
    # First match wins
    if unplanned_spend > 1000 and score > 60:
        return MoneyPersonality.stress_spender
    if score > 80 and unplanned_spend < 500:
        return MoneyPersonality.anxious_saver
    if unplanned_spend > 2000:
        return MoneyPersonality.impulsive
    if mood_count == 0 and spending_count == 0:
        return MoneyPersonality.new_user
    return MoneyPersonality.balanced


def predict_risk_window(risk_level: RiskLevel) -> Optional[str]:
    if risk_level in (RiskLevel.high, RiskLevel.medium):
        return PREDICTED_RISK_WINDOW
    return None


def compute_stress_summary(inputs: StressInputs, now: datetime) -> StressSummaryRecord:
    """
    Scores one user's last week of mood and spending entries.

    Pure function of its arguments: the same inputs and ``now`` always
    produce the same summary. The caller stamps the write time.
    """
    score = BASELINE_SCORE

    # 1️⃣ Moods, weighted by recency
    mood_count = 0
    for entry in inputs.mood_entries:
        weight = recency_weight(entry.time, now)
        if entry.mood in STRESSED_MOODS:
            score += MOOD_WEIGHT * weight
        if entry.money_mood in STRESSED_MONEY_MOODS:
            score += MONEY_MOOD_WEIGHT * weight
        if entry.money_caused_stress:
            score += MONEY_CAUSED_STRESS_WEIGHT * weight
        mood_count += 1

    # 2️⃣ Unplanned spending
    unplanned_spend = 0.0
    unplanned_count = 0
    for entry in inputs.spending_entries:
        if not entry.unplanned:
            continue
        score += UNPLANNED_SPEND_WEIGHT * recency_weight(entry.time, now)
        unplanned_spend += entry.amount
        unplanned_count += 1

    # 3️⃣ Profile triggers
    triggers = list(inputs.profile.stress_triggers)
    for trigger, bonus in TRIGGER_BONUSES.items():
        if trigger in triggers:
            score += bonus

    # 4️⃣ Unplanned spending frequency
    for threshold, bonus in FREQUENCY_BONUSES:
        if unplanned_count > threshold:
            score += bonus

    score = min(100.0, max(0.0, score))

    risk_level = classify_risk_level(score)
    personality = classify_money_personality(
        score,
        unplanned_spend,
        mood_count,
        len(inputs.spending_entries),
    )

    return StressSummaryRecord(
        financial_stress_index=score,
        risk_level=risk_level,
        money_personality=personality,
        trigger_types=triggers,
        predicted_risk_window=predict_risk_window(risk_level),
    )
