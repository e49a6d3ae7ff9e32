# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime, timedelta
from typing import Optional

from stress_engine.schemas.stress_schemas import ProfileRecord, StressInputs
from stress_engine.stores.base import StressStore

logger = logging.getLogger(__name__)

LOOKBACK_DAYS = 7
STUDENT_ROLE = "student"


def fetch_stress_inputs(store: StressStore, uid: str, now: datetime) -> Optional[StressInputs]:
    """
    Loads everything the scorer needs for one user.
    Returns None when the user is missing or is not a student.
    Store failures propagate as StoreError.
    """
    user = store.get_user(uid)
    if not user or user.role != STUDENT_ROLE:
        logger.info(f"⏭️ Skipped user {uid}: not a student")
        return None

    profile = store.get_profile(uid) or ProfileRecord()

    since = now - timedelta(days=LOOKBACK_DAYS)
    mood_entries = store.list_mood_entries(uid, since)
    spending_entries = store.list_spending_entries(uid, since)

    return StressInputs(
        user=user,
        profile=profile,
        mood_entries=mood_entries,
        spending_entries=spending_entries,
    )
