# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from stress_engine.config import SWEEP_CONCURRENCY
from stress_engine.schemas.stress_schemas import StressSummaryRecord
from stress_engine.services.stress_fetcher import fetch_stress_inputs
from stress_engine.services.stress_scorer import compute_stress_summary
from stress_engine.services.summary_publisher import publish_summary
from stress_engine.stores import get_store
from stress_engine.stores.base import StressStore

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def calculate_stress_index(
    store: StressStore,
    uid: str,
    now: Optional[datetime] = None,
) -> Optional[StressSummaryRecord]:
    """
    Fetch -> score -> publish for one user.
    Returns None when the user is not eligible (missing or not a student).
    """
    now = now or datetime.utcnow()

    inputs = fetch_stress_inputs(store, uid, now)
    if inputs is None:
        return None

    summary = compute_stress_summary(inputs, now)
    publish_summary(store, uid, inputs.user.university_id, summary, now)
    return summary


@dataclass
class SweepReport:
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.updated) + len(self.skipped) + len(self.failed)


async def run_stress_sweep(
    store: StressStore,
    now: Optional[datetime] = None,
    concurrency: int = SWEEP_CONCURRENCY,
) -> SweepReport:
    """
    Recalculates every user's stress index. Users run concurrently, bounded
    by ``concurrency``; each user's failure is captured in the report and
    never cancels the others.
    """
    now = now or datetime.utcnow()
    user_ids = await asyncio.to_thread(store.list_user_ids)
    semaphore = asyncio.Semaphore(max(1, concurrency))
    report = SweepReport()

    async def run_one(uid: str):
        async with semaphore:
            try:
                summary = await asyncio.to_thread(calculate_stress_index, store, uid, now)
            except Exception as e:
                logger.error(f"🛑 Stress index failed for user {uid}: {e}", exc_info=True)
                report.failed[uid] = str(e)
                return

        if summary is None:
            report.skipped.append(uid)
        else:
            report.updated.append(uid)

    await asyncio.gather(*(run_one(uid) for uid in user_ids))

    logger.info(
        f"🎉 Stress sweep done: {len(report.updated)} updated, "
        f"{len(report.skipped)} skipped, {len(report.failed)} failed."
    )
    return report


def daily_stress_engine():
    """Scheduler entry point."""
    logger.info("🧮 Starting daily stress sweep...")
    return asyncio.run(run_stress_sweep(get_store()))
