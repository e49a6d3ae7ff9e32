# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import datetime
from typing import Optional

from stress_engine.schemas.stress_schemas import StressSummaryRecord
from stress_engine.stores.base import StoreError, StressStore

logger = logging.getLogger(__name__)


def publish_summary(
    store: StressStore,
    uid: str,
    university_id: Optional[str],
    summary: StressSummaryRecord,
    now: datetime,
) -> None:
    """
    Merge-writes the summary into the student's own slot and, for students
    attached to a university, into the university's copy plus the
    membership stub. Each write commits on its own; a failed university
    write leaves the student's summary in place.
    """
    fields = {**summary.to_fields(), "last_updated": now}

    # ✅ Student's view
    store.merge_user_summary(uid, fields)
    logger.info(f"📊 Stress index {summary.financial_stress_index:.1f} published for {uid}")

    if not university_id:
        return

    # ✅ University admin's view (copy) and listing entry, both always attempted
    writes = [
        ("summary", lambda: store.merge_university_summary(university_id, uid, fields)),
        ("membership", lambda: store.merge_university_member(university_id, uid, {"last_updated": now})),
    ]

    errors = []
    for name, write in writes:
        try:
            write()
        except StoreError as e:
            logger.error(f"🛑 University {university_id} {name} write failed for {uid}: {e}")
            errors.append(e)

    if errors:
        raise errors[0]
