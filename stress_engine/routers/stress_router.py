# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status

from stress_engine.schemas.stress_schemas import RecalculateResponse
from stress_engine.services.stress_engine import calculate_stress_index
from stress_engine.stores import get_stress_store
from stress_engine.stores.base import StoreError, StressStore
from stress_engine.utils.auth_utils import get_caller_uid
from stress_engine.utils.rate_limit_utils import get_recalculate_limit, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stress-index", tags=["Stress Index"])


@router.post("/recalculate", response_model=RecalculateResponse)
@limiter.limit(get_recalculate_limit)
def recalculate_stress_index(
    request: Request,
    uid: str = Depends(get_caller_uid),
    store: StressStore = Depends(get_stress_store),
):
    """
    Recalculates the caller's own financial stress index right away.
    """
    try:
        summary = calculate_stress_index(store, uid)
    except StoreError as e:
        logger.error(f"🛑 Recalculation failed for {uid}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Stress index storage error")

    if summary is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found or not a student")

    return RecalculateResponse(success=True, financialStressIndex=summary.financial_stress_index)
