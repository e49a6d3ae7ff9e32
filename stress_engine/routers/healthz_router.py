# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends

from stress_engine.config import STORE_BACKEND
from stress_engine.stores import get_stress_store
from stress_engine.stores.base import StoreError, StressStore

router = APIRouter()


@router.get("/healthz", tags=["Infra"])
def health_check(store: StressStore = Depends(get_stress_store)):
    try:
        store.ping()
        return {"status": "ok", "store": STORE_BACKEND}
    except StoreError as e:
        return {"status": "error", "store": STORE_BACKEND, "error": str(e)}
