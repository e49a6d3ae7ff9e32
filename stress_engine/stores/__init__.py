# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from stress_engine.config import STORE_BACKEND
from stress_engine.stores.base import StoreError, StressStore


def get_store(backend: str = STORE_BACKEND) -> StressStore:
    if backend == "firestore":
        from stress_engine.stores.firestore_store import FirestoreStressStore
        from stress_engine.utils.firebase import get_firestore_client
        return FirestoreStressStore(get_firestore_client())

    if backend == "sql":
        from stress_engine.stores.sql_store import SqlStressStore
        return SqlStressStore()

    raise ValueError(f"Unknown STORE_BACKEND '{backend}'")


# ✅ FastAPI dependency
def get_stress_store() -> StressStore:
    return get_store()
