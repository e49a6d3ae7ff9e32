# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from stress_engine.schemas.stress_schemas import (
    MoodEntryRecord,
    ProfileRecord,
    SpendingEntryRecord,
    UserRecord,
)


class StoreError(Exception):
    """Raised when the record store cannot complete a read or write."""


class StressStore(ABC):
    """
    Record store used by the stress pipeline.

    Merge-writes are upserts with field-level merge: every key in ``fields``
    overwrites the stored value, keys that are not passed keep whatever the
    stored record already holds. A missing record is created.
    """

    @abstractmethod
    def list_user_ids(self) -> List[str]:
        ...

    @abstractmethod
    def get_user(self, uid: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def get_profile(self, uid: str) -> Optional[ProfileRecord]:
        ...

    @abstractmethod
    def list_mood_entries(self, uid: str, since: datetime) -> List[MoodEntryRecord]:
        """Mood entries with time strictly after ``since``."""

    @abstractmethod
    def list_spending_entries(self, uid: str, since: datetime) -> List[SpendingEntryRecord]:
        """Spending entries with time strictly after ``since``."""

    @abstractmethod
    def merge_user_summary(self, uid: str, fields: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def merge_university_summary(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def merge_university_member(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        ...

    def ping(self) -> bool:
        """Cheap read used by the health check."""
        self.list_user_ids()
        return True
