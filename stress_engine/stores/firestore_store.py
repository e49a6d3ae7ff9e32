# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import GoogleAPICallError
from google.cloud.firestore_v1.base_query import FieldFilter
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from stress_engine.schemas.stress_schemas import (
    MoodEntryRecord,
    ProfileRecord,
    SpendingEntryRecord,
    UserRecord,
)
from stress_engine.stores.base import StoreError, StressStore


class FirestoreStressStore(StressStore):
    """
    Firestore-backed store using the mobile app's document layout:

        users/{uid}
        users/{uid}/private/profile
        users/{uid}/private/moods/entries/*
        users/{uid}/private/spending/entries/*
        users/{uid}/features/summary
        universities/{university_id}/students/{uid}
        universities/{university_id}/students/{uid}/features/summary
    """

    def __init__(self, client):
        self._db = client

    def _user(self, uid: str):
        return self._db.collection("users").document(uid)

    def _student(self, university_id: str, uid: str):
        return self._db.collection("universities").document(university_id).collection("students").document(uid)

    def _entries(self, uid: str, kind: str, since: datetime):
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        return (
            self._user(uid).collection("private").document(kind)
            .collection("entries")
            .where(filter=FieldFilter("time", ">", since))
            .stream()
        )

    @staticmethod
    def _camel(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {to_camel(name): value for name, value in fields.items()}

    # ---------------------- READS ----------------------

    def list_user_ids(self) -> List[str]:
        try:
            return [doc.id for doc in self._db.collection("users").stream()]
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to list users: {e}") from e

    def get_user(self, uid: str) -> Optional[UserRecord]:
        try:
            snap = self._user(uid).get()
            data = snap.to_dict() if snap.exists else None
            if not data:
                return None
            return UserRecord(id=uid, role=data.get("role"), university_id=data.get("university_id"))
        except (GoogleAPICallError, ValidationError) as e:
            raise StoreError(f"Failed to load user {uid}: {e}") from e

    def get_profile(self, uid: str) -> Optional[ProfileRecord]:
        try:
            snap = self._user(uid).collection("private").document("profile").get()
            data = snap.to_dict() if snap.exists else None
            if not data:
                return None
            return ProfileRecord.model_validate(data)
        except (GoogleAPICallError, ValidationError) as e:
            raise StoreError(f"Failed to load profile {uid}: {e}") from e

    def list_mood_entries(self, uid: str, since: datetime) -> List[MoodEntryRecord]:
        try:
            return [MoodEntryRecord.model_validate(doc.to_dict()) for doc in self._entries(uid, "moods", since)]
        except (GoogleAPICallError, ValidationError) as e:
            raise StoreError(f"Failed to load mood entries for {uid}: {e}") from e

    def list_spending_entries(self, uid: str, since: datetime) -> List[SpendingEntryRecord]:
        try:
            return [SpendingEntryRecord.model_validate(doc.to_dict()) for doc in self._entries(uid, "spending", since)]
        except (GoogleAPICallError, ValidationError) as e:
            raise StoreError(f"Failed to load spending entries for {uid}: {e}") from e

    # ---------------------- MERGE-WRITES ----------------------

    def _set_merge(self, ref, document: Dict[str, Any]) -> None:
        try:
            ref.set(document, merge=True)
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to merge {ref.path}: {e}") from e

    def merge_user_summary(self, uid: str, fields: Dict[str, Any]) -> None:
        ref = self._user(uid).collection("features").document("summary")
        self._set_merge(ref, self._camel(fields))

    def merge_university_summary(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        ref = self._student(university_id, uid).collection("features").document("summary")
        self._set_merge(ref, self._camel(fields))

    def merge_university_member(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        self._set_merge(self._student(university_id, uid), {"uid": uid, **self._camel(fields)})
