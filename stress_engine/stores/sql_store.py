# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stress_engine.models.database import SessionLocal
from stress_engine.models.mood import MoodEntry
from stress_engine.models.spending import SpendingEntry
from stress_engine.models.stress_summary import (
    StressSummary,
    UniversityStudent,
    UniversityStudentSummary,
)
from stress_engine.models.user import User, UserProfile
from stress_engine.schemas.stress_schemas import (
    MoodEntryRecord,
    ProfileRecord,
    SpendingEntryRecord,
    UserRecord,
)
from stress_engine.stores.base import StoreError, StressStore


class SqlStressStore(StressStore):
    """
    SQLAlchemy-backed store. Every call opens and closes its own session,
    so one instance can be shared by the sweep's worker threads.
    """

    def __init__(self, session_factory: sessionmaker = SessionLocal):
        self._session_factory = session_factory

    def _read(self, action: str, query):
        db: Session = self._session_factory()
        try:
            return query(db)
        except (SQLAlchemyError, ValidationError) as e:
            raise StoreError(f"Failed to {action}: {e}") from e
        finally:
            db.close()

    def _merge(self, model, key: Dict[str, str], fields: Dict[str, Any]) -> None:
        columns = set(model.__table__.columns.keys())
        unknown = set(fields) - columns
        if unknown:
            raise ValueError(f"{model.__name__} has no columns {sorted(unknown)}")

        # A concurrent writer may insert the same key between our read and
        # commit; the retry then finds its row and merges into it.
        for attempt in range(2):
            db: Session = self._session_factory()
            try:
                row = db.get(model, key)
                if row is None:
                    row = model(**key)
                    db.add(row)
                for name, value in fields.items():
                    setattr(row, name, value)
                db.commit()
                return
            except IntegrityError as e:
                db.rollback()
                if attempt:
                    raise StoreError(f"Failed to merge {model.__tablename__} {key}: {e}") from e
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreError(f"Failed to merge {model.__tablename__} {key}: {e}") from e
            finally:
                db.close()

    # ---------------------- READS ----------------------

    def list_user_ids(self) -> List[str]:
        return self._read("list users", lambda db: [row.id for row in db.query(User.id).all()])

    def get_user(self, uid: str) -> Optional[UserRecord]:
        def query(db: Session):
            user = db.get(User, uid)
            if not user:
                return None
            return UserRecord(id=user.id, role=user.role, university_id=user.university_id)

        return self._read(f"load user {uid}", query)

    def get_profile(self, uid: str) -> Optional[ProfileRecord]:
        def query(db: Session):
            profile = db.get(UserProfile, uid)
            if not profile:
                return None
            return ProfileRecord(stress_triggers=profile.stress_triggers)

        return self._read(f"load profile {uid}", query)

    def list_mood_entries(self, uid: str, since: datetime) -> List[MoodEntryRecord]:
        def query(db: Session):
            rows = (
                db.query(MoodEntry)
                .filter(MoodEntry.user_id == uid, MoodEntry.time > since)
                .all()
            )
            return [
                MoodEntryRecord(
                    mood=row.mood,
                    money_mood=row.money,
                    money_caused_stress=row.money_caused_stress,
                    time=row.time,
                )
                for row in rows
            ]

        return self._read(f"load mood entries for {uid}", query)

    def list_spending_entries(self, uid: str, since: datetime) -> List[SpendingEntryRecord]:
        def query(db: Session):
            rows = (
                db.query(SpendingEntry)
                .filter(SpendingEntry.user_id == uid, SpendingEntry.time > since)
                .all()
            )
            return [
                SpendingEntryRecord.model_validate({
                    "amount": row.amount,
                    "is_planned": row.is_planned,
                    "planned": row.planned,
                    "time": row.time,
                })
                for row in rows
            ]

        return self._read(f"load spending entries for {uid}", query)

    def ping(self) -> bool:
        return self._read("ping database", lambda db: db.execute(text("SELECT 1")).scalar() == 1)

    # ---------------------- MERGE-WRITES ----------------------

    def merge_user_summary(self, uid: str, fields: Dict[str, Any]) -> None:
        self._merge(StressSummary, {"user_id": uid}, fields)

    def merge_university_summary(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        self._merge(UniversityStudentSummary, {"university_id": university_id, "user_id": uid}, fields)

    def merge_university_member(self, university_id: str, uid: str, fields: Dict[str, Any]) -> None:
        self._merge(UniversityStudent, {"university_id": university_id, "user_id": uid}, fields)
