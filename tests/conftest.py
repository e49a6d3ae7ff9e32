"""Shared fixtures for stress engine tests."""
import os

os.environ.setdefault("ENV", "production")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-stress-engine")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORE_BACKEND", "sql")

from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stress_engine.models import database
from stress_engine.models import MoodEntry, SpendingEntry, User, UserProfile
from stress_engine.stores.base import StressStore
from stress_engine.stores.sql_store import SqlStressStore


NOW = datetime(2025, 3, 10, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def session_factory():
    """In-memory SQLite database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SqlStressStore(session_factory)


@pytest.fixture
def seed(session_factory):
    """Insert rows and commit, e.g. seed(User(id="u1"), MoodEntry(...))."""
    def _seed(*rows):
        db = session_factory()
        try:
            db.add_all(rows)
            db.commit()
        finally:
            db.close()
    return _seed


@pytest.fixture
def student_rows(now):
    """A student at uni_1 with one stressed mood and one unplanned purchase."""
    return [
        User(id="student_1", role="student", university_id="uni_1"),
        UserProfile(user_id="student_1", stress_triggers=["Exams"]),
        MoodEntry(
            user_id="student_1",
            mood="Stressed",
            money="Worried",
            money_caused_stress=True,
            time=now - timedelta(days=1),
        ),
        SpendingEntry(
            user_id="student_1",
            amount=120.0,
            is_planned=False,
            time=now - timedelta(days=2),
        ),
    ]


class InMemoryStressStore(StressStore):
    """Dict-backed store; ``writes`` records every merge-write in order."""

    def __init__(self):
        self.users = {}
        self.profiles = {}
        self.moods = {}
        self.spending = {}
        self.documents = {}
        self.writes = []

    def list_user_ids(self):
        return list(self.users)

    def get_user(self, uid):
        return self.users.get(uid)

    def get_profile(self, uid):
        return self.profiles.get(uid)

    def list_mood_entries(self, uid, since):
        return [e for e in self.moods.get(uid, []) if e.time > since]

    def list_spending_entries(self, uid, since):
        return [e for e in self.spending.get(uid, []) if e.time > since]

    def _merge(self, key, fields):
        self.writes.append(key)
        self.documents.setdefault(key, {}).update(fields)

    def merge_user_summary(self, uid, fields):
        self._merge(("users", uid, "summary"), fields)

    def merge_university_summary(self, university_id, uid, fields):
        self._merge(("universities", university_id, uid, "summary"), fields)

    def merge_university_member(self, university_id, uid, fields):
        self._merge(("universities", university_id, uid), fields)


@pytest.fixture
def memory_store():
    return InMemoryStressStore()
