"""Tests for the SQLAlchemy-backed stress store."""
import threading

import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from pydantic import ValidationError
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from stress_engine.models import database
from stress_engine.models import (
    MoodEntry,
    SpendingEntry,
    StressSummary,
    UniversityStudent,
    UniversityStudentSummary,
    User,
    UserProfile,
)
from stress_engine.stores.base import StoreError
from stress_engine.stores.sql_store import SqlStressStore


class TestReads:

    def test_get_missing_user(self, sql_store):
        assert sql_store.get_user("nobody") is None

    def test_get_user(self, sql_store, seed):
        seed(User(id="u1", role="student", university_id="uni_9"))

        user = sql_store.get_user("u1")

        assert user.id == "u1"
        assert user.role == "student"
        assert user.university_id == "uni_9"

    def test_list_user_ids_includes_every_role(self, sql_store, seed):
        seed(User(id="u1", role="student"), User(id="a1", role="admin"))
        assert sorted(sql_store.list_user_ids()) == ["a1", "u1"]

    def test_profile(self, sql_store, seed):
        seed(User(id="u1"), UserProfile(user_id="u1", stress_triggers=["Exams"]))

        assert sql_store.get_profile("u1").stress_triggers == ["Exams"]
        assert sql_store.get_profile("u2") is None

    def test_entries_after_lower_bound_only(self, sql_store, seed, now):
        since = now - timedelta(days=7)
        seed(
            User(id="u1"),
            MoodEntry(user_id="u1", mood="Stressed", time=since),
            MoodEntry(user_id="u1", mood="Anxious", time=since + timedelta(seconds=1)),
            MoodEntry(user_id="u1", mood="Calm", time=now - timedelta(days=10)),
            SpendingEntry(user_id="u1", amount=5, planned=False, time=since),
            SpendingEntry(user_id="u1", amount=7, is_planned=False, time=now),
        )

        moods = sql_store.list_mood_entries("u1", since)
        spending = sql_store.list_spending_entries("u1", since)

        assert [m.mood for m in moods] == ["Anxious"]
        assert len(spending) == 1
        assert spending[0].amount == 7
        assert spending[0].unplanned is True

    def test_entries_scoped_to_owner(self, sql_store, seed, now):
        seed(
            User(id="u1"),
            User(id="u2"),
            MoodEntry(user_id="u2", mood="Stressed", time=now),
        )
        assert sql_store.list_mood_entries("u1", now - timedelta(days=7)) == []

    def test_legacy_planned_column(self, sql_store, seed, now):
        seed(
            User(id="u1"),
            SpendingEntry(user_id="u1", amount=None, planned=False, time=now),
            SpendingEntry(user_id="u1", amount=3, planned=True, time=now),
        )

        entries = sql_store.list_spending_entries("u1", now - timedelta(days=1))

        assert sorted((e.amount, e.unplanned) for e in entries) == [(0.0, True), (3.0, False)]

    def test_ping(self, sql_store):
        assert sql_store.ping() is True


class TestMergeWrites:

    def _get(self, session_factory, model, key):
        db = session_factory()
        try:
            row = db.get(model, key)
            if row is not None:
                db.expunge(row)
            return row
        finally:
            db.close()

    def test_creates_missing_summary(self, sql_store, session_factory, seed, now):
        seed(User(id="u1"))

        sql_store.merge_user_summary("u1", {"financial_stress_index": 42.0, "risk_level": "Medium", "last_updated": now})

        row = self._get(session_factory, StressSummary, {"user_id": "u1"})
        assert row.financial_stress_index == 42.0
        assert row.risk_level == "Medium"
        assert row.last_updated == now

    def test_preserves_fields_not_written(self, sql_store, session_factory, seed, now):
        seed(User(id="u1"))
        sql_store.merge_user_summary("u1", {
            "financial_stress_index": 42.0,
            "money_personality": "Balanced",
            "last_updated": now,
        })
        created_at = self._get(session_factory, StressSummary, {"user_id": "u1"}).created_at

        sql_store.merge_user_summary("u1", {"financial_stress_index": 80.0})

        row = self._get(session_factory, StressSummary, {"user_id": "u1"})
        assert row.financial_stress_index == 80.0
        assert row.money_personality == "Balanced"
        assert row.last_updated == now
        assert row.created_at == created_at

    def test_university_rows_keyed_by_university_and_user(self, sql_store, session_factory, seed, now):
        seed(User(id="u1"))

        sql_store.merge_university_summary("uni_1", "u1", {"risk_level": "High"})
        sql_store.merge_university_member("uni_1", "u1", {"last_updated": now})
        sql_store.merge_university_member("uni_1", "u1", {"last_updated": now + timedelta(days=1)})

        summary = self._get(session_factory, UniversityStudentSummary, {"university_id": "uni_1", "user_id": "u1"})
        member = self._get(session_factory, UniversityStudent, {"university_id": "uni_1", "user_id": "u1"})
        assert summary.risk_level == "High"
        assert member.last_updated == now + timedelta(days=1)

        db = session_factory()
        try:
            assert db.query(UniversityStudent).count() == 1
        finally:
            db.close()

    def test_unknown_field_rejected(self, sql_store):
        with pytest.raises(ValueError):
            sql_store.merge_user_summary("u1", {"mood": "Stressed"})


class TestStoreErrors:

    def _failing_store(self):
        session = MagicMock()
        error = OperationalError("SELECT", {}, Exception("database is locked"))
        session.get.side_effect = error
        session.query.side_effect = error
        return SqlStressStore(lambda: session), session

    def test_read_failure_wrapped(self):
        store, session = self._failing_store()

        with pytest.raises(StoreError) as exc_info:
            store.get_user("u1")

        assert isinstance(exc_info.value.__cause__, OperationalError)
        session.close.assert_called_once()

    def test_write_failure_rolls_back(self):
        store, session = self._failing_store()

        with pytest.raises(StoreError):
            store.merge_user_summary("u1", {"risk_level": "Low"})

        session.rollback.assert_called_once()
        session.close.assert_called_once()

    def test_bad_stored_profile_wrapped(self, sql_store, seed):
        seed(User(id="u1"), UserProfile(user_id="u1", stress_triggers="Exams"))

        with pytest.raises(StoreError) as exc_info:
            sql_store.get_profile("u1")

        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestConcurrentMerge:

    def test_two_writers_creating_the_same_summary(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'race.db'}",
            connect_args={"check_same_thread": False},
        )
        database.Base.metadata.create_all(bind=engine)
        factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        # Both writers read "no row" before either inserts
        barrier = threading.Barrier(2, timeout=5)
        local = threading.local()

        def racing_session():
            db = factory()
            real_get = db.get

            def get(*args, **kwargs):
                row = real_get(*args, **kwargs)
                if not getattr(local, "waited", False):
                    local.waited = True
                    barrier.wait()
                return row

            db.get = get
            return db

        store = SqlStressStore(racing_session)
        errors = []

        def write(fields):
            try:
                store.merge_user_summary("u1", fields)
            except Exception as e:  # collected for the assertion below
                errors.append(e)

        threads = [
            threading.Thread(target=write, args=({"financial_stress_index": 10.0},)),
            threading.Thread(target=write, args=({"risk_level": "High"},)),
        ]
        try:
            for t in threads:
                t.start()
            for t in threads:
                t.join(timeout=10)

            assert errors == []
            db = factory()
            try:
                row = db.get(StressSummary, "u1")
                assert row.financial_stress_index == 10.0
                assert row.risk_level == "High"
            finally:
                db.close()
        finally:
            engine.dispose()
