"""Unit Tests for the SQL store

Write statements report outcomes; reads raise StoreError.
"""
import pytest
from sqlalchemy import select, text

from gaitlab.core.exceptions import StoreError
from gaitlab.models import ExperimentSession, GaitReading

SESSIONS = ExperimentSession.__table__
READINGS = GaitReading.__table__


def _session_row(name, start="2025-05-01T10:00:00.000Z"):
    return {"experiment_name": name, "start_time": start, "notes": None}


class TestInsert:

    def test_insert_success(self, store):
        result = store.insert(SESSIONS, _session_row("exp1"))
        assert result.success
        assert result.error is None
        assert store.select_one(select(SESSIONS).where(SESSIONS.c.experiment_name == "exp1")) is not None

    def test_duplicate_primary_key_reports_failure(self, store):
        assert store.insert(SESSIONS, _session_row("exp1")).success

        result = store.insert(SESSIONS, _session_row("exp1", start="2025-05-02T10:00:00.000Z"))

        assert not result.success
        assert "unique constraint failed" in result.error.lower()
        row = store.select_one(select(SESSIONS).where(SESSIONS.c.experiment_name == "exp1"))
        assert row["start_time"] == "2025-05-01T10:00:00.000Z"


class TestBatchInsert:

    def test_all_rows_succeed(self, store):
        statements = [
            (READINGS, {"device": "hip", "timestamp": f"2025-05-01T10:00:0{i}.000Z", "quaternions": "[]", "note": None})
            for i in range(3)
        ]
        results = store.batch_insert(statements)
        assert [r.success for r in results] == [True, True, True]
        assert len(store.select_many(select(READINGS))) == 3

    def test_failed_row_does_not_undo_others(self, store):
        statements = [
            (SESSIONS, _session_row("a")),
            (SESSIONS, _session_row("a")),
            (SESSIONS, _session_row("b")),
        ]

        results = store.batch_insert(statements)

        assert [r.success for r in results] == [True, False, True]
        assert "unique" in results[1].error.lower()
        names = [row["experiment_name"] for row in store.select_many(select(SESSIONS.c.experiment_name))]
        assert sorted(names) == ["a", "b"]

    def test_empty_batch(self, store):
        assert store.batch_insert([]) == []


class TestUpdate:

    def test_update_reports_rows_affected(self, store):
        store.insert(SESSIONS, _session_row("exp1"))
        result = store.update(
            SESSIONS,
            {"end_time": "2025-05-01T11:00:00.000Z"},
            SESSIONS.c.experiment_name == "exp1",
        )
        assert result.success
        assert result.rows_affected == 1

    def test_update_without_match(self, store):
        result = store.update(
            SESSIONS,
            {"end_time": "2025-05-01T11:00:00.000Z"},
            SESSIONS.c.experiment_name == "missing",
        )
        assert result.success
        assert result.rows_affected == 0


class TestSelect:

    def test_select_one_none_when_empty(self, store):
        assert store.select_one(select(SESSIONS)) is None

    def test_select_many_empty_list(self, store):
        assert store.select_many(select(READINGS)) == []

    def test_query_failure_raises_store_error(self, store):
        with pytest.raises(StoreError) as exc_info:
            store.select_many(text("SELECT * FROM no_such_table"))
        assert "no_such_table" in exc_info.value.details

        with pytest.raises(StoreError):
            store.select_one(text("SELECT * FROM no_such_table"))
