"""Unit Tests for the session lifecycle manager

absent -> open -> closed, with uniqueness enforced by the registry.
"""
import pytest

from gaitlab.core.exceptions import ValidationError, ConflictError, NotFoundError, StoreError
from gaitlab.repositories.store import StoreResult
from gaitlab.services.session_lifecycle import SessionLifecycleManager, is_unique_violation


class TestStartSession:

    def test_start_assigns_current_utc_instant(self, services, session_repo):
        started = services.lifecycle.start("exp1", notes="treadmill, 3 km/h")

        assert started.experiment_name == "exp1"
        assert started.start_time == "2025-05-01T10:00:00.000Z"
        assert started.notes == "treadmill, 3 km/h"
        row = session_repo.get_session("exp1")
        assert row["start_time"] == started.start_time
        assert row["end_time"] is None

    def test_duplicate_start_is_conflict(self, services, session_repo, clock):
        first = services.lifecycle.start("exp1")
        clock.advance(5)

        with pytest.raises(ConflictError) as exc_info:
            services.lifecycle.start("exp1")

        assert "exp1" in exc_info.value.message
        assert exc_info.value.status_code == 409
        assert session_repo.get_session("exp1")["start_time"] == first.start_time

    def test_start_after_end_is_still_conflict(self, services, clock):
        services.lifecycle.start("exp1")
        clock.advance(1)
        services.lifecycle.end("exp1")

        with pytest.raises(ConflictError):
            services.lifecycle.start("exp1")

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_start_requires_name(self, services, name):
        with pytest.raises(ValidationError):
            services.lifecycle.start(name)

    def test_other_store_failure_is_store_error(self, clock):
        class BrokenRepository:
            def create_session(self, *args):
                return StoreResult(success=False, error="disk full")

        manager = SessionLifecycleManager(BrokenRepository(), clock=clock)

        with pytest.raises(StoreError) as exc_info:
            manager.start("exp1")

        assert exc_info.value.details == "disk full"


class TestEndSession:

    def test_end_sets_end_time(self, services, session_repo, clock):
        services.lifecycle.start("exp1")
        clock.advance(2)

        ended = services.lifecycle.end("exp1")

        assert ended.end_time == "2025-05-01T10:00:02.000Z"
        assert session_repo.get_session("exp1")["end_time"] == ended.end_time

    def test_end_unknown_session(self, services):
        with pytest.raises(NotFoundError) as exc_info:
            services.lifecycle.end("never-started")

        assert "never-started" in exc_info.value.message
        assert exc_info.value.status_code == 404

    def test_second_end_overwrites_end_time(self, services, session_repo, clock):
        services.lifecycle.start("exp1")
        clock.advance(2)
        services.lifecycle.end("exp1")
        clock.advance(3)

        again = services.lifecycle.end("exp1")

        assert again.end_time == "2025-05-01T10:00:05.000Z"
        assert session_repo.get_session("exp1")["end_time"] == again.end_time

    def test_end_requires_name(self, services):
        with pytest.raises(ValidationError):
            services.lifecycle.end("")


class TestListSessions:

    def test_most_recent_first(self, services, clock):
        services.lifecycle.start("morning")
        clock.advance(60)
        services.lifecycle.start("noon", notes="stairs")
        clock.advance(60)
        services.lifecycle.end("morning")

        sessions = services.lifecycle.list()

        assert [s.experiment_name for s in sessions] == ["noon", "morning"]
        assert sessions[0].notes == "stairs"
        assert sessions[0].end_time is None
        assert sessions[1].end_time == "2025-05-01T10:02:00.000Z"
        assert sessions[1].created_at is not None

    def test_empty_registry(self, services):
        assert services.lifecycle.list() == []


@pytest.mark.parametrize("message,expected", [
    ("UNIQUE constraint failed: experiment_sessions.experiment_name", True),
    ("PRIMARY KEY constraint failed", True),
    ('duplicate key value violates unique constraint "experiment_sessions_pkey"', True),
    ("database is locked", False),
    (None, False),
])
def test_unique_violation_detection(message, expected):
    assert is_unique_violation(message) is expected
