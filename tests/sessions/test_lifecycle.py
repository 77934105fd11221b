from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from tuition_attendance.core.enums import SessionStatus
from tuition_attendance.core.exceptions import EditWindowExpiredError, InvalidTransitionError, SessionLockedError
from tuition_attendance.sessions.lifecycle import ensure_finalizable, ensure_writable, is_expired, next_status
from tuition_attendance.sessions.model import Session


def _session(status=SessionStatus.DRAFT, published_at=None, session_date=date(2026, 3, 10)):
    return Session(
        session_id=1,
        batch_id=1,
        teacher_id=1,
        session_date=session_date,
        session_time=time(17, 0),
        status=status,
        published_at=published_at,
    )


def test_published_at_required_iff_not_draft():
    with pytest.raises(ValueError):
        _session(status=SessionStatus.DRAFT, published_at=datetime(2026, 3, 10, 8, 0))
    with pytest.raises(ValueError):
        _session(status=SessionStatus.FINALIZED, published_at=None)
    with pytest.raises(ValueError):
        _session(status=SessionStatus.LOCKED, published_at=None)

    assert _session().published_at is None
    assert _session(SessionStatus.LOCKED, datetime(2026, 3, 10, 8, 0)).published_at is not None


def test_next_status_locks_at_exactly_twelve_hours():
    published = datetime(2026, 3, 10, 8, 0)
    s = _session(SessionStatus.FINALIZED, published)

    assert next_status(s, published + timedelta(hours=11, minutes=59)) == SessionStatus.FINALIZED
    assert next_status(s, published + timedelta(hours=12)) == SessionStatus.LOCKED
    assert is_expired(s, published + timedelta(hours=13))


def test_next_status_leaves_draft_and_locked_untouched():
    far_future = datetime(2030, 1, 1)
    assert next_status(_session(), far_future) == SessionStatus.DRAFT

    locked = _session(SessionStatus.LOCKED, datetime(2026, 3, 10, 8, 0))
    assert next_status(locked, far_future) == SessionStatus.LOCKED
    assert not is_expired(locked, far_future)


def test_next_status_respects_custom_window():
    published = datetime(2026, 3, 10, 8, 0)
    s = _session(SessionStatus.FINALIZED, published)
    assert next_status(s, published + timedelta(hours=2), lock_after=timedelta(hours=1)) == SessionStatus.LOCKED


def test_ensure_finalizable_only_from_draft():
    ensure_finalizable(_session())
    with pytest.raises(InvalidTransitionError):
        ensure_finalizable(_session(SessionStatus.FINALIZED, datetime(2026, 3, 10, 8, 0)))
    with pytest.raises(InvalidTransitionError):
        ensure_finalizable(_session(SessionStatus.LOCKED, datetime(2026, 3, 10, 8, 0)))


def test_ensure_writable_rules():
    now = datetime(2026, 3, 10, 12, 0)

    # Draft: always writable, even on another day.
    ensure_writable(_session(session_date=date(2026, 3, 1)), now)

    # Finalized same day within the window.
    ensure_writable(_session(SessionStatus.FINALIZED, datetime(2026, 3, 10, 9, 0)), now)

    with pytest.raises(EditWindowExpiredError):
        ensure_writable(
            _session(SessionStatus.FINALIZED, datetime(2026, 3, 10, 9, 0), session_date=date(2026, 3, 9)),
            now,
        )

    with pytest.raises(SessionLockedError):
        ensure_writable(_session(SessionStatus.LOCKED, datetime(2026, 3, 10, 9, 0)), now)


def test_ensure_writable_treats_expired_finalized_as_locked():
    now = datetime(2026, 3, 10, 23, 0)
    s = _session(SessionStatus.FINALIZED, datetime(2026, 3, 10, 8, 0))
    with pytest.raises(SessionLockedError):
        ensure_writable(s, now)
