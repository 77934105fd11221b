"""Session state machine: DRAFT -> FINALIZED -> LOCKED.

Pure functions over a Session and a point in time; the service layer wires
them to repositories.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.constants import LOCK_AFTER_HOURS
from ..core.enums import SessionStatus
from ..core.exceptions import EditWindowExpiredError, InvalidTransitionError, SessionLockedError
from .model import Session

DEFAULT_LOCK_AFTER = timedelta(hours=LOCK_AFTER_HOURS)


def is_expired(session: Session, now: datetime, *, lock_after: timedelta = DEFAULT_LOCK_AFTER) -> bool:
    """True when a FINALIZED session has been published for at least `lock_after`."""
    if session.status != SessionStatus.FINALIZED or session.published_at is None:
        return False
    return now - session.published_at >= lock_after


def next_status(session: Session, now: datetime, *, lock_after: timedelta = DEFAULT_LOCK_AFTER) -> SessionStatus:
    """Status the session should have at `now`. Applying it twice is a no-op."""
    if is_expired(session, now, lock_after=lock_after):
        return SessionStatus.LOCKED
    return session.status


def ensure_finalizable(session: Session) -> None:
    if session.status != SessionStatus.DRAFT:
        raise InvalidTransitionError("Session is already finalized or locked")


def ensure_writable(session: Session, now: datetime, *, lock_after: timedelta = DEFAULT_LOCK_AFTER) -> None:
    """Raise unless attendance may be written to `session` at `now`."""
    status = next_status(session, now, lock_after=lock_after)
    if status == SessionStatus.LOCKED:
        raise SessionLockedError("Session is locked")
    if status == SessionStatus.FINALIZED and not is_same_day(session.session_date, now):
        raise EditWindowExpiredError("Can only edit attendance on the same day")


def is_same_day(session_date: date, now: datetime) -> bool:
    return session_date == now.date()
