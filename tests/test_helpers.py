from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from tuition_attendance.common.datetime_utils import parse_hhmm, parse_iso_date
from tuition_attendance.common.serialization import to_dict
from tuition_attendance.common.validators import require_email, require_min_length, require_non_empty, require_positive_id
from tuition_attendance.core.enums import SessionStatus
from tuition_attendance.core.exceptions import ValidationError
from tuition_attendance.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from tuition_attendance.database.connection import DBConfig
from tuition_attendance.database.mysql_base import normalize_mysql_date, normalize_mysql_time, placeholders
from tuition_attendance.sessions.model import Session
from tuition_attendance.users.model import Teacher


def test_normalize_mysql_time_variants():
    assert normalize_mysql_time(time(8, 30)) == time(8, 30)
    assert normalize_mysql_time(timedelta(hours=17, minutes=5)) == time(17, 5)
    assert normalize_mysql_time("09:15:30") == time(9, 15, 30)
    assert normalize_mysql_time(None) is None


def test_normalize_mysql_date_variants():
    assert normalize_mysql_date(datetime(2026, 3, 10, 8, 0)) == date(2026, 3, 10)
    assert normalize_mysql_date("2026-03-10") == date(2026, 3, 10)


def test_placeholders():
    assert placeholders(3) == "%s,%s,%s"
    with pytest.raises(ValueError):
        placeholders(0)


def test_parse_date_and_time():
    assert parse_iso_date("2026-03-10") == date(2026, 3, 10)
    assert parse_hhmm("17:00") == time(17, 0)
    assert parse_hhmm("17:00:30") == time(17, 0, 30)
    with pytest.raises(ValidationError):
        parse_iso_date("10/03/2026")
    with pytest.raises(ValidationError):
        parse_hhmm("5pm")


def test_validators():
    assert require_email(" Someone@Example.com ") == "someone@example.com"
    assert require_positive_id("7", "Batch") == 7
    with pytest.raises(ValidationError):
        require_positive_id(0, "Batch")
    with pytest.raises(ValidationError):
        require_min_length("abc", "Password", 6)
    assert require_positive_id(" 12 ", "Student") == 12
    for bad in (1.9, True, "1.5", None, -3):
        with pytest.raises(ValidationError):
            require_positive_id(bad, "Student")
    with pytest.raises(ValidationError):
        require_non_empty(123, "Password")
    with pytest.raises(ValidationError):
        require_min_length(123456, "Password", 6)


def test_to_dict_hides_password_and_formats_values():
    teacher = Teacher(teacher_pk=1, teacher_code="T001", name="Demo", password_hash="secret")
    assert to_dict(teacher) == {"teacher_pk": 1, "teacher_code": "T001", "name": "Demo"}

    session = Session(
        session_id=1,
        batch_id=2,
        teacher_id=1,
        session_date=date(2026, 3, 10),
        session_time=time(17, 0),
        status=SessionStatus.FINALIZED,
        published_at=datetime(2026, 3, 10, 18, 0),
    )
    assert to_dict(session) == {
        "session_id": 1,
        "batch_id": 2,
        "teacher_id": 1,
        "session_date": "2026-03-10",
        "session_time": "17:00",
        "status": "FINALIZED",
        "published_at": "2026-03-10T18:00:00",
    }


def test_sql_splitter_keeps_quoted_semicolons():
    sql = "CREATE DATABASE x;\nUSE x;\nINSERT INTO t VALUES ('a;b');\nSELECT 1"
    statements = list(_iter_sql_statements(_strip_create_db_and_use(sql)))
    assert statements == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_db_config_from_settings_dict():
    cfg = DBConfig.from_dict({"host": "db", "port": "3307", "user": "app"})
    assert cfg.port == 3307
    assert cfg.database == "tuition_attendance"
    assert cfg.describe() == "app@db:3307/tuition_attendance"
