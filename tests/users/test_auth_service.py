from __future__ import annotations

import pytest

from tuition_attendance.core.enums import Role
from tuition_attendance.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError


def test_admin_login(container):
    account = container.auth_service.authenticate_admin("Admin@Tuition.local", "admin123")
    assert account.role == Role.ADMIN
    assert account.name == "Admin Demo"

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_admin("admin@tuition.local", "wrong-pass")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_admin("nobody@tuition.local", "admin123")
    with pytest.raises(ValidationError):
        container.auth_service.authenticate_admin("not-an-email", "admin123")


def test_teacher_login(container):
    account = container.auth_service.authenticate_teacher("T001", "teacher123")
    assert account.role == Role.TEACHER
    assert account.account_id == 1

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_teacher("T001", "nope")


def test_login_with_placeholder_hash_fails(container, repos):
    repos.teachers.create(teacher_code="T009", name="Seeded", password_hash="CHANGE_ME")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate_teacher("T009", "CHANGE_ME")


def test_guardian_login(container):
    students = container.auth_service.authenticate_guardian("9876543210")
    assert [s.name for s in students] == ["Asha", "Bilal"]

    with pytest.raises(ValidationError):
        container.auth_service.authenticate_guardian("12345")
    with pytest.raises(NotFoundError):
        container.auth_service.authenticate_guardian("0000000000")


def test_signup_admin(container):
    admin = container.account_service.signup_admin(email="new@tuition.local", name="New", password="secret1")
    assert admin.email == "new@tuition.local"
    assert admin.password_hash != "secret1"

    with pytest.raises(ValidationError):
        container.account_service.signup_admin(email="new@tuition.local", name="Again", password="secret1")
    with pytest.raises(ValidationError):
        container.account_service.signup_admin(email="short@tuition.local", name="Short", password="12345")


def test_create_teacher_is_admin_only(container):
    with pytest.raises(AuthorizationError):
        container.account_service.create_teacher(
            current_role=Role.TEACHER, teacher_code="T002", name="X", password="pw"
        )

    teacher = container.account_service.create_teacher(
        current_role=Role.ADMIN, teacher_code="T002", name="Second Teacher", password="pw"
    )
    assert teacher.teacher_code == "T002"
    assert container.auth_service.authenticate_teacher("T002", "pw").account_id == teacher.teacher_pk

    with pytest.raises(ValidationError):
        container.account_service.create_teacher(
            current_role=Role.ADMIN, teacher_code="T002", name="Dup", password="pw"
        )
