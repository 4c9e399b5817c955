"""Tests for user registration and authentication use cases."""

import pytest

from conftest import PASSWORD, TENANT_ID
from notifier.application.use_cases.users import AuthenticationStatus, authenticate_user, create_user
from notifier.domain.errors import ValidationError


def test_create_user_hashes_the_password_and_creates_the_role(session) -> None:
    user = create_user(
        session,
        tenant_id=TENANT_ID,
        name="Grace",
        email="grace@acme.test",
        password=PASSWORD,
        role_alias="admin",
        department="Ops",
    )

    assert user.id is not None
    assert user.password != PASSWORD
    assert user.is_admin()
    assert user.department == "Ops"


def test_create_user_rejects_a_taken_email(session, users) -> None:
    with pytest.raises(ValidationError) as excinfo:
        create_user(
            session, tenant_id=TENANT_ID, name="Bobby", email="bob@acme.test", password=PASSWORD
        )

    assert excinfo.value.errors == ["email: bob@acme.test is taken"]


def test_authenticate_user_outcomes(session, users) -> None:
    result = authenticate_user(session, "BOB@acme.test ", PASSWORD)
    assert result.succeeded
    assert result.user.id == users.bob.id

    wrong_password = authenticate_user(session, "bob@acme.test", "wrong")
    assert wrong_password.status is AuthenticationStatus.INVALID_CREDENTIALS
    assert wrong_password.user is None
    unknown = authenticate_user(session, "nobody@acme.test", PASSWORD)
    assert unknown.status is AuthenticationStatus.INVALID_CREDENTIALS
    inactive = authenticate_user(session, "dave@acme.test", PASSWORD)
    assert inactive.status is AuthenticationStatus.INACTIVE
    assert inactive.user.id == users.dave.id
