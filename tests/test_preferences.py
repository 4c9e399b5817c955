"""Tests for preference defaults and eligibility."""

from datetime import time

import pytest

from conftest import TENANT_ID
from notifier.application.notifications import PreferenceResolver
from notifier.application.use_cases.preferences import (
    PreferenceInput,
    get_notification_preferences,
    update_notification_preferences,
)
from notifier.domain.entities import NOTIFICATION_TYPES, NotificationPreference
from notifier.domain.errors import PreferenceLookupError, ValidationError
from notifier.infrastructure.repositories import NotificationPreferenceRepository


def _store(session, user_id: int, notification_type: str, *, in_app: bool, email: bool) -> None:
    NotificationPreferenceRepository(session).upsert(
        NotificationPreference(
            id=None,
            tenant_id=TENANT_ID,
            user_id=user_id,
            notification_type=notification_type,
            in_app_enabled=in_app,
            email_enabled=email,
        )
    )


def test_missing_preference_means_in_app_only(session, users) -> None:
    resolver = PreferenceResolver(NotificationPreferenceRepository(session))

    eligibility = resolver.eligible(TENANT_ID, [users.bob.id], "TASK_ASSIGNMENT")

    assert eligibility.in_app == [users.bob.id]
    assert eligibility.email == []


def test_stored_preferences_are_used_verbatim(session, users) -> None:
    _store(session, users.bob.id, "INVOICE_CREATED", in_app=False, email=True)
    _store(session, users.carol.id, "INVOICE_CREATED", in_app=False, email=False)
    resolver = PreferenceResolver(NotificationPreferenceRepository(session))

    eligibility = resolver.eligible(
        TENANT_ID, [users.bob.id, users.carol.id, users.admin.id], "INVOICE_CREATED"
    )

    assert eligibility.in_app == [users.admin.id]
    assert eligibility.email == [users.bob.id]
    assert eligibility.recipients == [users.admin.id, users.bob.id]


def test_preferences_of_another_type_do_not_apply(session, users) -> None:
    _store(session, users.bob.id, "INVOICE_CREATED", in_app=False, email=True)
    resolver = PreferenceResolver(NotificationPreferenceRepository(session))

    eligibility = resolver.eligible(TENANT_ID, [users.bob.id], "TASK_ASSIGNMENT")

    assert eligibility.in_app == [users.bob.id]
    assert eligibility.email == []


class BrokenPreferenceRepository(NotificationPreferenceRepository):
    def list_for_users(self, tenant_id, notification_type, user_ids):
        raise PreferenceLookupError("preference store offline")


def test_lookup_failure_falls_back_to_defaults(session, users) -> None:
    resolver = PreferenceResolver(BrokenPreferenceRepository(session))

    eligibility = resolver.eligible(TENANT_ID, [users.bob.id, users.carol.id], "TASK_UPDATE")

    assert eligibility.in_app == [users.bob.id, users.carol.id]
    assert eligibility.email == []


def test_effective_preferences_cover_every_type(session, users) -> None:
    _store(session, users.bob.id, "INVOICE_CREATED", in_app=True, email=True)

    preferences = get_notification_preferences(session, tenant_id=TENANT_ID, user_id=users.bob.id)

    assert {item.notification_type for item in preferences} == set(NOTIFICATION_TYPES)
    by_type = {item.notification_type: item for item in preferences}
    assert by_type["INVOICE_CREATED"].email_enabled is True
    assert by_type["INVOICE_CREATED"].id is not None
    assert by_type["TASK_ASSIGNMENT"].id is None
    assert by_type["TASK_ASSIGNMENT"].in_app_enabled is True
    assert by_type["TASK_ASSIGNMENT"].email_enabled is False


def test_update_replaces_stored_preferences(session, users) -> None:
    _store(session, users.bob.id, "TASK_UPDATE", in_app=False, email=True)

    update_notification_preferences(
        session,
        tenant_id=TENANT_ID,
        user_id=users.bob.id,
        preferences=[
            PreferenceInput(
                notification_type="INVOICE_CREATED",
                email_enabled=True,
                digest_frequency="daily",
                quiet_hours=True,
                quiet_start=time(22, 0),
                quiet_end=time(7, 0),
            )
        ],
    )

    stored = NotificationPreferenceRepository(session).list_for_user(TENANT_ID, users.bob.id)
    assert [item.notification_type for item in stored] == ["INVOICE_CREATED"]
    assert stored[0].digest_frequency == "daily"
    assert stored[0].quiet_start == time(22, 0)


@pytest.mark.parametrize(
    "preference",
    [
        PreferenceInput(notification_type="NOT_A_TYPE"),
        PreferenceInput(notification_type="TASK_UPDATE", digest_frequency="hourly"),
        PreferenceInput(notification_type="TASK_UPDATE", quiet_hours=True),
    ],
)
def test_update_rejects_invalid_preferences(session, users, preference) -> None:
    with pytest.raises(ValidationError):
        update_notification_preferences(
            session, tenant_id=TENANT_ID, user_id=users.bob.id, preferences=[preference]
        )


def test_update_rejects_duplicate_types(session, users) -> None:
    with pytest.raises(ValidationError) as excinfo:
        update_notification_preferences(
            session,
            tenant_id=TENANT_ID,
            user_id=users.bob.id,
            preferences=[
                PreferenceInput(notification_type="TASK_UPDATE"),
                PreferenceInput(notification_type="TASK_UPDATE", email_enabled=True),
            ],
        )

    assert excinfo.value.errors
