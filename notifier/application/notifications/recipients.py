"""Default recipient resolution backed by the tenant's user table."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from notifier.domain.entities import RecipientType
from notifier.domain.errors import RecipientResolutionError
from notifier.infrastructure.repositories import RoleRepository, UserRepository

logger = logging.getLogger(__name__)


class UserRecipientResolver:
    """Turn a trigger's ``recipient_type``/``recipient_config`` into user ids.

    ``recipient_config`` keys per type:

    * ``specific_users``: ``userIds``
    * ``role_based``: ``roles`` (role aliases)
    * ``department_based``: ``departments``
    * ``conditional``: ``userIdFields`` naming payload keys that hold a user
      id or a list of ids, plus an optional ``includeActor`` flag
    """

    def __init__(self, user_repository: UserRepository, role_repository: RoleRepository) -> None:
        self.user_repository = user_repository
        self.role_repository = role_repository

    def resolve(
        self,
        tenant_id: int,
        recipient_type: RecipientType | str,
        config: Mapping[str, Any] | None,
        payload: Mapping[str, Any] | None = None,
        actor_id: int | None = None,
    ) -> list[int]:
        try:
            kind = RecipientType(recipient_type)
        except ValueError as exc:
            raise RecipientResolutionError(f"Unknown recipient type {recipient_type!r}") from exc

        config = config or {}
        payload = payload or {}

        if kind is RecipientType.ALL_USERS:
            return self.user_repository.list_active_ids(tenant_id)
        if kind is RecipientType.SPECIFIC_USERS:
            user_ids = _coerce_ids(config.get("userIds"), "userIds")
            return self.user_repository.filter_tenant_ids(tenant_id, user_ids)
        if kind is RecipientType.ROLE_BASED:
            return self._by_roles(tenant_id, _names(config, "roles", "role"))
        if kind is RecipientType.DEPARTMENT_BASED:
            return self._by_departments(tenant_id, _names(config, "departments", "department"))
        return self._conditional(tenant_id, config, payload, actor_id)

    def _by_roles(self, tenant_id: int, roles: list[str]) -> list[int]:
        known = self.role_repository.list_aliases()
        unknown = sorted(role for role in roles if role.lower() not in known)
        if unknown:
            raise RecipientResolutionError(f"Unknown role(s): {', '.join(unknown)}")
        return self.user_repository.list_ids_by_role_aliases(tenant_id, roles)

    def _by_departments(self, tenant_id: int, departments: list[str]) -> list[int]:
        known = self.user_repository.list_departments(tenant_id)
        unknown = sorted(name for name in departments if name.lower() not in known)
        if unknown:
            raise RecipientResolutionError(f"Unknown department(s): {', '.join(unknown)}")
        return self.user_repository.list_ids_by_departments(tenant_id, departments)

    def _conditional(
        self,
        tenant_id: int,
        config: Mapping[str, Any],
        payload: Mapping[str, Any],
        actor_id: int | None,
    ) -> list[int]:
        fields = config.get("userIdFields")
        if isinstance(fields, str):
            fields = [fields]
        if not isinstance(fields, list) or not all(isinstance(field, str) for field in fields):
            raise RecipientResolutionError("conditional recipients require a userIdFields list")

        user_ids: list[int] = []
        for field in fields:
            value = payload.get(field)
            if value is None:
                continue
            values = value if isinstance(value, list) else [value]
            user_ids.extend(_coerce_ids(values, field))
        if config.get("includeActor") and actor_id is not None:
            user_ids.append(int(actor_id))
        return self.user_repository.filter_tenant_ids(tenant_id, dict.fromkeys(user_ids))


def _names(config: Mapping[str, Any], plural: str, singular: str) -> list[str]:
    value = config.get(plural, config.get(singular))
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise RecipientResolutionError(f"recipient config requires a non-empty {plural!r} list")
    names = [str(item).strip() for item in value if str(item).strip()]
    if not names:
        raise RecipientResolutionError(f"recipient config requires a non-empty {plural!r} list")
    return names


def _coerce_ids(value: Any, field: str) -> list[int]:
    if not isinstance(value, list):
        raise RecipientResolutionError(f"{field} must be a list of user ids")
    try:
        return [int(item) for item in value]
    except (TypeError, ValueError) as exc:
        raise RecipientResolutionError(f"{field} contains an invalid user id") from exc


__all__ = ["UserRecipientResolver"]
