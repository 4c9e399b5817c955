"""Persistence layer for tenant users."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from notifier.domain.entities import Role, User
from notifier.infrastructure.models import RoleModel, UserModel
from notifier.utils import ensure_app_timezone


class UserRepository:
    """Read and create :class:`User` entities scoped by tenant."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int, *, tenant_id: int | None = None) -> User | None:
        query = self._query().filter(UserModel.id == user_id)
        if tenant_id is not None:
            query = query.filter(UserModel.tenant_id == tenant_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self._query()
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .order_by(UserModel.id)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            tenant_id=user.tenant_id,
            role_id=user.role.id,
            name=user.name,
            email=user.email,
            password=user.password,
            department=user.department,
            is_active=user.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_active_ids(self, tenant_id: int) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def list_ids_by_role_aliases(self, tenant_id: int, aliases: Iterable[str]) -> list[int]:
        lowered = {alias.strip().lower() for alias in aliases if alias and alias.strip()}
        if not lowered:
            return []
        query = (
            self.session.query(UserModel.id)
            .join(RoleModel, UserModel.role_id == RoleModel.id)
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.is_active.is_(True))
            .filter(func.lower(RoleModel.alias).in_(lowered))
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def list_ids_by_departments(self, tenant_id: int, departments: Iterable[str]) -> list[int]:
        lowered = {name.strip().lower() for name in departments if name and name.strip()}
        if not lowered:
            return []
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.is_active.is_(True))
            .filter(func.lower(UserModel.department).in_(lowered))
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def list_departments(self, tenant_id: int) -> set[str]:
        query = (
            self.session.query(UserModel.department)
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.department.isnot(None))
            .distinct()
        )
        return {department.lower() for (department,) in query.all()}

    def list_by_names(self, tenant_id: int, names: Iterable[str]) -> list[User]:
        """Return active users whose display name matches one of ``names`` ignoring case."""

        lowered = {name.lower() for name in names if name}
        if not lowered:
            return []
        query = (
            self._query()
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.is_active.is_(True))
            .filter(func.lower(UserModel.name).in_(lowered))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get_map_by_ids(self, tenant_id: int, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        unique_ids = {int(user_id) for user_id in user_ids}
        query = (
            self._query()
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.id.in_(unique_ids))
        )
        return {model.id: self._to_entity(model) for model in query.all()}

    def filter_tenant_ids(self, tenant_id: int, user_ids: Iterable[int]) -> list[int]:
        """Return the subset of ``user_ids`` that are active members of ``tenant_id``."""

        requested = [int(user_id) for user_id in user_ids]
        if not requested:
            return []
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.tenant_id == tenant_id)
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.id.in_(set(requested)))
        )
        known = {user_id for (user_id,) in query.all()}
        return [user_id for user_id in requested if user_id in known]

    def _query(self):
        return self.session.query(UserModel).options(joinedload(UserModel.role))

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        role = model.role
        if role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return User(
            id=model.id,
            tenant_id=model.tenant_id,
            role=Role(id=role.id, name=role.name, alias=role.alias),
            name=model.name,
            email=model.email,
            password=model.password,
            department=model.department,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
