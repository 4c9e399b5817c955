"""Persistence helpers for roles."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from notifier.domain.entities import Role
from notifier.infrastructure.models import RoleModel


class RoleRepository:
    """Provide lookups over the shared role catalogue."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.alias) == alias.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_aliases(self) -> set[str]:
        return {alias.lower() for (alias,) in self.session.query(RoleModel.alias).all()}

    def get_or_create(self, *, name: str, alias: str) -> Role:
        existing = self.get_by_alias(alias)
        if existing is not None:
            return existing
        model = RoleModel(name=name, alias=alias)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
