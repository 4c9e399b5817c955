"""Domain entity representing a tenant user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role

ADMIN_ROLE_ALIAS = "admin"


@dataclass
class User:
    """Tenant member that can receive notifications."""

    id: int | None
    tenant_id: int
    role: Role
    name: str
    email: str
    password: str
    department: str | None = None
    is_active: bool = True
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is a tenant administrator."""

        return self.has_role(ADMIN_ROLE_ALIAS)


__all__ = ["ADMIN_ROLE_ALIAS", "User"]
