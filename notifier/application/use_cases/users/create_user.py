"""Use case for registering a tenant user."""

from sqlalchemy.orm import Session

from notifier.domain.entities import Role, User
from notifier.domain.errors import ValidationError
from notifier.infrastructure.repositories import RoleRepository, UserRepository
from notifier.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    tenant_id: int,
    name: str,
    email: str,
    password: str,
    role_alias: str = "user",
    department: str | None = None,
    is_active: bool = True,
) -> User:
    """Create a user, creating its role on first use."""

    if UserRepository(session).get_by_email(email) is not None:
        raise ValidationError("Email already registered", [f"email: {email} is taken"])

    role = RoleRepository(session).get_or_create(name=role_alias.title(), alias=role_alias)
    user = User(
        id=None,
        tenant_id=tenant_id,
        role=Role(id=role.id, name=role.name, alias=role.alias),
        name=name,
        email=email,
        password=get_password_hash(password),
        department=department,
        is_active=is_active,
    )
    return UserRepository(session).create(user)
