"""Use case for authenticating a user."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from notifier.domain.entities import User
from notifier.infrastructure.repositories import UserRepository
from notifier.infrastructure.security import verify_password

logger = logging.getLogger(__name__)


class AuthenticationStatus(Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class AuthenticationResult:
    status: AuthenticationStatus
    user: User | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is AuthenticationStatus.SUCCESS


def authenticate_user(session: Session, email: str, password: str) -> AuthenticationResult:
    """Check ``password`` for the account registered under ``email``.

    Unknown emails and wrong passwords are indistinguishable to the caller.
    The user is only returned once the password matched.
    """

    user = UserRepository(session).get_by_email(email)
    if user is None or not verify_password(password, user.password):
        return AuthenticationResult(AuthenticationStatus.INVALID_CREDENTIALS)

    if not user.is_active:
        logger.info("Rejected sign-in of inactive user %s", user.id)
        return AuthenticationResult(AuthenticationStatus.INACTIVE, user)

    return AuthenticationResult(AuthenticationStatus.SUCCESS, user)
