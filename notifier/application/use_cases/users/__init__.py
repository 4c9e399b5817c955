"""Use cases for tenant users."""

from .authenticate_user import AuthenticationResult, AuthenticationStatus, authenticate_user
from .create_user import create_user

__all__ = ["AuthenticationResult", "AuthenticationStatus", "authenticate_user", "create_user"]
