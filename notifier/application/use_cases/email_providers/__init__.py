"""Use cases for tenant email provider settings."""

from .activate_provider import activate_email_provider
from .create_provider import create_email_provider
from .delete_provider import delete_email_provider
from .get_provider import get_email_provider, list_email_providers
from .list_email_logs import EmailLogPage, list_email_logs
from .verify_provider import ProviderTestResult, send_test_email
from .update_provider import update_email_provider

__all__ = [
    "EmailLogPage",
    "ProviderTestResult",
    "activate_email_provider",
    "create_email_provider",
    "delete_email_provider",
    "get_email_provider",
    "list_email_logs",
    "list_email_providers",
    "send_test_email",
    "update_email_provider",
]
