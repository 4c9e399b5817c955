"""Domain entity describing a tenant's email vendor configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

SECRET_MASK = "***"


class EmailProvider(str, Enum):
    """Supported outbound email vendors."""

    SENDGRID = "SENDGRID"
    SMTP = "SMTP"
    MAILGUN = "MAILGUN"
    SES = "SES"
    POSTMARK = "POSTMARK"
    RESEND = "RESEND"


@dataclass
class EmailProviderSetting:
    """Credentials and sender identity for one vendor of one tenant."""

    id: int | None
    tenant_id: int
    provider: EmailProvider
    from_email: str
    from_name: str
    api_key: str
    reply_to_email: str | None = None
    api_secret: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_secure: bool | None = None
    config_data: dict[str, Any] = field(default_factory=dict)
    is_active: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def from_address(self) -> str:
        """Return the ``Name <email>`` sender header value."""

        return f"{self.from_name} <{self.from_email}>"

    def masked(self) -> "EmailProviderSetting":
        """Return a copy safe to hand back to API callers."""

        return replace(
            self,
            api_key=SECRET_MASK if self.api_key else "",
            api_secret=SECRET_MASK if self.api_secret else None,
        )


__all__ = ["EmailProvider", "EmailProviderSetting", "SECRET_MASK"]
