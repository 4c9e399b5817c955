"""Amazon SES placeholder adapter."""

from __future__ import annotations

import logging

from notifier.domain.entities import (
    DeliveryOutcome,
    EmailMessage,
    EmailProvider,
    EmailProviderSetting,
)

from .base import EmailAdapter

logger = logging.getLogger(__name__)

SES_NOT_IMPLEMENTED = "not implemented: SES delivery requires the AWS SDK"


class SesAdapter(EmailAdapter):
    """SES settings can be stored, but every send reports a failure."""

    provider = EmailProvider.SES

    def send(self, settings: EmailProviderSetting, message: EmailMessage) -> DeliveryOutcome:
        logger.warning("SES provider %s selected but SES delivery is not available", settings.id)
        return DeliveryOutcome.failed(SES_NOT_IMPLEMENTED)


__all__ = ["SES_NOT_IMPLEMENTED", "SesAdapter"]
