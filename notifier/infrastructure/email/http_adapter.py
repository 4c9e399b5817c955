"""Shared plumbing for vendors reached over a JSON/form REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from notifier.domain.entities import DeliveryOutcome

from .base import EmailAdapter

logger = logging.getLogger(__name__)


class HttpEmailAdapter(EmailAdapter):
    """Base class for ``httpx`` based adapters.

    Tests inject an ``httpx.MockTransport`` through ``transport``.
    """

    vendor_name: str = "HTTP"

    def __init__(self, *, transport: httpx.BaseTransport | None = None, timeout: float = 30.0) -> None:
        self._transport = transport
        self._timeout = timeout

    def _post(self, url: str, **kwargs: Any) -> httpx.Response | DeliveryOutcome:
        try:
            with httpx.Client(transport=self._transport, timeout=self._timeout) as client:
                response = client.post(url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.vendor_name, exc)
            return DeliveryOutcome.failed(f"{self.vendor_name} request failed: {exc}")

        if response.is_success:
            return response

        detail = response.text.strip()[:500]
        logger.warning(
            "%s API responded with status %s: %s", self.vendor_name, response.status_code, detail
        )
        return DeliveryOutcome.failed(
            f"{self.vendor_name} responded with status {response.status_code}"
            + (f": {detail}" if detail else "")
        )

    @staticmethod
    def _json_field(response: httpx.Response, key: str) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and body.get(key) is not None:
            return str(body[key])
        return None


__all__ = ["HttpEmailAdapter"]
