# Workflow automation webhooks (n8n)
from typing import Any, Dict, Optional

import httpx

from app.config import settings
from app.core.logging import logger


class WebhookNotifier:
    """Best-effort JSON POSTs to the workflow automation service."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.WEBHOOK_TIMEOUT_SECONDS
        self.transport = transport

    async def post(self, url: Optional[str], payload: Dict[str, Any], event: str = "webhook") -> bool:
        """
        POST a JSON payload.

        Args:
            url: Target endpoint; a missing URL is logged and skipped
            payload: JSON-serializable body
            event: Event name used in log lines

        Returns:
            bool: True on a 2xx response, False otherwise. Never raises.
        """
        if not url:
            logger.warning(f"{event} webhook URL not configured - skipping")
            return False

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException:
            logger.error(f"{event} webhook timed out: {url}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"{event} webhook request failed: {e}")
            return False

        if response.is_success:
            logger.info(f"{event} webhook delivered ({response.status_code})")
            return True

        logger.error(f"{event} webhook failed: {response.status_code} {response.reason_phrase}")
        return False

    async def appointment_approved(self, payload: Dict[str, Any]) -> bool:
        return await self.post(
            settings.APPOINTMENT_APPROVED_WEBHOOK_URL, payload, event="appointment_approved"
        )

    async def appointment_rejected(self, payload: Dict[str, Any]) -> bool:
        return await self.post(
            settings.APPOINTMENT_REJECTED_WEBHOOK_URL, payload, event="appointment_rejected"
        )

    async def call_list_activated(self, call_list_id: str, assistant_message: Optional[str]) -> bool:
        return await self.post(
            settings.CALL_LIST_WEBHOOK_URL,
            {"liste_id": call_list_id, "asistan_mesaji": assistant_message},
            event="call_list_activated",
        )


def get_webhook_notifier() -> WebhookNotifier:
    """Dependency for webhook access."""
    return WebhookNotifier()
