from __future__ import annotations

import logging
from typing import Any

import httpx

from date_reminder.models import DEFAULT_SENDER_NAME, EmailConfig

LOGGER = logging.getLogger(__name__)

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"


class EmailDeliveryError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def build_payload(to_address: str, body_text: str, config: EmailConfig, private_key: str) -> dict[str, Any]:
    return {
        "service_id": config.service_id,
        "template_id": config.template_id,
        "user_id": config.pub_key,
        "accessToken": private_key,
        "template_params": {
            "to_email": to_address,
            "from_name": config.sender or DEFAULT_SENDER_NAME,
            "event_list": body_text,
        },
    }


class EmailNotifier:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        private_key: str | None,
        endpoint: str = EMAILJS_SEND_URL,
    ) -> None:
        self._client = client
        self._private_key = private_key
        self._endpoint = endpoint

    async def send_email(self, to_address: str, body_text: str, config: EmailConfig) -> None:
        """POST one digest to the provider; raise EmailDeliveryError unless it answers 2xx."""
        if not self._private_key:
            raise EmailDeliveryError("EmailJS private key is not configured")

        payload = build_payload(to_address, body_text, config, self._private_key)
        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"EmailJS request failed: {exc}") from exc

        if not response.is_success:
            raise EmailDeliveryError(
                f"EmailJS {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        LOGGER.debug("EmailJS accepted message for %s (%s)", to_address, response.status_code)
