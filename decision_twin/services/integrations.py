"""Integrations — outbound webhook fired when a decision is logged.

Invariants:
    - Never raises: a disabled webhook, missing URL, network error or non-2xx
      response all return False
    - Payload is a `decision_logged` event carrying the decision minus outcomes
"""

import logging

import httpx

from decision_twin.core.clock import Clock, to_iso, utc_now
from decision_twin.schemas.decision import Decision
from decision_twin.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

WEBHOOK_EVENT = "decision_logged"


def build_webhook_payload(decision: Decision, now) -> dict:
    body = decision.to_dict()
    body.pop("outcomes", None)
    return {"event": WEBHOOK_EVENT, "timestamp": to_iso(now), "decision": body}


class IntegrationService:
    def __init__(
        self,
        settings: SettingsService,
        timeout_seconds: float = 10.0,
        clock: Clock = utc_now,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.timeout_seconds = timeout_seconds
        self.clock = clock
        self.transport = transport

    async def trigger_webhook(self, decision: Decision) -> bool:
        config = await self.settings.get_integration_settings()
        if not config.webhook_enabled or not config.webhook_url:
            return False

        payload = build_webhook_payload(decision, self.clock())
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport,
            ) as client:
                response = await client.post(config.webhook_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning(
                f"Webhook trigger failed: {e}", extra={"decision_id": decision.id},
            )
            return False
        logger.info("Webhook delivered", extra={"decision_id": decision.id})
        return True
