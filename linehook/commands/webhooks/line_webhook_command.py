"""
Command to handle one LINE webhook request.

Verifies the X-Line-Signature over the raw body, parses the JSON, decodes every
event, then publishes each on ``webhook:<type>`` in array order. One command
instance serves one request; its state never outlives it.
"""

from __future__ import annotations

import asyncio
import json
from enum import StrEnum
from typing import Any, Optional

from linehook.config import BotConfig
from linehook.constants.line_types import WEBHOOK_TOPIC_PREFIX
from linehook.core.event_bus import EventBus
from linehook.core.signature import verify_signature
from linehook.errors import AuthError, MalformedPayloadError
from linehook.infra.logging_config import get_logger
from linehook.schemas.events import Event, Replier, decode_event

INVALID_REQUEST = "Invalid request."
INVALID_JSON = "Invalid JSON."


class WebhookState(StrEnum):
    RECEIVED = "received"
    SIGNATURE_CHECKED = "signature_checked"
    BODY_PARSED = "body_parsed"
    EVENTS_DISPATCHED = "events_dispatched"
    RESPONDED = "responded"
    ERRORED = "errored"


class LineWebhookCommand:
    """
    Command to handle a LINE webhook delivery.
    Signature check strictly precedes parsing; no handler runs unless every
    event in the delivery decodes.
    """

    def __init__(
        self,
        config: BotConfig,
        bus: EventBus,
        replier: Optional[Replier] = None,
    ) -> None:
        self.config = config
        self.bus = bus
        self.replier = replier
        self.state = WebhookState.RECEIVED
        self.logger = get_logger(__name__)

    def execute(
        self,
        raw_body: bytes,
        signature: Optional[str],
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> list[Event]:
        """
        Run the pipeline over one request body.

        Every event is decoded before any is published: when one event in the
        batch fails to decode, no event is published.

        Args:
            raw_body: The request body exactly as received.
            signature: Value of the X-Line-Signature header, if any.
            loop: Event loop for async handler results when running in a
                worker thread.

        Returns:
            list[Event]: The decoded events, in the order they were published.

        Raises:
            AuthError: the signature does not match the channel secret.
            MalformedPayloadError: the body is not a JSON object with an
                ``events`` array, or an event fails to decode.
        """
        try:
            self._check_signature(raw_body, signature)
            self._transition(WebhookState.SIGNATURE_CHECKED)
            events = self._decode_events(self._parse_body(raw_body))
            self._transition(WebhookState.BODY_PARSED)
            for event in events:
                self.bus.emit(f"{WEBHOOK_TOPIC_PREFIX}:{event.type}", event, loop=loop)
            self._transition(WebhookState.EVENTS_DISPATCHED)
        except Exception:
            self._transition(WebhookState.ERRORED)
            raise
        return events

    def complete(self) -> None:
        """Mark the response as sent."""
        self._transition(WebhookState.RESPONDED)

    def _check_signature(self, raw_body: bytes, signature: Optional[str]) -> None:
        if not verify_signature(raw_body, signature, self.config.channel_secret):
            raise AuthError(INVALID_REQUEST)

    def _parse_body(self, raw_body: bytes) -> list[Any]:
        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedPayloadError(INVALID_JSON) from e
        if not isinstance(payload, dict) or not isinstance(
            payload.get("events"), list
        ):
            raise MalformedPayloadError(INVALID_JSON)
        return payload["events"]

    def _decode_events(self, raw_events: list[Any]) -> list[Event]:
        return [decode_event(raw, replier=self.replier) for raw in raw_events]

    def _transition(self, state: WebhookState) -> None:
        self.logger.debug("Webhook %s -> %s", self.state, state)
        self.state = state
