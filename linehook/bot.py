"""
LINE bot facade.

Ties the frozen channel config, the outbound client and the event bus
together, and serves the webhook.

Example:
    bot = LineBot(channel_secret="...", channel_token="...")

    @bot.on("webhook:message")
    def echo(event):
        event.reply(event.message)

    bot.listen(port=3000)
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

import requests
import uvicorn
from fastapi import FastAPI

from linehook.adapters.line_client import LineClient, OutboundMessages
from linehook.commands.webhooks import LineWebhookCommand
from linehook.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    BotConfig,
    Settings,
    get_settings,
)
from linehook.core.event_bus import DEFAULT_MAX_LISTENERS, EventBus, Handler, Topic
from linehook.infra.logging_config import configure_logging, get_logger
from linehook.main import create_app
from linehook.schemas.events import Event
from linehook.schemas.messages import Message
from linehook.schemas.profile import Profile
from linehook.schemas.sources import Source, UserSource

logger = get_logger("bot")


class LineBot:
    """LINE Messaging API bot: webhook receiver plus outbound calls."""

    def __init__(
        self,
        channel_secret: Optional[str] = None,
        channel_token: Optional[str] = None,
        *,
        config: Optional[BotConfig] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_listeners: int = DEFAULT_MAX_LISTENERS,
        session: Optional[requests.Session] = None,
    ) -> None:
        if config is None:
            config = BotConfig(
                channel_secret=channel_secret or "",
                channel_token=channel_token or "",
            )
        self.config = config
        self.client = LineClient(
            config.channel_token,
            base_url=api_base_url,
            timeout=timeout,
            session=session,
        )
        self.bus = EventBus(max_listeners=max_listeners)
        self._app: Optional[FastAPI] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> LineBot:
        """Build a bot from LINE_* environment settings."""
        settings = settings or get_settings()
        return cls(
            config=settings.bot_config(),
            api_base_url=settings.line_api_base_url,
            timeout=settings.line_request_timeout,
            **kwargs,
        )

    def on(self, topic: Topic, handler: Optional[Handler] = None) -> Any:
        """
        Subscribe to a topic such as ``webhook:message`` or ``webhook:*``.

        Returns the bot for chaining; without a handler, returns a decorator.
        """
        if handler is None:

            def decorator(func: Handler) -> Handler:
                self.bus.on(topic, func)
                return func

            return decorator
        self.bus.on(topic, handler)
        return self

    def off(self, topic: Topic, handler: Handler) -> bool:
        return self.bus.off(topic, handler)

    def emit(self, topic: Topic, payload: Any) -> int:
        return self.bus.emit(topic, payload)

    def handle_webhook(self, raw_body: bytes, signature: Optional[str]) -> list[Event]:
        """Run one delivery through the pipeline, for hosts other than the bundled app."""
        command = LineWebhookCommand(self.config, self.bus, replier=self.client.reply)
        events = command.execute(raw_body, signature)
        command.complete()
        return events

    def push(self, to: str, messages: OutboundMessages) -> None:
        self.client.push(to, messages)

    def get_content(self, message_id: str) -> Iterator[bytes]:
        return self.client.get_content(message_id)

    def get_content_from_message(self, message: Message) -> Iterator[bytes]:
        return self.client.get_content_from_message(message)

    def get_profile(self, user_id: str) -> Profile:
        return self.client.get_profile(user_id)

    def get_profile_from_user_source(self, source: UserSource) -> Profile:
        return self.client.get_profile_from_user_source(source)

    def leave(self, kind: str, target_id: str) -> None:
        self.client.leave(kind, target_id)

    def leave_from_source(self, source: Source) -> None:
        self.client.leave_from_source(source)

    @property
    def app(self) -> FastAPI:
        """ASGI app serving the webhook; built on first access."""
        if self._app is None:
            self._app = create_app(self)
        return self._app

    def listen(
        self,
        port: int = 8000,
        host: str = "0.0.0.0",
        log_level: str = "INFO",
        **uvicorn_kwargs: Any,
    ) -> None:
        """Serve the webhook with uvicorn until interrupted."""
        configure_logging(log_level)
        logger.info("Listening for LINE webhooks on %s:%d", host, port)
        uvicorn.run(
            self.app,
            host=host,
            port=port,
            log_level=log_level.lower(),
            **uvicorn_kwargs,
        )
