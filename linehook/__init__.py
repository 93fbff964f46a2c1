"""Webhook receiver and API client for LINE Messaging API bots."""

from linehook.bot import LineBot
from linehook.config import BotConfig
from linehook.errors import (
    AuthError,
    DecodeError,
    LineBotError,
    MalformedPayloadError,
    RemoteCallError,
    ReplyUnavailableError,
)

__all__ = [
    "AuthError",
    "BotConfig",
    "DecodeError",
    "LineBot",
    "LineBotError",
    "MalformedPayloadError",
    "RemoteCallError",
    "ReplyUnavailableError",
]
