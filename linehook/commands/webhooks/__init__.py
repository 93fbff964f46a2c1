"""Webhook command handlers."""

from linehook.commands.webhooks.line_webhook_command import (
    LineWebhookCommand,
    WebhookState,
)

__all__ = ["LineWebhookCommand", "WebhookState"]
