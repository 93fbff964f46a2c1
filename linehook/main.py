"""ASGI application factory for the LINE webhook endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from fastapi import FastAPI

from linehook.config import Settings, get_settings
from linehook.routers import webhooks

if TYPE_CHECKING:
    from linehook.bot import LineBot


def create_app(bot: LineBot) -> FastAPI:
    """
    Build the FastAPI app serving bot's webhook.

    The webhook route catches every path, so the interactive docs are off.
    """
    app = FastAPI(
        title="linehook",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.bot = bot
    app.include_router(webhooks.router)
    return app


def create_app_from_settings(settings: Optional[Settings] = None) -> FastAPI:
    """
    App for ``uvicorn --factory linehook.main:create_app_from_settings``.

    Handlers must be registered on the returned ``app.state.bot``.
    """
    from linehook.bot import LineBot

    return LineBot.from_settings(settings or get_settings()).app
