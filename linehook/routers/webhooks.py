"""
Webhook route for inbound LINE deliveries.

LINE POSTs signed event batches; any method on any path is accepted so the bot
can be mounted wherever the channel's webhook URL points.
"""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from linehook.commands.webhooks import LineWebhookCommand
from linehook.constants.line_types import SIGNATURE_HEADER
from linehook.errors import AuthError, MalformedPayloadError
from linehook.infra.logging_config import get_logger

logger = get_logger("webhooks")

router = APIRouter(tags=["webhooks"])

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=WEBHOOK_METHODS)
async def line_webhook(request: Request, path: str) -> Response:
    """
    Receive a LINE webhook delivery. Verify, decode and publish its events.

    Returns 200 with an empty body once every event has been published, or
    400 with {"error": <message>} when the signature or body is invalid.
    Handler exceptions are not caught here. The pipeline runs in a worker
    thread because handlers make blocking outbound calls such as reply.
    """
    bot = request.app.state.bot
    raw_body = await request.body()
    command = LineWebhookCommand(bot.config, bot.bus, replier=bot.client.reply)
    try:
        events = await run_in_threadpool(
            command.execute,
            raw_body,
            request.headers.get(SIGNATURE_HEADER),
            loop=asyncio.get_running_loop(),
        )
    except (AuthError, MalformedPayloadError) as e:
        logger.warning("Rejected webhook on /%s: %s", path, e)
        return JSONResponse(status_code=400, content={"error": str(e)})
    logger.info("Webhook on /%s published %d event(s)", path, len(events))
    command.complete()
    return Response(status_code=200)
