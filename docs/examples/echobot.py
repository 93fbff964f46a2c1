"""
Echo every message back to its sender.

Run with LINE_CHANNEL_SECRET and LINE_CHANNEL_TOKEN set (or in .env), then
point the channel's webhook URL at this host.
"""

from linehook import LineBot
from linehook.config import get_settings
from linehook.infra.logging_config import get_logger

logger = get_logger("examples.echobot")

settings = get_settings()
bot = LineBot.from_settings(settings)


@bot.on("webhook:*")
def log_event(event):
    logger.info("You got a %s event from %s", event.type, event.source.type)


@bot.on("webhook:message")
def echo(event):
    event.reply(event.message)


if __name__ == "__main__":
    bot.listen(port=settings.port, host=settings.host, log_level=settings.log_level)
