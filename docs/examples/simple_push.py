"""Push a single text message to one user."""

import sys

from linehook import LineBot
from linehook.schemas import TextMessage

if __name__ == "__main__":
    bot = LineBot.from_settings()
    bot.push(sys.argv[1] if len(sys.argv) > 1 else "USER_ID", TextMessage(text="Hello World"))
