"""Platform adapters for outbound calls."""

from linehook.adapters.line_client import LineClient, serialize_messages

__all__ = ["LineClient", "serialize_messages"]
