"""Shared fixtures: a bot whose outbound session is mocked."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from linehook.bot import LineBot
from tests.fixtures.webhook_fixtures import CHANNEL_SECRET, CHANNEL_TOKEN, api_response


@pytest.fixture
def session():
    """Stand-in for requests.Session; every call answers 200 {}."""
    mock = MagicMock()
    mock.post.return_value = api_response(payload={})
    mock.get.return_value = api_response(payload={})
    return mock


@pytest.fixture
def bot(session):
    return LineBot(
        channel_secret=CHANNEL_SECRET,
        channel_token=CHANNEL_TOKEN,
        session=session,
    )


@pytest.fixture
def client(bot):
    with TestClient(bot.app) as c:
        yield c
