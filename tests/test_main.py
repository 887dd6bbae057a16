"""Tests for the FastAPI host and the Bot Framework webhook."""

from unittest.mock import AsyncMock, patch

import pytest
from botbuilder.schema import InvokeResponse
from fastapi.testclient import TestClient

from search_command.api.teams import routes
from search_command.api.teams.bot import SearchCommandBot
from search_command.main import app

MESSAGE_ACTIVITY = {
    "type": "message",
    "id": "msg-test-001",
    "channelId": "msteams",
    "serviceUrl": "https://smba.trafficmanager.net/amer/",
    "from": {"id": "user-test", "name": "Test User"},
    "conversation": {"id": "conv-test", "conversationType": "personal"},
    "recipient": {"id": "bot-test", "name": "SearchCommand"},
    "text": "designer",
}


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_messages_endpoint(client):
    response = client.get("/")
    assert response.json()["endpoints"]["messages"] == "/api/messages"


def test_lifespan_builds_bot(client):
    assert isinstance(client.app.state.bot, SearchCommandBot)


def test_message_activity_is_processed(client):
    with patch.object(routes.adapter, "process_activity", AsyncMock(return_value=None)) as process:
        response = client.post("/api/messages", json=MESSAGE_ACTIVITY)

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    activity, auth_header, logic = process.call_args.args
    assert activity.text == "designer"
    assert auth_header == ""
    assert logic == client.app.state.bot.on_turn


def test_invoke_response_body_is_returned(client):
    invoke_response = InvokeResponse(status=200, body={"composeExtension": {"type": "result", "attachments": []}})
    activity = dict(MESSAGE_ACTIVITY, type="invoke", name="composeExtension/query")

    with patch.object(routes.adapter, "process_activity", AsyncMock(return_value=invoke_response)):
        response = client.post("/api/messages", json=activity, headers={"Authorization": "Bearer token"})

    assert response.status_code == 200
    assert response.json() == {"composeExtension": {"type": "result", "attachments": []}}


def test_unauthorized_activity(client):
    with patch.object(routes.adapter, "process_activity", AsyncMock(side_effect=PermissionError("bad token"))):
        response = client.post("/api/messages", json=MESSAGE_ACTIVITY)

    assert response.status_code == 401


def test_processing_error_returns_500(client):
    with patch.object(routes.adapter, "process_activity", AsyncMock(side_effect=RuntimeError("connector down"))):
        response = client.post("/api/messages", json=MESSAGE_ACTIVITY)

    assert response.status_code == 500
    assert response.json()["error"] == "connector down"


def test_malformed_body_returns_400(client):
    response = client.post(
        "/api/messages",
        content=b"{not json",
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_json"


@pytest.mark.asyncio
async def test_on_turn_error_sends_generic_message():
    turn_context = AsyncMock()

    await routes.on_turn_error(turn_context, RuntimeError("unexpected"))

    turn_context.send_activity.assert_awaited_once_with("The bot encountered an error. Please try again.")
