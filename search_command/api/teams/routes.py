"""
Microsoft Teams Bot Framework webhook endpoint.
"""
import logging

from botbuilder.core import BotFrameworkAdapter, BotFrameworkAdapterSettings, TurnContext
from botbuilder.schema import Activity
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from search_command.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["teams"])

settings = get_settings()

adapter = BotFrameworkAdapter(
    BotFrameworkAdapterSettings(
        app_id=settings.APP_ID,
        app_password=settings.APP_PASSWORD,
        channel_auth_tenant=settings.TENANT_ID
    )
)


async def on_turn_error(turn_context: TurnContext, error: Exception):
    """Last-resort handler for errors the bot did not turn into a reply."""
    logger.error(f"Unhandled error in bot turn: {error}", exc_info=error)
    await turn_context.send_activity("The bot encountered an error. Please try again.")


adapter.on_turn_error = on_turn_error


@router.post("/messages")
async def messages(request: Request):
    """
    Bot Framework webhook.

    Invoke activities (message extension query/selectItem) return the invoke
    response body; every other activity is answered through the connector.
    """
    body = await request.json()
    activity = Activity().deserialize(body)
    auth_header = request.headers.get("Authorization", "")
    logger.info(f"Received Teams activity: {activity.type} {activity.name or ''}".rstrip())

    try:
        invoke_response = await adapter.process_activity(activity, auth_header, request.app.state.bot.on_turn)
    except PermissionError as e:
        logger.warning(f"Rejected unauthenticated activity: {e}")
        return JSONResponse(content={"error": "unauthorized"}, status_code=401)
    except Exception as e:
        logger.error(f"Error in Teams webhook: {e}", exc_info=True)
        return JSONResponse(content={"error": str(e)}, status_code=500)

    if invoke_response:
        return JSONResponse(content=invoke_response.body, status_code=invoke_response.status)

    return JSONResponse(content={"status": "ok"}, status_code=200)
