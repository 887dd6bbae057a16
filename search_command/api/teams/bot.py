"""
Teams activity handler for the NuGet search command.

- Messages are routed by CommandDispatcher.
- composeExtension/query searches NuGet and lists the packages.
- composeExtension/selectItem renders the package card for the picked result.
"""
import logging
import uuid
from typing import Any

from botbuilder.core import CardFactory, MessageFactory, TurnContext
from botbuilder.core.teams import TeamsActivityHandler
from botbuilder.schema.teams import MessagingExtensionQuery, MessagingExtensionResponse

from search_command.api.teams.adaptive_cards import create_error_card
from search_command.api.teams.command_dispatcher import CommandDispatcher
from search_command.api.teams.invoke_models import create_error_response, create_success_response
from search_command.api.teams.search_results import format_search_results, render_selected_package
from search_command.errors import SearchCommandError
from search_command.models.packages import DEFAULT_RESULT_COUNT, SearchQuery
from search_command.services.nuget_client import NuGetSearchClient
from search_command.templates.card_templates import CardTemplateResolver

logger = logging.getLogger(__name__)

QUERY_TEXT_PARAMETER = "queryText"


def extract_search_query(query: MessagingExtensionQuery) -> SearchQuery:
    """Read the query text parameter and the requested page size."""
    text = ""
    for parameter in query.parameters or []:
        if parameter.name == QUERY_TEXT_PARAMETER:
            text = parameter.value or ""
            break

    count = DEFAULT_RESULT_COUNT
    if query.query_options and query.query_options.count is not None:
        count = query.query_options.count

    return SearchQuery(text=str(text), count=count)


class SearchCommandBot(TeamsActivityHandler):
    """Stateless Teams bot: every turn is handled on its own."""

    def __init__(self, search_client: NuGetSearchClient, resolver: CardTemplateResolver):
        self.search_client = search_client
        self.resolver = resolver
        self.dispatcher = CommandDispatcher(search_client, resolver)

    async def on_message_activity(self, turn_context: TurnContext):
        try:
            reply = await self.dispatcher.dispatch(turn_context.activity.text)
        except SearchCommandError as e:
            correlation_id = str(uuid.uuid4())
            logger.error(f"Command failed (Correlation: {correlation_id}): {e}", exc_info=True)
            error_card = create_error_card(e.user_message, correlation_id)
            await turn_context.send_activity(
                MessageFactory.attachment(CardFactory.adaptive_card(error_card["content"]))
            )
            return

        await turn_context.send_activity(reply)

    async def on_teams_messaging_extension_query(
        self,
        turn_context: TurnContext,
        query: MessagingExtensionQuery
    ) -> MessagingExtensionResponse:
        command_id = query.command_id or "searchQuery"
        try:
            search_query = extract_search_query(query)
            packages = await self.search_client.search_packages(search_query)
            result = create_success_response(command_id, format_search_results(packages))
        except (SearchCommandError, ValueError) as e:
            result = create_error_response(command_id, e)
            logger.error(f"Search failed (Correlation: {result.correlation_id}): {e}", exc_info=True)

        return result.to_messaging_extension_response()

    async def on_teams_messaging_extension_select_item(
        self,
        turn_context: TurnContext,
        query: Any
    ) -> MessagingExtensionResponse:
        try:
            card_result = await render_selected_package(query, self.resolver)
            result = create_success_response("selectItem", card_result)
        except SearchCommandError as e:
            result = create_error_response("selectItem", e)
            logger.error(f"Select item failed (Correlation: {result.correlation_id}): {e}", exc_info=True)

        return result.to_messaging_extension_response()
