"""
Text command routing for Teams messages.

Each message is matched exactly (after mention removal and trimming) against
the known commands. Nothing is remembered between turns.
"""
import logging
import re
from typing import Optional

from botbuilder.core import MessageFactory
from botbuilder.schema import Activity

from search_command.api.teams.adaptive_cards import adaptive_card_message
from search_command.api.teams.search_results import PACKAGE_TEMPLATE, card_package_from
from search_command.errors import NoSearchResultsError
from search_command.models.packages import PromptBinding, SearchQuery
from search_command.services.nuget_client import NuGetSearchClient
from search_command.templates.card_templates import CardTemplateResolver

logger = logging.getLogger(__name__)

DESIGNER_COMMAND = "designer"
NUGET_JSON_CARD_COMMAND = "nugetjsoncard"
DESIGNER_TEMPLATE = "designer"

NUGET_JSON_CARD_QUERY = SearchQuery(text="Json", count=1)


def remove_mention_text(text: Optional[str]) -> str:
    """
    Remove bot mention tags from message text.

    Teams includes mentions as <at>BotName</at> in the text.
    """
    if not text:
        return ""

    cleaned = re.sub(r'<at>.*?</at>', '', text, flags=re.IGNORECASE)
    return cleaned.strip()


def unmatched_prompt_text(text: str) -> str:
    return f"Your prompt {text} did not match any actions!"


class CommandDispatcher:
    """Routes a message to the designer card, the Json package card, or a text fallback."""

    def __init__(self, search_client: NuGetSearchClient, resolver: CardTemplateResolver):
        self.search_client = search_client
        self.resolver = resolver

    async def build_reply(self, text: str) -> Activity:
        """
        Produce the single outbound message for a command.

        Raises:
            SearchFailure, TemplateLoadError, ExpansionError: the turn must
                report the failure instead of sending a card
        """
        if text == DESIGNER_COMMAND:
            logger.info("Routing to designer card")
            content = await self.resolver.render(DESIGNER_TEMPLATE, PromptBinding(PromptText=text))
            return adaptive_card_message(content)

        if text == NUGET_JSON_CARD_COMMAND:
            logger.info("Routing to Json package card")
            packages = await self.search_client.search_packages(NUGET_JSON_CARD_QUERY)
            if not packages:
                raise NoSearchResultsError(
                    f"No packages found for '{NUGET_JSON_CARD_QUERY.text}'"
                )
            content = await self.resolver.render(PACKAGE_TEMPLATE, card_package_from(packages[0]))
            return adaptive_card_message(content)

        logger.info(f"No command matched '{text}'")
        return MessageFactory.text(unmatched_prompt_text(text))

    async def dispatch(self, raw_text: Optional[str]) -> Activity:
        """Clean the raw message text and build the reply."""
        return await self.build_reply(remove_mention_text(raw_text))
