"""
Message extension result formatting for NuGet package search.
"""
import logging
from typing import Any, Iterable

from botbuilder.core import CardFactory
from botbuilder.schema import CardAction, HeroCard
from botbuilder.schema.teams import MessagingExtensionAttachment, MessagingExtensionResult
from pydantic import ValidationError

from search_command.api.teams.adaptive_cards import ADAPTIVE_CARD_CONTENT_TYPE
from search_command.errors import ExpansionError
from search_command.models.packages import CardPackage, PackageRecord
from search_command.templates.card_templates import CardTemplateResolver

logger = logging.getLogger(__name__)

PACKAGE_TEMPLATE = "package"


def package_attachment(package: PackageRecord) -> MessagingExtensionAttachment:
    """
    Build one search result entry.

    The preview's tap action is an invoke whose value is the package itself,
    so Teams sends it back to the selectItem handler.
    """
    return MessagingExtensionAttachment(
        content_type=CardFactory.content_types.hero_card,
        content=HeroCard(title=package.id, text=package.description),
        preview=CardFactory.hero_card(
            HeroCard(
                title=package.id,
                text=package.description,
                tap=CardAction(type="invoke", value=package.model_dump(mode="json"))
            )
        )
    )


def format_search_results(packages: Iterable[PackageRecord]) -> MessagingExtensionResult:
    """One list entry per package, in search order."""
    return MessagingExtensionResult(
        type="result",
        attachment_layout="list",
        attachments=[package_attachment(package) for package in packages]
    )


def card_package_from(item: Any) -> CardPackage:
    """
    Validate a package payload (selected item or search record) into card data.

    Raises:
        ExpansionError: payload does not have the package shape
    """
    try:
        record = item if isinstance(item, PackageRecord) else PackageRecord.model_validate(item)
        return CardPackage.create(record)
    except ValidationError as e:
        raise ExpansionError(f"Selected item is not a package: {e.errors()}") from e


async def render_selected_package(
    item: Any,
    resolver: CardTemplateResolver
) -> MessagingExtensionResult:
    """Render the package card for an item picked from the search results."""
    package = card_package_from(item)
    logger.info(f"Rendering selected package {package.id}")
    content = await resolver.render(PACKAGE_TEMPLATE, package)

    return MessagingExtensionResult(
        type="result",
        attachment_layout="list",
        attachments=[
            MessagingExtensionAttachment(
                content_type=ADAPTIVE_CARD_CONTENT_TYPE,
                content=content
            )
        ]
    )
