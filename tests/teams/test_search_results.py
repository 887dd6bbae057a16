"""Tests for message extension search result formatting and item selection."""

import pytest
from botbuilder.core import CardFactory
from botbuilder.schema import HeroCard

from search_command.api.teams.adaptive_cards import ADAPTIVE_CARD_CONTENT_TYPE
from search_command.api.teams.search_results import (
    card_package_from,
    format_search_results,
    render_selected_package,
)
from search_command.errors import ExpansionError
from search_command.models.packages import PackageRecord


@pytest.fixture
def records(newtonsoft_record):
    return [
        PackageRecord(id="A.First", description="first package"),
        newtonsoft_record,
        PackageRecord(id="Z.Last", description=""),
    ]


class TestFormatSearchResults:

    def test_one_entry_per_record_in_order(self, records):
        result = format_search_results(records)

        assert result.type == "result"
        assert result.attachment_layout == "list"
        assert [a.content.title for a in result.attachments] == ["A.First", "Newtonsoft.Json", "Z.Last"]

    def test_entry_shape(self, newtonsoft_record):
        attachment = format_search_results([newtonsoft_record]).attachments[0]

        assert attachment.content_type == CardFactory.content_types.hero_card
        assert isinstance(attachment.content, HeroCard)
        assert attachment.content.text == newtonsoft_record.description

        preview = attachment.preview
        assert preview.content_type == CardFactory.content_types.hero_card
        assert preview.content.title == "Newtonsoft.Json"
        assert preview.content.tap.type == "invoke"
        assert preview.content.tap.value == newtonsoft_record.model_dump(mode="json")

    def test_empty_results(self):
        result = format_search_results([])

        assert result.type == "result"
        assert result.attachments == []


class TestSelectedPackage:

    @pytest.mark.asyncio
    async def test_selection_round_trip_keeps_record_fields(self, records, resolver):
        result = format_search_results(records)

        for attachment, record in zip(result.attachments, records):
            selected = attachment.preview.content.tap.value
            card_result = await render_selected_package(selected, resolver)

            assert card_result.type == "result"
            assert len(card_result.attachments) == 1
            card = card_result.attachments[0]
            assert card.content_type == ADAPTIVE_CARD_CONTENT_TYPE

            header = card.content["body"][0]["columns"][1]["items"][0]
            description = card.content["body"][1]
            assert header["text"] == record.id
            assert description["text"] == record.description

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item", [None, {}, {"description": "no id"}, "Newtonsoft.Json"])
    async def test_bad_selection_raises_expansion_error(self, item, resolver):
        with pytest.raises(ExpansionError):
            await render_selected_package(item, resolver)

    def test_card_package_rejects_bad_download_count(self):
        with pytest.raises(ExpansionError):
            card_package_from({"id": "X", "totalDownloads": "lots"})

    def test_card_package_defaults(self):
        package = card_package_from({"id": "Bare.Package"})

        assert package.version == ""
        assert package.nuget_url == "https://www.nuget.org/packages/Bare.Package"
        assert package.project_url == package.nuget_url
        assert package.total_downloads == 0
        assert package.icon_url.startswith("https://")
