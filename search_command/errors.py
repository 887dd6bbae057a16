"""
Error types surfaced at the top of a Teams turn.

Every component raises one of these instead of returning default content,
so the turn handler can tell "no results" apart from "request failed" and
show the user a visible failure.
"""
from typing import Optional


class SearchCommandError(Exception):
    """Base class for bot errors that should be shown to the user."""

    error_code = "INTERNAL_ERROR"
    user_message = "Something went wrong while handling your request."


class TransportFailure(SearchCommandError):
    """Network or HTTP failure talking to a remote service."""

    error_code = "TRANSPORT_FAILURE"
    user_message = "The package search service could not be reached. Please try again."


class SearchFailure(TransportFailure):
    """NuGet search request failed or returned an unusable body."""

    error_code = "SEARCH_FAILED"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TemplateLoadError(SearchCommandError):
    """Card template could not be resolved or read."""

    error_code = "TEMPLATE_UNAVAILABLE"
    user_message = "The card for this command is not available right now."

    def __init__(self, template_name: str, message: str):
        super().__init__(f"Template '{template_name}': {message}")
        self.template_name = template_name


class ExpansionError(SearchCommandError):
    """Template and binding data did not produce a valid card."""

    error_code = "CARD_RENDER_FAILED"
    user_message = "The card could not be built from the search result."


class NoSearchResultsError(ExpansionError):
    """A command needed a search hit to render but the search came back empty."""

    error_code = "NO_RESULTS"
    user_message = "No packages matched the search."
