"""
Response models for Teams message extension invokes.

Message extension queries and item selections are answered with a
MessagingExtensionResponse. Failures are still answered (never a bare 500):
the compose extension result switches to a "message" result carrying the
user-facing error text and a correlation ID.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from botbuilder.schema.teams import MessagingExtensionResponse, MessagingExtensionResult

from search_command.errors import SearchCommandError


@dataclass
class ErrorDetails:
    """Structured error information for invoke failures."""
    error_code: str
    error_message: str
    user_message: str


@dataclass
class ExtensionActionResult:
    """
    Result of processing a message extension invoke.

    Holds either the compose extension result to return or the error that
    replaced it, plus the correlation ID used in logs.
    """
    command: str
    result: Optional[MessagingExtensionResult] = None
    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    error_details: Optional[ErrorDetails] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_messaging_extension_response(self) -> MessagingExtensionResponse:
        """Convert to the Teams compose extension response."""
        if self.error_details:
            return MessagingExtensionResponse(
                compose_extension=MessagingExtensionResult(
                    type="message",
                    text=f"{self.error_details.user_message} (Ref: {self.correlation_id})"
                )
            )

        return MessagingExtensionResponse(compose_extension=self.result)

    def is_success(self) -> bool:
        return self.error_details is None


class ExtensionResponseBuilder:
    """Fluent builder for message extension invoke responses."""

    def __init__(self, command: str):
        """
        Args:
            command: Message extension command being processed
        """
        self.result = ExtensionActionResult(command=command)

    def with_result(self, result: MessagingExtensionResult) -> 'ExtensionResponseBuilder':
        """Set the compose extension result to return."""
        self.result.result = result
        return self

    def with_error(
        self,
        error_code: str,
        error_message: str,
        user_message: Optional[str] = None
    ) -> 'ExtensionResponseBuilder':
        """Replace the result with an error shown to the user."""
        self.result.error_details = ErrorDetails(
            error_code=error_code,
            error_message=error_message,
            user_message=user_message or "An error occurred processing your request."
        )
        return self

    def with_correlation_id(self, correlation_id: str) -> 'ExtensionResponseBuilder':
        """Set specific correlation ID."""
        self.result.correlation_id = correlation_id
        return self

    def build(self) -> ExtensionActionResult:
        return self.result


def create_success_response(command: str, result: MessagingExtensionResult) -> ExtensionActionResult:
    """Helper to wrap a compose extension result."""
    return ExtensionResponseBuilder(command).with_result(result).build()


def create_error_response(
    command: str,
    error: Exception,
    correlation_id: Optional[str] = None
) -> ExtensionActionResult:
    """
    Helper to create an error response from an exception.

    Bot errors carry their own code and user message; anything else is
    reported as an internal error.
    """
    builder = ExtensionResponseBuilder(command)
    if correlation_id:
        builder.with_correlation_id(correlation_id)

    if isinstance(error, SearchCommandError):
        error_code = error.error_code
        user_message = error.user_message
    else:
        error_code = "INTERNAL_ERROR"
        user_message = "An error occurred. Please try again."

    builder.with_error(
        error_code=error_code,
        error_message=str(error),
        user_message=user_message
    )
    return builder.build()
