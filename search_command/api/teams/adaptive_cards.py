"""
Adaptive Card helpers for Microsoft Teams Bot.
Wraps rendered card content into outbound activities and builds the error card.
"""
from typing import Any, Dict, List, Optional

from botbuilder.core import CardFactory, MessageFactory
from botbuilder.schema import Activity, Entity

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"


class AIGeneratedEntity(Entity):
    """
    schema.org Message entity that makes Teams show the "AI generated" label.
    """

    _attribute_map = {
        "type": {"key": "type", "type": "str"},
        "at_type": {"key": "@type", "type": "str"},
        "at_context": {"key": "@context", "type": "str"},
        "additional_type": {"key": "additionalType", "type": "[str]"},
    }

    def __init__(self, **kwargs) -> None:
        super().__init__(type="https://schema.org/Message", **kwargs)
        self.at_type = "Message"
        self.at_context = "https://schema.org"
        self.additional_type: List[str] = ["AIGeneratedContent"]


def adaptive_card_message(content: Dict[str, Any]) -> Activity:
    """Build a message activity carrying one adaptive card, labelled as AI generated."""
    message = MessageFactory.attachment(CardFactory.adaptive_card(content))
    message.entities = [AIGeneratedEntity()]
    return message


def create_error_card(error_message: str, correlation_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Create error card for displaying errors to user.
    """
    body = [
        {
            "type": "TextBlock",
            "text": "❌ Error",
            "size": "Large",
            "weight": "Bolder",
            "color": "Attention"
        },
        {
            "type": "TextBlock",
            "text": error_message,
            "wrap": True
        },
        {
            "type": "TextBlock",
            "text": "Please try again or contact support if the issue persists.",
            "size": "Small",
            "spacing": "Medium"
        }
    ]

    if correlation_id:
        body.append({
            "type": "TextBlock",
            "text": f"Reference: {correlation_id}",
            "size": "Small",
            "isSubtle": True,
            "spacing": "Small"
        })

    return {
        "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
        "content": {
            "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
            "type": "AdaptiveCard",
            "version": "1.2",
            "body": body
        }
    }
