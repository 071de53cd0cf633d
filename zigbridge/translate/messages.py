"""
Message envelopes exchanged with the host flow.

Inbound messages look like ``{"payload": {...}, "hap": {"allChars": {...}}}``.
Anything else on the message (topic, ids) is accepted and ignored.
"""

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import InvalidMessageError


class HapContext(BaseModel):
    """Accessory context attached by the HomeKit side."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    all_chars: Dict[str, Any] = Field(default_factory=dict, alias="allChars")


class InboundMessage(BaseModel):
    """A message handed to a translator."""
    model_config = ConfigDict(extra="allow")

    payload: Dict[str, Any] = Field(..., description="Sparse device attribute set")
    hap: Optional[HapContext] = None

    @property
    def characteristics(self) -> Optional[Dict[str, Any]]:
        return self.hap.all_chars if self.hap is not None else None


def parse_message(message: Mapping[str, Any]) -> InboundMessage:
    """Validate a raw message envelope."""
    if isinstance(message, InboundMessage):
        return message
    try:
        return InboundMessage.model_validate(message)
    except ValidationError as e:
        raise InvalidMessageError(f"Invalid message: {e.errors()[0]['msg']}") from e
