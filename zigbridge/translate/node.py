"""
Host adapter for a configured translator.

A TranslatorNode is one translator instance as the host flow sees it:
fixed device kind and direction, fed one message at a time through
``on_input(message, send, done)``.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Union

from .characteristics import CharacteristicStore
from .messages import parse_message
from .models import DeviceKind, Direction, TranslationError
from .registry import get_translator, translate_message

logger = logging.getLogger(__name__)

SendCallback = Callable[[Dict[str, Any]], None]
DoneCallback = Callable[..., None]


class TranslatorNode:
    """
    One translator instance bound to a device kind and direction.

    The kind is not checked at construction; like any other message-level
    failure it is reported through ``done(error)`` on the first input.
    """

    def __init__(
        self,
        kind: Union[DeviceKind, str],
        direction: Union[Direction, str] = Direction.ZIGBEE_TO_HOMEKIT,
        name: Optional[str] = None,
        store: Optional[CharacteristicStore] = None,
    ):
        self.kind = kind.value if isinstance(kind, DeviceKind) else kind
        self.direction = Direction.parse(direction)
        self.name = name or f"{self.direction.value}:{self.kind}"
        self.store = store

        self.processed = 0
        self.failed = 0

    @classmethod
    def from_config(cls, config, store: Optional[CharacteristicStore] = None) -> "TranslatorNode":
        """Create a node from a TranslatorConfig."""
        return cls(
            kind=config.kind,
            direction=config.direction,
            name=config.name,
            store=store,
        )

    @property
    def is_valid(self) -> bool:
        """Whether a mapper exists for this node's kind and direction."""
        try:
            get_translator(self.direction, self.kind)
        except TranslationError:
            return False
        return True

    def process(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        """Translate one message envelope and return the outbound message."""
        try:
            # Unknown kinds fail before the message is read
            get_translator(self.direction, self.kind)
            inbound = parse_message(message)
            result = translate_message(self.direction, self.kind, inbound, lookup=self.store)
        except Exception:
            self.failed += 1
            raise

        if self.store is not None and self.direction is Direction.HOMEKIT_TO_ZIGBEE:
            self.store.update(inbound.payload)

        self.processed += 1
        return result

    def on_input(self, message: Mapping[str, Any], send: SendCallback, done: DoneCallback) -> None:
        """Host input handler: send the result, then signal completion."""
        try:
            result = self.process(message)
        except Exception as e:
            # Errors go to the host, never to send
            logger.warning(f"{self.name}: {e}")
            done(e)
            return

        send(result)
        done()

    def __repr__(self) -> str:
        return f"TranslatorNode(name={self.name!r}, kind={self.kind!r}, direction={self.direction.value!r})"
