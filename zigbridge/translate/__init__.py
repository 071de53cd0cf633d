"""
Device state translation between Zigbee and HomeKit.

Architecture:
    Message → Dispatch (direction, kind) → Mapper → Color Engine → Result

Key Components:
- models: directions, device kinds, power state, errors
- zigbee_to_homekit / homekit_to_zigbee: per-kind field mappers
- registry: device-kind dispatch and translate()
- characteristics: last-known characteristic lookup for missing fields
- messages: pydantic message envelopes
- node: host adapter for one configured translator

Example Usage:
    from zigbridge.translate import translate, Direction

    translate(Direction.ZIGBEE_TO_HOMEKIT, "Light Bulb", {"state": "ON"})
    # {"On": True}
"""

from .models import (
    # Enums
    Direction,
    DeviceKind,
    PowerState,
    NO_RESPONSE,

    # Errors
    TranslationError,
    UnknownDeviceKindError,
    UnknownDirectionError,
    InvalidMessageError,
)

from .characteristics import (
    CharacteristicLookup,
    CharacteristicStore,
    chain_lookups,
    lookup_from_mapping,
)

from .messages import (
    InboundMessage,
    parse_message,
)

from .registry import (
    ZIGBEE_TO_HOMEKIT,
    HOMEKIT_TO_ZIGBEE,
    TRANSLATORS,
    get_translator,
    supported_kinds,
    translate,
    translate_message,
)

from .node import TranslatorNode


__all__ = [
    # Models
    "Direction",
    "DeviceKind",
    "PowerState",
    "NO_RESPONSE",

    # Errors
    "TranslationError",
    "UnknownDeviceKindError",
    "UnknownDirectionError",
    "InvalidMessageError",

    # Characteristics
    "CharacteristicLookup",
    "CharacteristicStore",
    "chain_lookups",
    "lookup_from_mapping",

    # Messages
    "InboundMessage",
    "parse_message",

    # Dispatch
    "ZIGBEE_TO_HOMEKIT",
    "HOMEKIT_TO_ZIGBEE",
    "TRANSLATORS",
    "get_translator",
    "supported_kinds",
    "translate",
    "translate_message",

    # Host adapter
    "TranslatorNode",
]
