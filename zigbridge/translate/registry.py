"""
Device-kind dispatch for both translation directions.

Each direction has a fixed table of mappers keyed by device kind label.
Dispatch happens before the payload is looked at, so an unknown kind
fails without producing a partial result.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from . import homekit_to_zigbee, zigbee_to_homekit
from .characteristics import CharacteristicLookup, chain_lookups, lookup_from_mapping
from .messages import parse_message
from .models import (
    AttributeSet,
    DeviceKind,
    Direction,
    UnknownDeviceKindError,
)

logger = logging.getLogger(__name__)

Mapper = Callable[..., AttributeSet]


ZIGBEE_TO_HOMEKIT: Dict[str, Mapper] = {
    DeviceKind.LIGHT_BULB.value: zigbee_to_homekit.light_bulb,
    DeviceKind.MOTION_SENSOR.value: zigbee_to_homekit.motion_sensor,
}

HOMEKIT_TO_ZIGBEE: Dict[str, Mapper] = {
    DeviceKind.LIGHT_BULB.value: homekit_to_zigbee.light_bulb,
}

TRANSLATORS: Dict[Direction, Dict[str, Mapper]] = {
    Direction.ZIGBEE_TO_HOMEKIT: ZIGBEE_TO_HOMEKIT,
    Direction.HOMEKIT_TO_ZIGBEE: HOMEKIT_TO_ZIGBEE,
}

# Mappers that accept a characteristic lookup
_USES_LOOKUP = {homekit_to_zigbee.light_bulb}


def _kind_label(kind: Union[DeviceKind, str]) -> str:
    return kind.value if isinstance(kind, DeviceKind) else kind


def supported_kinds(direction: Union[Direction, str]) -> List[str]:
    """Device kinds registered for a direction, in registration order."""
    return list(TRANSLATORS[Direction.parse(direction)])


def get_translator(direction: Union[Direction, str], kind: Union[DeviceKind, str]) -> Mapper:
    """
    Select the mapper for a device kind.

    Raises:
        UnknownDirectionError: direction is not recognised
        UnknownDeviceKindError: no mapper for this kind in this direction
    """
    direction = Direction.parse(direction)
    selected = TRANSLATORS[direction].get(_kind_label(kind))
    if selected is None:
        raise UnknownDeviceKindError(_kind_label(kind), direction)
    return selected


def translate(
    direction: Union[Direction, str],
    kind: Union[DeviceKind, str],
    attributes: AttributeSet,
    lookup: Optional[CharacteristicLookup] = None,
) -> AttributeSet:
    """
    Translate one sparse attribute set.

    ``lookup`` supplies last-known HomeKit characteristics and is only
    consulted by the HomeKit → Zigbee light bulb color path.
    """
    mapper = get_translator(direction, kind)

    if mapper in _USES_LOOKUP:
        result = mapper(attributes, lookup)
    else:
        result = mapper(attributes)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"{Direction.parse(direction).value} [{_kind_label(kind)}] {attributes} -> {result}")
    return result


def translate_message(
    direction: Union[Direction, str],
    kind: Union[DeviceKind, str],
    message: Mapping[str, Any],
    lookup: Optional[CharacteristicLookup] = None,
) -> Dict[str, AttributeSet]:
    """
    Translate a ``{"payload": ...}`` message envelope.

    Characteristics carried in ``message["hap"]["allChars"]`` take precedence
    over ``lookup``.
    """
    # Unknown kinds fail before the message is read
    get_translator(direction, kind)

    inbound = parse_message(message)
    lookup = chain_lookups(lookup_from_mapping(inbound.characteristics), lookup)

    return {"payload": translate(direction, kind, inbound.payload, lookup)}
