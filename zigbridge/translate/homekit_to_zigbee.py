"""
HomeKit characteristics → Zigbee device state.

Only light bulbs are mapped in this direction.
"""

import logging
from typing import Any, Optional

from zigbridge.color import hsv_to_cie, DEFAULT_HSV_VALUE

from .characteristics import CharacteristicLookup
from .models import AttributeSet, scale_brightness

logger = logging.getLogger(__name__)

# HomeKit defaults when neither the message nor the host knows a value
CHARACTERISTIC_DEFAULTS = {
    "Hue": 0,
    "Saturation": 0,
    "Brightness": DEFAULT_HSV_VALUE,
}


def _resolve(name: str, payload: AttributeSet, lookup: Optional[CharacteristicLookup]) -> Any:
    """Message value first, then the host's last-known value, then the default."""
    if name in payload:
        # A null characteristic counts as 0
        return 0 if payload[name] is None else payload[name]

    value = lookup(name) if lookup is not None else None
    if value is None:
        logger.debug(f"No known value for {name}, using {CHARACTERISTIC_DEFAULTS[name]}")
        return CHARACTERISTIC_DEFAULTS[name]
    return value


def light_bulb(payload: AttributeSet, lookup: Optional[CharacteristicLookup] = None) -> AttributeSet:
    """
    Translate HomeKit light bulb characteristics.

    ``Hue`` or ``Saturation`` alone is enough to emit ``color``; the other
    color inputs are filled in through ``lookup``.
    """
    translated: AttributeSet = {}

    if "On" in payload:
        translated["state"] = "ON" if payload["On"] else "OFF"

    if "Brightness" in payload:
        translated["brightness"] = scale_brightness(payload["Brightness"], to_zigbee=True)

    if "ColorTemperature" in payload:
        translated["color_temp"] = payload["ColorTemperature"]

    # TODO: coalesce Hue and Saturation that arrive in separate messages into one color update
    if "Hue" in payload or "Saturation" in payload:
        hue = _resolve("Hue", payload, lookup)
        saturation = _resolve("Saturation", payload, lookup)
        brightness = _resolve("Brightness", payload, lookup)
        translated["color"] = hsv_to_cie(hue, saturation, brightness).to_dict()

    return translated
