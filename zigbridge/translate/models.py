"""
Translator data types and errors.

Defines translation directions, device kinds, the tri-state power value
and the exceptions raised by dispatch.
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, Optional, Union

# Sparse attribute set: a missing key means "not sent in this message"
AttributeSet = Dict[str, Any]

NO_RESPONSE = "NO_RESPONSE"

BRIGHTNESS_SCALE = Decimal("2.55")


class Direction(str, Enum):
    """Which way a translator maps device state."""
    ZIGBEE_TO_HOMEKIT = "zigbee2homekit"
    HOMEKIT_TO_ZIGBEE = "homekit2zigbee"

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownDirectionError(str(value)) from None


class DeviceKind(str, Enum):
    """Device kinds known to at least one direction."""
    LIGHT_BULB = "Light Bulb"
    MOTION_SENSOR = "Motion Sensor"


class PowerState(Enum):
    """
    HomeKit power state.

    Zigbee messages without a ``state`` field carry no power information,
    which HomeKit represents as ``NO_RESPONSE`` rather than off.
    """
    ON = "ON"
    OFF = "OFF"
    NO_RESPONSE = NO_RESPONSE

    @classmethod
    def from_zigbee(cls, payload: AttributeSet) -> "PowerState":
        if "state" not in payload:
            return cls.NO_RESPONSE
        return cls.ON if payload["state"] == "ON" else cls.OFF

    def to_characteristic(self) -> Union[bool, str]:
        """Value for the HomeKit ``On`` characteristic."""
        if self is PowerState.NO_RESPONSE:
            return NO_RESPONSE
        return self is PowerState.ON


def scale_brightness(value: Any, to_zigbee: bool) -> int:
    """
    Map brightness between HomeKit percent and the Zigbee 0-254 scale.

    Done in decimal so 50 * 2.55 rounds to 128 rather than 127. A null
    value counts as 0.
    """
    amount = Decimal(0) if value is None else Decimal(str(value))
    if to_zigbee:
        scaled = amount * BRIGHTNESS_SCALE
    else:
        scaled = amount / BRIGHTNESS_SCALE
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class TranslationError(Exception):
    """Base exception for translation errors."""

    def __init__(self, message: str, code: str = "TRANSLATION_ERROR"):
        super().__init__(message)
        self.code = code


class UnknownDeviceKindError(TranslationError):
    """Raised when no mapper is registered for a device kind."""

    def __init__(self, kind: Any, direction: Optional[Direction] = None):
        super().__init__(f"Invalid device kind: {kind}", code="UNKNOWN_DEVICE_KIND")
        self.kind = kind
        self.direction = direction


class UnknownDirectionError(TranslationError):
    """Raised when a direction name is not recognised."""

    def __init__(self, direction: str):
        super().__init__(f"Invalid direction: {direction}", code="UNKNOWN_DIRECTION")
        self.direction = direction


class InvalidMessageError(TranslationError):
    """Raised when a message envelope has no usable payload."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_MESSAGE")
