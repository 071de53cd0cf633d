"""
zigbridge - Zigbee ↔ HomeKit state translation

Converts device state between Zigbee attribute sets and HomeKit
characteristics, including CIE xy ↔ HSV color conversion.

Example:
    >>> from zigbridge import translate
    >>> translate("homekit2zigbee", "Light Bulb", {"On": True, "Brightness": 50})
    {'state': 'ON', 'brightness': 128}
"""

__version__ = "1.0.0"

from .config import BridgeConfig, TranslatorConfig, get_config
from .color import cie_to_hsv, hsv_to_cie
from .translate import Direction, DeviceKind, TranslatorNode, translate, translate_message

__all__ = [
    "__version__",
    "BridgeConfig",
    "TranslatorConfig",
    "get_config",
    "cie_to_hsv",
    "hsv_to_cie",
    "Direction",
    "DeviceKind",
    "TranslatorNode",
    "translate",
    "translate_message",
]
