"""
Color conversion engine.

Pure conversions between CIE 1931 xy chromaticity, 8-bit RGB and HSV,
using the "Wide RGB D65" matrices that Zigbee bulbs expect.

Example Usage:
    from zigbridge.color import cie_to_hsv, hsv_to_cie

    hsv = cie_to_hsv(0.7, 0.29, brightness=200)
    xy = hsv_to_cie(hsv.h, hsv.s)
"""

from .conversions import (
    # Value types
    CIEColor,
    RGBColor,
    HSVColor,

    # Conversions
    cie_to_rgb,
    rgb_to_cie,
    hsv_to_rgb,
    rgb_to_hsv,
    cie_to_hsv,
    hsv_to_cie,

    # Constants
    DEFAULT_CIE_BRIGHTNESS,
    DEFAULT_HSV_VALUE,
)


__all__ = [
    "CIEColor",
    "RGBColor",
    "HSVColor",
    "cie_to_rgb",
    "rgb_to_cie",
    "hsv_to_rgb",
    "rgb_to_hsv",
    "cie_to_hsv",
    "hsv_to_cie",
    "DEFAULT_CIE_BRIGHTNESS",
    "DEFAULT_HSV_VALUE",
]
