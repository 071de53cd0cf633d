"""
Color space conversions between CIE 1931 xy, RGB and HSV.

Ranges:
- CIE: x, y in [0, 1], brightness in [1, 255]
- RGB: r, g, b in [0, 255]
- HSV: h in [0, 360], s and v in [0, 100]

Degenerate input (y == 0, black RGB) never raises. Any NaN produced along
the way comes out as 0.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict

import numpy as np

# "Wide RGB D65"
XYZ_TO_RGB = np.array([
    [1.656492, -0.354851, -0.255038],
    [-0.707196, 1.655397, 0.036152],
    [0.051713, -0.121364, 1.011530],
])

RGB_TO_XYZ = np.array([
    [0.664511, 0.154324, 0.162028],
    [0.283881, 0.668433, 0.047685],
    [0.000088, 0.072310, 0.986039],
])

MAX_CIE_BRIGHTNESS = 254
DEFAULT_CIE_BRIGHTNESS = 255
DEFAULT_HSV_VALUE = 100


@dataclass(frozen=True)
class CIEColor:
    """Chromaticity coordinates, brightness not included."""
    x: float
    y: float

    def __iter__(self):
        return iter((self.x, self.y))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class RGBColor:
    """8-bit RGB triple."""
    r: int
    g: int
    b: int

    def __iter__(self):
        return iter((self.r, self.g, self.b))

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class HSVColor:
    """Hue in degrees, saturation and value in percent."""
    h: float
    s: float
    v: float

    def __iter__(self):
        return iter((self.h, self.s, self.v))

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _round_half_up(value: float) -> float:
    # Math.round semantics; NaN passes through
    return float(np.floor(value + 0.5))


def _channel(value: float) -> int:
    """Scale a unit channel to 0-255, dropping NaN and clamping."""
    scaled = _round_half_up(value * 255)
    if math.isnan(scaled):
        return 0
    return int(min(max(scaled, 0), 255))


def _nan_to_zero(value: float) -> float:
    return 0.0 if math.isnan(value) else float(value)


def cie_to_rgb(x: float, y: float, brightness: float) -> RGBColor:
    """
    Convert CIE xy plus brightness to RGB.

    Brightness above 254 is capped. Out-of-gamut results are soft clipped:
    when exactly one channel is the strict maximum and exceeds 1.0, the other
    two are divided by it and it is set to 1.0.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        x = np.float64(x)
        y = np.float64(y)
        z = 1.0 - x - y
        Y = np.float64(min(brightness, MAX_CIE_BRIGHTNESS)) / MAX_CIE_BRIGHTNESS
        X = (Y / y) * x
        Z = (Y / y) * z

        r, g, b = XYZ_TO_RGB @ np.array([X, Y, Z])

        # Order matters: only the first matching branch applies
        if r > b and r > g and r > 1.0:
            g = g / r
            b = b / r
            r = 1.0
        elif g > b and g > r and g > 1.0:
            r = r / g
            b = b / g
            g = 1.0
        elif b > r and b > g and b > 1.0:
            r = r / b
            g = g / b
            b = 1.0

        return RGBColor(r=_channel(r), g=_channel(g), b=_channel(b))


def rgb_to_cie(r: float, g: float, b: float) -> CIEColor:
    """
    Convert RGB (0-255) to CIE xy.

    Brightness is discarded, so this is not an exact inverse of cie_to_rgb.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        X, Y, Z = RGB_TO_XYZ @ np.array([r, g, b], dtype=np.float64)
        total = X + Y + Z
        x = X / total
        y = Y / total

    return CIEColor(x=_nan_to_zero(x), y=_nan_to_zero(y))


def hsv_to_rgb(h: float, s: float, v: float) -> RGBColor:
    """Convert HSV (h in degrees, s and v in percent) to RGB."""
    h = h / 360
    s = s / 100
    v = v / 100

    i = math.floor(h * 6)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)

    sector = i % 6
    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return RGBColor(
        r=int(_round_half_up(r * 255)),
        g=int(_round_half_up(g * 255)),
        b=int(_round_half_up(b * 255)),
    )


def rgb_to_hsv(r: float, g: float, b: float) -> HSVColor:
    """
    Convert RGB (0-255) to HSV.

    When several channels share the maximum, the achromatic check wins first,
    then red, then green, then blue.
    """
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    d = max_c - min_c
    s = 0 if max_c == 0 else d / max_c
    v = max_c / 255

    if max_c == min_c:
        h = 0.0
    elif max_c == r:
        h = ((g - b) + d * (6 if g < b else 0)) / (6 * d)
    elif max_c == g:
        h = ((b - r) + d * 2) / (6 * d)
    else:
        h = ((r - g) + d * 4) / (6 * d)

    return HSVColor(h=float(h * 360), s=float(s * 100), v=float(v * 100))


def cie_to_hsv(x: float, y: float, brightness: float = DEFAULT_CIE_BRIGHTNESS) -> HSVColor:
    """Convert CIE xy (plus brightness) to HSV via RGB."""
    return rgb_to_hsv(*cie_to_rgb(x, y, brightness))


def hsv_to_cie(h: float, s: float, v: float = DEFAULT_HSV_VALUE) -> CIEColor:
    """Convert HSV to CIE xy via RGB. The value component does not survive."""
    return rgb_to_cie(*hsv_to_rgb(h, s, v))
