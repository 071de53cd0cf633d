"""
Zigbee device state → HomeKit characteristics.

Each mapper reads a sparse Zigbee attribute set and returns a new
HomeKit attribute set containing only what the input supports.
"""

from zigbridge.color import cie_to_hsv

from .models import AttributeSet, PowerState, scale_brightness

LOW_BATTERY_THRESHOLD = 25


def light_bulb(payload: AttributeSet) -> AttributeSet:
    """
    Translate a Zigbee light bulb state.

    ``Brightness`` is translated before ``color`` on purpose: when both are
    present the freshly scaled HomeKit brightness is the brightness used for
    the color conversion. Without a brightness the converter's default applies.
    """
    translated: AttributeSet = {}

    translated["On"] = PowerState.from_zigbee(payload).to_characteristic()

    if "brightness" in payload:
        translated["Brightness"] = scale_brightness(payload["brightness"], to_zigbee=False)

    if "color_temp" in payload:
        translated["ColorTemperature"] = payload["color_temp"]

    if "color" in payload:
        color = payload["color"]
        if "Brightness" in translated:
            hsv = cie_to_hsv(color["x"], color["y"], translated["Brightness"])
        else:
            hsv = cie_to_hsv(color["x"], color["y"])
        translated["Hue"] = hsv.h
        translated["Saturation"] = hsv.s

    return translated


def motion_sensor(payload: AttributeSet) -> AttributeSet:
    """Translate a Zigbee occupancy sensor state."""
    translated: AttributeSet = {}

    if "occupancy" in payload:
        translated["MotionDetected"] = payload["occupancy"]
        translated["StatusActive"] = True
    else:
        translated["MotionDetected"] = False
        translated["StatusActive"] = False

    if "battery" in payload:
        translated["StatusLowBattery"] = payload["battery"] < LOW_BATTERY_THRESHOLD

    return translated
