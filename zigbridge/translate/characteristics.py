"""
Characteristic lookup for fields missing from a HomeKit message.

The translator reads last-known ``Hue``, ``Saturation`` and ``Brightness``
values through a plain callable supplied by the host. A dict of current
characteristics (the ``hap.allChars`` shape) or a CharacteristicStore both
work.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

CharacteristicLookup = Callable[[str], Optional[Any]]

# HomeKit characteristics a light bulb reports
LIGHT_BULB_CHARACTERISTICS = ("On", "Brightness", "Hue", "Saturation", "ColorTemperature")


def lookup_from_mapping(mapping: Optional[Mapping[str, Any]]) -> Optional[CharacteristicLookup]:
    """Adapt a mapping of characteristic values to a lookup callable."""
    if mapping is None:
        return None
    return mapping.get


class CharacteristicStore:
    """
    Last-known characteristic values for one accessory.

    Callable, so it can be passed anywhere a CharacteristicLookup is expected.
    """

    def __init__(self, characteristics=LIGHT_BULB_CHARACTERISTICS):
        self.characteristics = tuple(characteristics)
        self._values: Dict[str, Any] = {}

    def __call__(self, name: str) -> Optional[Any]:
        return self.get(name)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def update(self, payload: Mapping[str, Any]) -> None:
        """Record every tracked characteristic present in a payload."""
        changed = {
            name: payload[name]
            for name in self.characteristics
            if name in payload
        }
        if changed:
            self._values.update(changed)
            logger.debug(f"Characteristics updated: {changed}")

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._values)

    def clear(self) -> None:
        self._values.clear()


def chain_lookups(*lookups: Optional[CharacteristicLookup]) -> Optional[CharacteristicLookup]:
    """Combine lookups; the first one that knows a value wins."""
    active = [lookup for lookup in lookups if lookup is not None]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def _lookup(name: str) -> Optional[Any]:
        for lookup in active:
            value = lookup(name)
            if value is not None:
                return value
        return None

    return _lookup
