"""
Tests for the translator host adapter and characteristic lookups.
"""

from unittest.mock import MagicMock, patch

import pytest

from zigbridge.config import TranslatorConfig
from zigbridge.translate import (
    CharacteristicStore,
    Direction,
    InvalidMessageError,
    TranslatorNode,
    UnknownDeviceKindError,
    UnknownDirectionError,
    chain_lookups,
    lookup_from_mapping,
)
from zigbridge.translate import node as node_module, registry
from zigbridge.translate.messages import InboundMessage, parse_message


class TestCharacteristicStore:
    """Tests for the in-memory characteristic store."""

    def test_update_tracked_only(self):
        """Test only light bulb characteristics are recorded."""
        store = CharacteristicStore()
        store.update({"Hue": 120, "Saturation": 50, "topic": "ignored"})

        assert store.snapshot() == {"Hue": 120, "Saturation": 50}
        assert "topic" not in store
        assert len(store) == 2

    def test_callable_lookup(self):
        """Test the store works as a lookup callable."""
        store = CharacteristicStore()
        store.update({"Brightness": 80})

        assert store("Brightness") == 80
        assert store("Hue") is None

    def test_later_values_win(self):
        """Test updates overwrite earlier values."""
        store = CharacteristicStore()
        store.update({"Hue": 10})
        store.update({"Hue": 20})

        assert store.get("Hue") == 20

    def test_clear(self):
        """Test clearing the store."""
        store = CharacteristicStore()
        store.update({"Hue": 10})
        store.clear()

        assert len(store) == 0

    def test_custom_characteristics(self):
        """Test tracking a custom set of characteristics."""
        store = CharacteristicStore(characteristics=["MotionDetected"])
        store.update({"MotionDetected": True, "Hue": 1})

        assert store.snapshot() == {"MotionDetected": True}


class TestLookups:
    """Tests for lookup helpers."""

    def test_from_mapping(self):
        """Test adapting a dict."""
        lookup = lookup_from_mapping({"Hue": 5})

        assert lookup("Hue") == 5
        assert lookup("Saturation") is None

    def test_from_none(self):
        """Test no mapping means no lookup."""
        assert lookup_from_mapping(None) is None

    def test_chain_first_known_wins(self):
        """Test chained lookups fall through on None."""
        lookup = chain_lookups({"Hue": 1}.get, None, {"Hue": 2, "Saturation": 3}.get)

        assert lookup("Hue") == 1
        assert lookup("Saturation") == 3
        assert lookup("Brightness") is None

    def test_chain_empty(self):
        """Test chaining nothing gives no lookup."""
        assert chain_lookups(None, None) is None

    def test_chain_single(self):
        """Test a single lookup is returned as-is."""
        store = CharacteristicStore()
        assert chain_lookups(None, store) is store


class TestTranslatorNode:
    """Tests for TranslatorNode."""

    def test_on_input_sends_then_done(self):
        """Test a successful message is sent and completed."""
        node = TranslatorNode("Light Bulb", "zigbee2homekit")
        send = MagicMock()
        done = MagicMock()

        node.on_input({"payload": {"state": "ON"}}, send, done)

        send.assert_called_once_with({"payload": {"On": True}})
        done.assert_called_once_with()
        assert node.processed == 1
        assert node.failed == 0

    def test_on_input_unknown_kind(self):
        """Test an unknown kind is reported through done and nothing is sent."""
        node = TranslatorNode("Thermostat", "zigbee2homekit")
        send = MagicMock()
        done = MagicMock()

        node.on_input({"payload": {"state": "ON"}}, send, done)

        send.assert_not_called()
        done.assert_called_once()
        assert isinstance(done.call_args.args[0], UnknownDeviceKindError)
        assert node.failed == 1

    def test_on_input_invalid_message(self):
        """Test a malformed envelope is reported through done."""
        node = TranslatorNode("Light Bulb")
        send = MagicMock()
        done = MagicMock()

        node.on_input({"nothing": True}, send, done)

        send.assert_not_called()
        assert isinstance(done.call_args.args[0], InvalidMessageError)

    def test_process_raises(self):
        """Test process propagates translation errors."""
        node = TranslatorNode("Motion Sensor", Direction.HOMEKIT_TO_ZIGBEE)

        with pytest.raises(UnknownDeviceKindError):
            node.process({"payload": {}})

    def test_message_validated_once(self):
        """Test the envelope is validated once per message."""
        store = CharacteristicStore()
        node = TranslatorNode("Light Bulb", "homekit2zigbee", store=store)

        with patch.object(node_module, "parse_message", wraps=parse_message) as node_parse, \
                patch.object(registry, "parse_message", wraps=parse_message) as registry_parse:
            node.process({"payload": {"Hue": 120, "Saturation": 100}})

        node_parse.assert_called_once()
        # The registry gets the already validated envelope
        assert isinstance(registry_parse.call_args.args[0], InboundMessage)
        assert store.snapshot() == {"Hue": 120, "Saturation": 100}

    def test_process_unknown_kind_before_message(self):
        """Test an unknown kind fails before the message is validated."""
        node = TranslatorNode("Motion Sensor", "homekit2zigbee")

        with patch.object(node_module, "parse_message") as spy:
            with pytest.raises(UnknownDeviceKindError):
                node.process({"nothing": True})

        spy.assert_not_called()
        assert node.failed == 1

    def test_unknown_direction(self):
        """Test an unknown direction fails at construction."""
        with pytest.raises(UnknownDirectionError):
            TranslatorNode("Light Bulb", "sideways")

    def test_is_valid(self):
        """Test kind validity per direction."""
        assert TranslatorNode("Motion Sensor", "zigbee2homekit").is_valid
        assert not TranslatorNode("Motion Sensor", "homekit2zigbee").is_valid

    def test_store_fills_split_color_updates(self):
        """Test Saturation from one message is reused when Hue arrives later."""
        store = CharacteristicStore()
        node = TranslatorNode("Light Bulb", "homekit2zigbee", store=store)

        node.process({"payload": {"Saturation": 100, "Brightness": 100}})
        result = node.process({"payload": {"Hue": 120}})

        assert store.snapshot() == {"Saturation": 100, "Brightness": 100, "Hue": 120}
        assert result["payload"]["color"]["x"] == pytest.approx(0.1724, abs=1e-3)
        assert result["payload"]["color"]["y"] == pytest.approx(0.7468, abs=1e-3)

    def test_all_chars_override_store(self):
        """Test characteristics on the message win over the node store."""
        store = CharacteristicStore()
        store.update({"Saturation": 0})
        node = TranslatorNode("Light Bulb", "homekit2zigbee", store=store)

        result = node.process({
            "payload": {"Hue": 0},
            "hap": {"allChars": {"Saturation": 100}},
        })

        assert result["payload"]["color"]["x"] == pytest.approx(0.7006, abs=1e-3)

    def test_zigbee_direction_leaves_store_alone(self):
        """Test Zigbee → HomeKit nodes do not record characteristics."""
        store = CharacteristicStore()
        node = TranslatorNode("Light Bulb", "zigbee2homekit", store=store)

        node.process({"payload": {"state": "ON", "brightness": 128}})

        assert len(store) == 0

    def test_from_config(self):
        """Test building a node from configuration."""
        config = TranslatorConfig(name="porch", kind="Motion Sensor", direction="zigbee2homekit")

        node = TranslatorNode.from_config(config)

        assert node.name == "porch"
        assert node.kind == "Motion Sensor"
        assert node.direction is Direction.ZIGBEE_TO_HOMEKIT

    def test_default_name(self):
        """Test the generated node name."""
        node = TranslatorNode("Light Bulb", "homekit2zigbee")

        assert node.name == "homekit2zigbee:Light Bulb"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
