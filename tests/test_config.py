"""
Configuration tests for zigbridge.
"""

import json
import tempfile
from pathlib import Path

import pytest

from zigbridge.config import (
    BridgeConfig,
    TranslatorConfig,
    get_config,
    reset_config,
    set_config,
)


class TestTranslatorConfig:
    """Tests for translator node configuration."""

    def test_defaults(self):
        """Test default direction and enabled flag."""
        node = TranslatorConfig(name="lamp", kind="Light Bulb")

        assert node.direction == "zigbee2homekit"
        assert node.enabled is True

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        node = TranslatorConfig.from_dict({"name": "lamp", "kind": "Light Bulb", "color": "red"})

        assert node.to_dict() == {
            "name": "lamp",
            "kind": "Light Bulb",
            "direction": "zigbee2homekit",
            "enabled": True,
        }


class TestBridgeConfig:
    """Tests for bridge configuration."""

    def test_load_missing(self):
        """Test loading without a config file gives defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = BridgeConfig.load(Path(tmpdir))

            assert config.nodes == {}
            assert config.log_level == "INFO"
            assert not BridgeConfig.exists(Path(tmpdir))

    def test_save_load(self):
        """Test saving and loading config."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested"

            config1 = BridgeConfig(data_dir=path, log_level="DEBUG")
            config1.add_node(TranslatorConfig(name="lamp", kind="Light Bulb", direction="homekit2zigbee"))
            config1.add_node(TranslatorConfig(name="hall", kind="Motion Sensor", enabled=False))
            config1.save()

            assert BridgeConfig.exists(path)

            config2 = BridgeConfig.load(path)

            assert config2.log_level == "DEBUG"
            assert config2.get_node("lamp").direction == "homekit2zigbee"
            assert config2.get_node("hall").enabled is False
            assert [n.name for n in config2.enabled_nodes()] == ["lamp"]

    def test_load_fills_missing_name(self):
        """Test node names default to their key."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir)
            (path / "config.json").write_text(json.dumps({"nodes": {"lamp": {"kind": "Light Bulb"}}}))

            config = BridgeConfig.load(path)

            assert config.get_node("lamp").name == "lamp"

    def test_remove_node(self):
        """Test removing nodes."""
        config = BridgeConfig()
        config.add_node(TranslatorConfig(name="lamp", kind="Light Bulb"))

        assert config.remove_node("lamp") is True
        assert config.remove_node("lamp") is False

    def test_get_unknown_node(self):
        """Test unknown node names raise KeyError."""
        with pytest.raises(KeyError):
            BridgeConfig().get_node("nope")

    def test_unknown_kind_accepted(self):
        """Test the config does not validate kinds."""
        config = BridgeConfig()
        config.add_node(TranslatorConfig(name="t", kind="Thermostat"))

        assert config.get_node("t").kind == "Thermostat"


class TestGlobalConfig:
    """Tests for the global config instance."""

    def test_set_get_reset(self):
        """Test the global instance helpers."""
        reset_config()

        with tempfile.TemporaryDirectory() as tmpdir:
            config = BridgeConfig(data_dir=Path(tmpdir))
            set_config(config)

            assert get_config() is config

        reset_config()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
