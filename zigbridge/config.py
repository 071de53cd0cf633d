"""
Configuration management for zigbridge.

Handles:
- Translator node definitions (device kind + direction per node)
- Logging level
- Data directory location
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = Path(os.environ.get("ZIGBRIDGE_HOME", Path.home() / ".zigbridge"))

DEFAULT_DIRECTION = "zigbee2homekit"


@dataclass
class TranslatorConfig:
    """Configuration for one translator node."""
    name: str
    kind: str  # "Light Bulb", "Motion Sensor"
    direction: str = DEFAULT_DIRECTION  # zigbee2homekit, homekit2zigbee
    enabled: bool = True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind,
            "direction": self.direction,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TranslatorConfig":
        # Filter to only known fields to handle config evolution
        known_fields = {"name", "kind", "direction", "enabled"}
        filtered = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered)


@dataclass
class BridgeConfig:
    """
    Main zigbridge configuration.

    Stored at ~/.zigbridge/config.json
    """
    # Paths
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)

    # Translator nodes by name
    nodes: Dict[str, TranslatorConfig] = field(default_factory=dict)

    log_level: str = "INFO"

    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.json"

    def ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def add_node(self, node: TranslatorConfig) -> None:
        """Add or replace a translator node."""
        self.nodes[node.name] = node
        logger.info(f"Translator node {node.name} set to {node.kind} ({node.direction})")

    def remove_node(self, name: str) -> bool:
        """Remove a translator node. Returns False if it did not exist."""
        if self.nodes.pop(name, None) is None:
            return False
        logger.info(f"Translator node {name} removed")
        return True

    def get_node(self, name: str) -> TranslatorConfig:
        """Get a translator node by name. Raises KeyError if unknown."""
        return self.nodes[name]

    def enabled_nodes(self) -> List[TranslatorConfig]:
        return [n for n in self.nodes.values() if n.enabled]

    def save(self) -> None:
        """Save configuration to disk."""
        self.ensure_data_dir()

        data = {
            "nodes": {k: v.to_dict() for k, v in self.nodes.items()},
            "log_level": self.log_level,
        }

        with open(self.config_path, 'w') as f:
            json.dump(data, f, indent=2)

        logger.debug(f"Configuration saved to {self.config_path}")

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "BridgeConfig":
        """Load configuration from disk."""
        data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        config_path = data_dir / "config.json"

        if not config_path.exists():
            return cls(data_dir=data_dir)

        with open(config_path, 'r') as f:
            data = json.load(f)

        config = cls(
            data_dir=data_dir,
            log_level=data.get("log_level", "INFO"),
        )

        for name, node_data in data.get("nodes", {}).items():
            node_data.setdefault("name", name)
            config.nodes[name] = TranslatorConfig.from_dict(node_data)

        return config

    @classmethod
    def exists(cls, data_dir: Optional[Path] = None) -> bool:
        """Check if configuration exists."""
        data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR
        return (data_dir / "config.json").exists()


# Global config instance
_config: Optional[BridgeConfig] = None


def get_config(data_dir: Optional[Path] = None) -> BridgeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = BridgeConfig.load(data_dir)
    return _config


def set_config(config: BridgeConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
