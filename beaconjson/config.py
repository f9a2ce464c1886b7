"""Configuration for beaconjson."""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .spec.constants import PRESETS, set_preset

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@dataclass
class Config:
    """Codec configuration.

    The preset decides the size of preset-dependent types, so apply() must run
    before beaconjson.spec.types (or beaconjson.codec) is first imported.
    """

    preset: str = "mainnet"
    log_level: str = "INFO"

    def __post_init__(self):
        if self.preset not in PRESETS:
            raise ValueError(f"Unknown preset: {self.preset}")
        if not isinstance(getattr(logging, self.log_level.upper(), None), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a yaml file."""
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls._from_dict(data or {})

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            attr_name = str(key).lower()
            if attr_name in known:
                values[attr_name] = str(value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")
        return cls(**values)

    def apply(self) -> None:
        """Select the preset and set up logging."""
        set_preset(self.preset)
        setup_logging(self.log_level)
        logger.debug(f"Using {self.preset} preset")
