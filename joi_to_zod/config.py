"""
Configuration for the Joi to Zod converter.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigError


@dataclass
class ConverterConfig:
    """Configuration options for conversion and module rendering."""

    # Identifier the generated code uses for the zod namespace
    zod_identifier: str = "z"

    # Presence context of the root node (object members are always optional by default)
    root_default_optional: bool = False

    # Maximum nesting depth accepted by the parser
    max_depth: int = 64

    # Add generation comment at top of rendered modules
    add_generation_comment: bool = True

    # Suffix appended to export names derived from file names
    export_suffix: str = "Schema"

    # Module specifier of the zod import in rendered modules
    zod_import: str = "zod"

    @staticmethod
    def from_dict(d: dict) -> ConverterConfig:
        """Create a config from a dictionary; unknown keys are ignored."""
        if not isinstance(d, dict):
            raise ConfigError(f"Config must be an object, got {type(d).__name__}")

        config = ConverterConfig()
        for k, v in d.items():
            if not hasattr(config, k):
                continue
            expected = type(getattr(config, k))
            # bool is a subclass of int and must not pass as max_depth
            if not isinstance(v, expected) or (isinstance(v, bool) and expected is not bool):
                raise ConfigError(f"Config option '{k}' must be of type {expected.__name__}, got {type(v).__name__}")
            setattr(config, k, v)

        if config.max_depth < 1:
            raise ConfigError(f"Config option 'max_depth' must be positive, got {config.max_depth}")
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "zod_identifier": self.zod_identifier,
            "root_default_optional": self.root_default_optional,
            "max_depth": self.max_depth,
            "add_generation_comment": self.add_generation_comment,
            "export_suffix": self.export_suffix,
            "zod_import": self.zod_import,
        }
