"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files and command
line overrides, providing defaults and validation for generator settings.
The resulting GeneratorConfig is passed explicitly through the pipeline.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError

DEFAULT_OUTPUT_DIR = "./generated"
DEFAULT_TARGET = "typescript"


@dataclass
class GeneratorConfig:
    """Settings for one generation run."""

    # Input/output
    schema_path: Optional[str] = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    target: str = DEFAULT_TARGET

    # Regeneration
    force: bool = False
    dry_run: bool = False

    # Generated service settings
    service_version: str = "0.0.1"
    error_code: int = 500
    request_timeout_ms: Optional[int] = None

    # Additional metadata
    add_comments: bool = True

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["typescript"] = {
            "service_version": "0.0.1",
            "error_code": 500,
            "add_comments": True,
            "custom": {
                "package_name": "service",
                "package_version": "1.0.0",
            },
        }

    def get_config(
        self,
        target: str = DEFAULT_TARGET,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Precedence, lowest first: target defaults, config file, overrides.

        Args:
            target: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration

        Raises:
            ConfigError: If the file cannot be loaded or a value is invalid
        """
        base_config = _merge({"target": target}, self._configs.get(target.lower(), {}))

        if config_file:
            base_config = _merge(base_config, self._load_config_file(config_file))

        if custom_config:
            overrides = {k: v for k, v in custom_config.items() if v is not None}
            base_config = _merge(base_config, overrides)

        config = self._dict_to_config(base_config)
        problems = self.validate_config(config)
        if problems:
            raise ConfigError("; ".join(problems))
        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are target-specific settings
        if custom_args:
            config_args["custom"] = _merge(config_args.get("custom", {}), custom_args)

        return GeneratorConfig(**config_args)

    def list_targets(self) -> List[str]:
        """Get list of targets with default configuration."""
        return sorted(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List of problems (empty if valid)
        """
        problems = []

        if not isinstance(config.error_code, int) or not 100 <= config.error_code <= 999:
            problems.append(f"Invalid error_code: {config.error_code}")

        if config.request_timeout_ms is not None:
            if (
                not isinstance(config.request_timeout_ms, int)
                or config.request_timeout_ms <= 0
            ):
                problems.append(
                    f"Invalid request_timeout_ms: {config.request_timeout_ms}"
                )

        if not isinstance(config.service_version, str) or not config.service_version:
            problems.append(f"Invalid service_version: {config.service_version!r}")

        if not isinstance(config.custom.get("dependencies", {}), dict):
            problems.append("custom.dependencies must be an object")

        return problems


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict):
            nested = merged.get(key)
            merged[key] = _merge(nested if isinstance(nested, dict) else {}, value)
        else:
            merged[key] = value
    return merged


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    target: str = DEFAULT_TARGET,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(target, custom_config, config_file)
