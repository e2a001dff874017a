# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Configuration management utilities for the bfsg_audit package.

This module provides a centralized configuration system that manages default
options, user-provided settings, and environment variables. The core analyzers
never read it directly; the CLI and the public API resolve options here and
pass them explicitly to the auditor.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from copy import deepcopy

import yaml

from bfsg_audit.utils.logging_helper import setup_logger, ConfigurationError

# Configure module-level logger
logger = setup_logger(__name__)

ANALYZER_KEYS = (
    "images",
    "forms",
    "headings",
    "contrast",
    "aria",
    "links",
    "keyboard",
    "language",
)

COMPLIANCE_LEVELS = ("A", "AA", "AAA")

REPORT_FORMATS = ("text", "json")


class ConfigManager:
    """
    Centralized configuration manager for the audit components.

    This class handles:
    - Default options
    - User-provided options
    - Environment variables
    - Option merging and cascade
    """

    def __init__(self, defaults: Dict[str, Any] = None, env_prefix: str = "BFSG_"):
        """
        Initialize a configuration manager.

        Args:
            defaults: Dictionary of default options
            env_prefix: Prefix for environment variables
        """
        self.defaults = defaults or {}
        self.env_prefix = env_prefix
        self.user_config = {}

    def get_config(
        self, user_options: Dict[str, Any] = None, section: str = None
    ) -> Dict[str, Any]:
        """
        Get the resolved configuration with defaults, environment vars, and user options.

        Args:
            user_options: User-provided option overrides
            section: Optional section name to retrieve (e.g., 'audit')

        Returns:
            Dict with the resolved configuration options
        """
        if section and section in self.defaults:
            config = deepcopy(self.defaults[section])
        else:
            config = deepcopy(self.defaults)

        if section and section in self.user_config:
            _merge(config, self.user_config[section])
        elif not section:
            _merge(config, self.user_config)

        self._apply_env_vars(config, section)

        # Runtime user options have the highest precedence
        if user_options:
            _merge(config, user_options)

        return config

    def set_user_config(self, config: Dict[str, Any], section: str = None) -> None:
        """
        Set persistent user configuration.

        Args:
            config: Dictionary of configuration options
            section: Optional section name
        """
        if section:
            if section not in self.user_config:
                self.user_config[section] = {}
            _merge(self.user_config[section], config)
        else:
            _merge(self.user_config, config)

    def _apply_env_vars(self, config: Dict[str, Any], section: str = None) -> None:
        """
        Apply relevant environment variables to the configuration.

        ``BFSG_AUDIT_COMPLIANCE_LEVEL=AAA`` sets ``compliance_level`` and
        ``BFSG_AUDIT_CHECKS_CONTRAST=false`` sets ``checks["contrast"]``.

        Args:
            config: Configuration dictionary to update
            section: Optional section name to scope environment variables
        """
        prefix = self.env_prefix
        if section:
            prefix = f"{prefix}{section.upper()}_"

        for env_var, value in sorted(os.environ.items()):
            if not env_var.startswith(prefix):
                continue

            option_name = env_var[len(prefix) :].lower()
            target = config

            # Nested mapping options, e.g. CHECKS_IMAGES -> checks["images"]
            for key, nested in config.items():
                if isinstance(nested, dict) and option_name.startswith(f"{key}_"):
                    target = nested
                    option_name = option_name[len(key) + 1 :]
                    break

            if option_name in target:
                existing_value = target[option_name]
                existing_type = type(existing_value)
                try:
                    if existing_type == bool:
                        value = value.lower() in ("true", "1", "yes", "y")
                    elif existing_type == int:
                        value = int(value)
                    elif existing_type == float:
                        value = float(value)
                    elif existing_type == list:
                        value = [item.strip() for item in value.split(",")]
                except (ValueError, TypeError):
                    logger.warning(
                        f"Could not convert environment variable {env_var} to {existing_type.__name__}"
                    )

            target[option_name] = value
            logger.debug(f"Applied environment variable {env_var}")


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``overrides`` into ``base``; nested mappings are merged key by key."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = deepcopy(value)
    return base


def validate_options(
    options: Dict[str, Any],
    required_fields: Optional[Dict[str, type]] = None,
    optional_fields: Optional[Dict[str, type]] = None,
) -> None:
    """
    Validate configuration options against schemas.

    Args:
        options: The options dictionary to validate
        required_fields: Dictionary mapping field names to expected types
        optional_fields: Dictionary mapping optional field names to expected types

    Raises:
        ConfigurationError: If validation fails
    """
    if required_fields:
        for field, field_type in required_fields.items():
            if field not in options:
                raise ConfigurationError(f"Required field '{field}' is missing")

            if not isinstance(options[field], field_type):
                raise ConfigurationError(
                    f"Field '{field}' has incorrect type. "
                    f"Expected {field_type.__name__}, got {type(options[field]).__name__}"
                )

    if optional_fields:
        for field, field_type in optional_fields.items():
            if field in options and not isinstance(options[field], field_type):
                raise ConfigurationError(
                    f"Field '{field}' has incorrect type. "
                    f"Expected {field_type.__name__}, got {type(options[field]).__name__}"
                )


def validate_checks(checks: Dict[str, Any]) -> Dict[str, bool]:
    """
    Validate an analyzer enable/disable mapping.

    Args:
        checks: Mapping of analyzer key to a boolean

    Returns:
        A complete mapping with every analyzer key, missing keys enabled

    Raises:
        ConfigurationError: If a key is unknown or a value is not a boolean
    """
    unknown = sorted(set(checks) - set(ANALYZER_KEYS))
    if unknown:
        raise ConfigurationError(
            f"Unknown checks: {', '.join(unknown)}. "
            f"Valid checks: {', '.join(ANALYZER_KEYS)}"
        )

    resolved = {key: True for key in ANALYZER_KEYS}
    for key, enabled in checks.items():
        if not isinstance(enabled, bool):
            raise ConfigurationError(
                f"Check '{key}' must be true or false, got {enabled!r}"
            )
        resolved[key] = enabled
    return resolved


def validate_compliance_level(level: Any) -> str:
    """
    Normalize and validate a WCAG compliance level.

    Raises:
        ConfigurationError: If the level is not one of A, AA or AAA
    """
    normalized = str(level).strip().upper()
    if normalized not in COMPLIANCE_LEVELS:
        raise ConfigurationError(
            f"Invalid compliance level '{level}'. "
            f"Expected one of: {', '.join(COMPLIANCE_LEVELS)}"
        )
    return normalized


def resolve_audit_options(user_options: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    Resolve and validate the options of the ``audit`` section.

    Args:
        user_options: Runtime overrides (highest precedence)

    Returns:
        Validated audit options

    Raises:
        ConfigurationError: If any option is invalid
    """
    options = config_manager.get_config(user_options, section="audit")

    validate_options(
        options,
        required_fields={"checks": dict, "compliance_level": str},
        optional_fields={
            "severity_threshold": str,
            "report_format": str,
            "detailed": bool,
        },
    )

    options["checks"] = validate_checks(options["checks"])
    options["compliance_level"] = validate_compliance_level(options["compliance_level"])

    if options.get("report_format", "text") not in REPORT_FORMATS:
        raise ConfigurationError(
            f"Unsupported report format: {options['report_format']}. "
            f"Supported formats: {', '.join(REPORT_FORMATS)}"
        )

    return options


def load_config_file(file_path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML (.yaml, .yml) and JSON (.json) formats.

    Args:
        file_path: Path to the configuration file

    Returns:
        Dictionary with configuration options

    Raises:
        ConfigurationError: If file cannot be loaded or parsed
    """
    path = Path(file_path)

    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}. "
            "Supported formats: YAML (.yaml, .yml), JSON (.json)"
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error parsing configuration file: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error loading configuration file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping, got {type(data).__name__}"
        )
    return data


def save_config(config: Dict[str, Any], file_path: str, file_format: str = "yaml") -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration dictionary
        file_path: Path to save the configuration file
        file_format: File format ('yaml' or 'json')

    Raises:
        ConfigurationError: If file cannot be written
    """
    if file_format.lower() not in ("yaml", "json"):
        raise ConfigurationError(f"Unsupported format: {file_format}")

    try:
        with open(file_path, "w", encoding="utf-8") as f:
            if file_format.lower() == "yaml":
                yaml.safe_dump(config, f, default_flow_style=False)
            else:
                json.dump(config, f, indent=2)
    except OSError as e:
        raise ConfigurationError(f"Error saving configuration: {e}") from e
    logger.info(f"Configuration saved to {file_path}")


# Global instance for shared configuration
config_manager = ConfigManager(
    {
        "audit": {
            "compliance_level": "AA",  # A, AA, AAA
            "checks": {key: True for key in ANALYZER_KEYS},
            "severity_threshold": "notice",  # notice, warning, error, critical
            "report_format": "text",
            "detailed": False,
        },
    }
)
