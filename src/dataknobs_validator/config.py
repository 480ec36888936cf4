"""Loading named rules from YAML/JSON configuration.

A rule file holds a top-level ``rules`` list. Each entry is a rule
configuration (see ``RuleFactory``) with a unique ``name`` and an optional
``description``. Entries are built in order, so an entry can reference an
earlier one with ``type: ref``.

String values may reference environment variables:

- ``${VAR}`` - Replace with environment variable VAR, error if not found
- ``${VAR:default}`` - Replace with VAR or use default if not found
- ``${VAR:-default}`` - Same as above (bash-style)

Example:
    ```yaml
    rules:
      - name: username
        type: all
        rules:
          - type: length
            min: 3
            max: ${USERNAME_MAX_LENGTH:20}
            error: username_length
          - type: pattern
            pattern: "[a-zA-Z0-9_]+"
            error: username_characters
      - name: optional_username
        type: optional
        rule:
          type: ref
          ref: username
    ```
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigFileNotFoundError, ConfigurationError, RuleConfigurationError
from .factory import RuleFactory
from .registry import RuleRegistry

logger = logging.getLogger(__name__)


class VariableSubstitution:
    """Handles environment variable substitution in configuration values."""

    # Pattern to match ${VAR} or ${VAR:default} or ${VAR:-default}
    VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::(-)?([^}]*))?\}')

    def substitute(self, value: Any) -> Any:
        """Recursively substitute environment variables in a value.

        Args:
            value: Value to process (can be string, dict, list, or other)

        Returns:
            Value with environment variables substituted

        Raises:
            ConfigurationError: If a required environment variable is not found
        """
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, dict):
            # Keys are not substituted, only values
            return {key: self.substitute(item) for key, item in value.items()}
        elif isinstance(value, list):
            return [self.substitute(item) for item in value]
        else:
            return value

    def _lookup(self, match: re.Match) -> tuple[str, bool]:
        """Resolve one variable reference.

        Returns:
            The replacement text, and whether it came from a default
        """
        var_name = match.group(1)
        has_default = match.group(2) is not None or match.group(3) is not None
        if var_name in os.environ:
            return os.environ[var_name], False
        if has_default:
            return match.group(3) or "", True
        raise ConfigurationError(
            f"Environment variable '{var_name}' not found",
            context={"variable": var_name},
        )

    def _substitute_string(self, text: str) -> Union[str, int, float, bool]:
        # A string that is exactly one reference may become a non-string type
        match = self.VAR_PATTERN.fullmatch(text)
        if match:
            value, _ = self._lookup(match)
            return self._convert_type(value)

        # Multiple variables or mixed content - always return string
        return self.VAR_PATTERN.sub(lambda m: self._lookup(m)[0], text)

    def _convert_type(self, value: str) -> Union[str, int, float, bool]:
        """Convert a string value to bool, int or float where it parses as one."""
        if value.lower() in ('true', 'yes'):
            return True
        elif value.lower() in ('false', 'no'):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML or JSON configuration file.

    Args:
        path: Path to the file (``.yaml``, ``.yml`` or ``.json``)

    Returns:
        Parsed configuration, or an empty dict for an empty file

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigurationError: If the format is unsupported or unparseable
    """
    path = Path(path).resolve()
    if not path.exists():
        raise ConfigFileNotFoundError(
            f"Rule configuration file not found: {path}", context={"path": str(path)}
        )

    suffix = path.suffix.lower()
    try:
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to parse rule configuration {path}: {e}", context={"path": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Rule configuration must be a mapping", context={"path": str(path)}
        )
    return data


def load_rules(
    source: Union[str, Path, Dict[str, Any]],
    registry: RuleRegistry | None = None,
    substitute_env: bool = True,
) -> RuleRegistry:
    """Build and register every rule in a configuration source.

    Args:
        source: Path to a YAML/JSON file, or an already parsed dict
        registry: Registry to add rules to; a new one is created if None
        substitute_env: Whether to apply ``${VAR}`` substitution

    Returns:
        The registry holding the loaded rules, in file order

    Raises:
        ConfigurationError: If the source or any rule is invalid
        OperationError: If two rules share a name
    """
    if isinstance(source, dict):
        data = source
    elif isinstance(source, (str, Path)):
        data = read_config_file(source)
    else:
        raise ConfigurationError(f"Invalid source type: {type(source)}")

    if substitute_env:
        data = VariableSubstitution().substitute(data)

    entries: List[Any] = data.get("rules", [])
    if not isinstance(entries, list):
        raise ConfigurationError("'rules' must be a list of rule configurations")

    registry = registry if registry is not None else RuleRegistry()
    factory = RuleFactory(registry)

    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RuleConfigurationError("unknown", f"entry {idx} is not a mapping", index=idx)
        rule_config = dict(entry)
        name = rule_config.pop("name", None)
        if not name:
            raise RuleConfigurationError(
                str(rule_config.get("type", "unknown")), f"entry {idx} is missing 'name'", index=idx
            )
        description = rule_config.pop("description", None)

        rule = factory.create(**rule_config)
        registry.register_rule(name, rule, description=description)
        logger.debug(f"Registered rule '{name}' ({rule_config.get('type')})")

    logger.info(f"Loaded {len(entries)} rules into registry '{registry.name}'")
    return registry


__all__ = [
    "VariableSubstitution",
    "read_config_file",
    "load_rules",
]
