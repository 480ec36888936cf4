"""Factory building rules from configuration dictionaries."""

from __future__ import annotations

import logging
import re
from typing import Any

from .base import Not, OptionalRule, Rule
from .cards import PaymentCardRule, PaymentCardType
from .composite import RuleSet
from .exceptions import NotFoundError, RuleConfigurationError
from .patterns import PatternRule, ValidationPattern
from .registry import RuleRegistry
from .rules import (
    ComparisonRule,
    ContainsRule,
    EqualityRule,
    LengthRule,
    RequiredRule,
    URLRule,
)

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class RuleFactory:
    """Factory for creating rules from configuration.

    Configuration Options:
        type (str): Rule type (see below)
        error (any): Error value reported on failure; required for every
            rule except ``all``/``any`` (optional summary), ``optional`` and
            ``ref``, and optional for ``not``

    Rule Types:
        pattern: ``pattern`` (raw expression) or ``named_pattern``
            (e.g. ``email_address``), optional ``flags`` list (``IGNORECASE``...)
        required: optional ``allow_empty``
        length: ``min``, ``max``, ``length_type`` (characters, utf8, utf16)
        comparison / range: ``min``, ``max``
        equality: ``target``
        contains: ``values``
        url: optional ``schemes``
        payment_card: optional ``accepted_types`` (visa, mastercard...)
        optional: ``rule`` (nested config), optional ``allow_empty``
        not: ``rule`` (nested config)
        all / any: ``rules`` (nested configs), optional ``fail_fast``
        ref: ``ref`` names a rule in the factory's registry

    Example Configuration:
        rules:
          - name: password
            type: all
            rules:
              - type: length
                min: 8
                error: password_too_short
              - type: pattern
                named_pattern: contains_number
                error: password_needs_digit
          - name: contact
            type: any
            error: contact_required
            rules:
              - type: pattern
                named_pattern: email_address
                error: invalid_email
              - type: pattern
                named_pattern: uk_postcode
                error: invalid_postcode
    """

    def __init__(self, registry: RuleRegistry | None = None):
        """Initialize the factory.

        Args:
            registry: Registry used to resolve ``ref`` rules
        """
        self.registry = registry

    def create(self, **config: Any) -> Rule:
        """Create a Rule from configuration.

        Args:
            **config: Rule configuration

        Returns:
            Rule instance

        Raises:
            RuleConfigurationError: If the configuration is invalid
            InvalidPatternError: If a pattern expression is malformed
            UnknownPatternError: If a named pattern does not exist
        """
        rule_type = str(config.get("type", "")).lower()
        if not rule_type:
            raise RuleConfigurationError("unknown", "missing 'type'", config=config)

        logger.debug(f"Creating {rule_type} rule")

        if rule_type == "pattern":
            return self._create_pattern(config)

        elif rule_type == "required":
            return RequiredRule(
                error=self._error(rule_type, config),
                allow_empty=config.get("allow_empty", False),
            )

        elif rule_type == "length":
            return LengthRule(
                error=self._error(rule_type, config),
                min=config.get("min", 0),
                max=config.get("max"),
                length_type=config.get("length_type", "characters"),
            )

        elif rule_type in ("comparison", "range"):
            return ComparisonRule(
                error=self._error(rule_type, config),
                min=config.get("min"),
                max=config.get("max"),
            )

        elif rule_type == "equality":
            return EqualityRule(
                error=self._error(rule_type, config),
                target=self._require(rule_type, config, "target"),
            )

        elif rule_type == "contains":
            return ContainsRule(
                self._require(rule_type, config, "values"),
                error=self._error(rule_type, config),
            )

        elif rule_type == "url":
            return URLRule(
                error=self._error(rule_type, config),
                schemes=config.get("schemes"),
            )

        elif rule_type == "payment_card":
            return self._create_payment_card(config)

        elif rule_type == "optional":
            return OptionalRule(
                self.create(**self._nested(rule_type, config)),
                allow_empty=config.get("allow_empty", False),
            )

        elif rule_type == "not":
            inner = self.create(**self._nested(rule_type, config))
            if "error" in config:
                return Not(inner, error=config["error"])
            return Not(inner)

        elif rule_type in ("all", "any"):
            # Recursive build for composite rules
            sub_configs = config.get("rules", [])
            if not isinstance(sub_configs, list):
                raise RuleConfigurationError(rule_type, "'rules' must be a list")
            return RuleSet(
                [self.create(**sub_config) for sub_config in sub_configs],
                mode=rule_type,
                error=config.get("error"),
                fail_fast=config.get("fail_fast", False),
            )

        elif rule_type == "ref":
            return self._resolve_ref(config)

        logger.warning(f"Unknown rule type: {rule_type}")
        raise RuleConfigurationError(rule_type, "unknown rule type")

    def _create_pattern(self, config: dict[str, Any]) -> PatternRule:
        flags = 0
        for flag_name in config.get("flags", []):
            try:
                flags |= re.RegexFlag[str(flag_name).upper()]
            except KeyError:
                raise RuleConfigurationError("pattern", f"unknown regex flag: {flag_name}") from None

        if "named_pattern" in config:
            pattern: str | ValidationPattern = ValidationPattern.from_name(config["named_pattern"])
        else:
            pattern = self._require("pattern", config, "pattern")
        return PatternRule(pattern, error=self._error("pattern", config), flags=flags)

    def _create_payment_card(self, config: dict[str, Any]) -> PaymentCardRule:
        error = self._error("payment_card", config)
        accepted = config.get("accepted_types")
        if accepted is None:
            return PaymentCardRule(error=error)
        try:
            return PaymentCardRule(error=error, accepted_types=frozenset(accepted))
        except KeyError as e:
            raise RuleConfigurationError(
                "payment_card",
                f"unknown card type: {e.args[0]}",
                available=[t.name.lower() for t in PaymentCardType],
            ) from None

    def _resolve_ref(self, config: dict[str, Any]) -> Rule:
        name = self._require("ref", config, "ref")
        if self.registry is None:
            raise RuleConfigurationError("ref", f"cannot resolve '{name}' without a registry")
        try:
            return self.registry.get(name)
        except NotFoundError as e:
            raise RuleConfigurationError("ref", f"no rule named '{name}'", **e.context) from e

    @staticmethod
    def _require(rule_type: str, config: dict[str, Any], key: str) -> Any:
        value = config.get(key, _MISSING)
        if value is _MISSING:
            raise RuleConfigurationError(rule_type, f"missing '{key}'")
        return value

    @classmethod
    def _error(cls, rule_type: str, config: dict[str, Any]) -> Any:
        return cls._require(rule_type, config, "error")

    @classmethod
    def _nested(cls, rule_type: str, config: dict[str, Any]) -> dict[str, Any]:
        nested = cls._require(rule_type, config, "rule")
        if not isinstance(nested, dict):
            raise RuleConfigurationError(rule_type, "'rule' must be a mapping")
        return nested


# Default factory without a registry, for configs that use no references
rule_factory = RuleFactory()


__all__ = [
    "RuleFactory",
    "rule_factory",
]
