"""Validation entry points for consumers: single values and whole entities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from typing import Any, Union

from .base import Rule
from .composite import RuleSet
from .exceptions import RuleConfigurationError
from .result import ValidationResult

RuleLike = Union[Rule, Iterable[Rule]]


def as_rule(rules: RuleLike) -> Rule:
    """Normalize a rule, rule set, or sequence of rules into one rule.

    A plain sequence becomes an exhaustive ALL rule set.

    Args:
        rules: Rule or iterable of rules

    Returns:
        A single Rule

    Raises:
        RuleConfigurationError: If the argument is neither
    """
    if isinstance(rules, Rule):
        return rules
    if isinstance(rules, (str, bytes)) or not isinstance(rules, Iterable):
        raise RuleConfigurationError(
            "rule set", f"expected a Rule or an iterable of rules, got {type(rules).__name__}"
        )
    return RuleSet(rules)


def validate(value: Any, rules: RuleLike) -> ValidationResult:
    """Validate one value against a rule, rule set, or list of rules.

    Args:
        value: Value to validate; None is a normal input
        rules: Rules to apply; a list is evaluated exhaustively as ALL

    Returns:
        ValidationResult with the errors of every failing rule, in order

    Example:
        ```python
        result = validate("abc", [
            LengthRule(error="too_short", min=8),
            PatternRule(ValidationPattern.CONTAINS_NUMBER, error="no_digit"),
        ])
        result.errors  # ("too_short", "no_digit")
        ```
    """
    return as_rule(rules).check(value)


class Validatable(ABC):
    """Mixin for entities that validate their own fields.

    Subclasses declare ``(value, rules)`` pairs; ``validate`` checks every
    pair and concatenates the errors in declaration order. Duplicate errors
    are kept.

    Example:
        ```python
        class SignUpForm(Validatable):
            def __init__(self, email, password):
                self.email = email
                self.password = password

            def validation_rules(self):
                yield self.email, email_rule
                yield self.password, [length_rule, digit_rule]

        result = SignUpForm("a@b.com", "secret").validate()
        ```
    """

    @abstractmethod
    def validation_rules(self) -> Iterable[tuple[Any, RuleLike]]:
        """Declare the values to validate and the rules that apply to each.

        Returns:
            Iterable of (value, rule-or-rules) pairs, in declaration order
        """

    def validation_results(self) -> Iterator[ValidationResult]:
        """Validate each declared pair independently.

        Yields:
            One ValidationResult per declared pair, in declaration order
        """
        for value, rules in self.validation_rules():
            yield validate(value, rules)

    def validate(self) -> ValidationResult:
        """Validate every declared pair and merge the outcomes.

        Returns:
            Valid result, or an invalid one with all collected errors
        """
        return ValidationResult.combine(self.validation_results())

    def is_valid(self) -> bool:
        return self.validate().valid


__all__ = [
    "RuleLike",
    "Validatable",
    "as_rule",
    "validate",
]
