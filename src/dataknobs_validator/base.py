"""Rule base class and the generic rule wrappers.

A rule answers one question about one value: does it pass? Rules carry the
error value to report when it does not, and never raise for a validation
miss. Rules compose with ``&`` (all must pass), ``|`` (any may pass) and
``~`` (negation).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .result import ValidationResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from .composite import RuleSet

# Marks an error argument that was not supplied
_INHERIT: Any = object()


def is_absent(value: Any, allow_empty: bool = False) -> bool:
    """Check whether a value counts as missing.

    Args:
        value: Value to inspect
        allow_empty: If True, empty strings/collections count as present

    Returns:
        True if the value is None, or empty and empties are not allowed
    """
    if value is None:
        return True
    if not allow_empty and isinstance(value, (str, bytes, list, dict, set, tuple)):
        return len(value) == 0
    return False


class Rule(ABC):
    """Base class for all rules.

    Subclasses implement ``validate`` and expose an ``error`` attribute. Rules
    are immutable after construction and hold no state between calls, so one
    instance may be shared freely, including across threads.
    """

    error: Any

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Check a value against this rule.

        Args:
            value: Value to check; None is a normal input

        Returns:
            True if the value satisfies the rule
        """

    def check(self, value: Any) -> ValidationResult:
        """Validate a value and report the outcome as a result.

        Args:
            value: Value to check

        Returns:
            Valid result, or an invalid one carrying this rule's error
        """
        if self.validate(value):
            return ValidationResult.success()
        return ValidationResult.failure([self.error])

    def __and__(self, other: Rule) -> RuleSet:
        """Combine with AND: both rules must pass."""
        if not isinstance(other, Rule):
            return NotImplemented
        from .composite import GroupMode, RuleSet

        return RuleSet.join(self, other, GroupMode.ALL)

    def __or__(self, other: Rule) -> RuleSet:
        """Combine with OR: at least one rule must pass."""
        if not isinstance(other, Rule):
            return NotImplemented
        from .composite import GroupMode, RuleSet

        return RuleSet.join(self, other, GroupMode.ANY)

    def __invert__(self) -> Not:
        """Negate this rule."""
        return Not(self)


@dataclass(frozen=True)
class Not(Rule):
    """Passes when the wrapped rule fails.

    Without an explicit error the wrapped rule's error is reported. Absent
    input fails like it does for any other required rule; wrap the negation
    in ``OptionalRule`` to let None through.
    """

    rule: Rule
    error: Any = _INHERIT

    def __post_init__(self) -> None:
        if self.error is _INHERIT:
            object.__setattr__(self, "error", self.rule.error)

    def validate(self, value: Any) -> bool:
        if value is None:
            return False
        return not self.rule.validate(value)


@dataclass(frozen=True)
class OptionalRule(Rule):
    """Lets an absent value through, otherwise defers to the wrapped rule.

    Attributes:
        rule: Rule applied to present values
        allow_empty: If True, only None counts as absent; empty strings and
            collections are handed to the wrapped rule
    """

    rule: Rule
    allow_empty: bool = False

    @property
    def error(self) -> Any:  # type: ignore[override]
        return self.rule.error

    def validate(self, value: Any) -> bool:
        if is_absent(value, self.allow_empty):
            return True
        return self.rule.validate(value)

    def check(self, value: Any) -> ValidationResult:
        if is_absent(value, self.allow_empty):
            return ValidationResult.success()
        return self.rule.check(value)


@dataclass(frozen=True)
class ConditionRule(Rule):
    """Rule backed by a predicate.

    The predicate receives the raw value, None included, and must return a
    truthy value for the rule to pass.
    """

    condition: Callable[[Any], bool]
    error: Any

    def validate(self, value: Any) -> bool:
        return bool(self.condition(value))


__all__ = [
    "Rule",
    "Not",
    "OptionalRule",
    "ConditionRule",
    "is_absent",
]
