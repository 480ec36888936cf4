"""Rule sets combining rules with AND/OR semantics.

A ``RuleSet`` is itself a rule, so sets nest freely. Evaluation is
exhaustive by default: an ALL set runs every child and reports every
failure, so a consumer can show all problems with a value at once. Pass
``fail_fast=True`` to stop at the first failing child instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .base import Rule
from .exceptions import RuleConfigurationError
from .result import ValidationResult


class GroupMode(Enum):
    """How a rule set combines its children.

    Attributes:
        ALL: Every child must pass (AND)
        ANY: At least one child must pass (OR)
    """

    ALL = "all"
    ANY = "any"


@dataclass(frozen=True, init=False)
class RuleSet(Rule):
    """Ordered group of rules evaluated against the same value.

    Attributes:
        rules: Child rules, in evaluation order
        mode: ALL or ANY combination
        error: Optional summary error; when set, a failing set reports only
            this error instead of the errors of its failing children
        fail_fast: In ALL mode, stop at the first failing child

    Example:
        ```python
        password = RuleSet(
            [
                LengthRule(error="too_short", min=8),
                PatternRule(ValidationPattern.CONTAINS_NUMBER, error="no_digit"),
            ]
        )
        password.check("abc").errors  # ("too_short", "no_digit")
        ```
    """

    rules: tuple[Rule, ...]
    mode: GroupMode
    error: Any
    fail_fast: bool

    def __init__(
        self,
        rules: Iterable[Rule] = (),
        mode: GroupMode | str = GroupMode.ALL,
        error: Any = None,
        fail_fast: bool = False,
    ):
        """Initialize with child rules.

        Args:
            rules: Child rules; the sequence is copied
            mode: Combination mode, as a GroupMode or its string value
            error: Optional summary error for the whole set
            fail_fast: Stop an ALL set at the first failure

        Raises:
            RuleConfigurationError: If a child is not a Rule, or an ANY set
                has no children
        """
        rules = tuple(rules)
        if isinstance(mode, str):
            try:
                mode = GroupMode(mode.lower())
            except ValueError:
                raise RuleConfigurationError(
                    "rule set", f"unknown mode: {mode}", available=[m.value for m in GroupMode]
                ) from None
        for child in rules:
            if not isinstance(child, Rule):
                raise RuleConfigurationError(
                    mode.value, f"expected a Rule, got {type(child).__name__}", child=repr(child)
                )
        if mode is GroupMode.ANY and not rules:
            raise RuleConfigurationError(mode.value, "an ANY rule set needs at least one rule")

        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "error", error)
        object.__setattr__(self, "fail_fast", fail_fast)

    @staticmethod
    def join(left: Rule, right: Rule, mode: GroupMode) -> RuleSet:
        """Combine two rules, flattening plain sets of the same mode.

        Args:
            left: First rule
            right: Second rule
            mode: Combination mode of the result

        Returns:
            A RuleSet containing both rules
        """
        rules: list[Rule] = []
        for rule in (left, right):
            if isinstance(rule, RuleSet) and rule._is_plain(mode):
                rules.extend(rule.rules)
            else:
                rules.append(rule)
        return RuleSet(rules, mode)

    def _is_plain(self, mode: GroupMode) -> bool:
        return self.mode is mode and self.error is None and not self.fail_fast

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def append(self, rule: Rule) -> RuleSet:
        """Return a new set with an extra rule at the end.

        Args:
            rule: Rule to add

        Returns:
            New RuleSet; this one is left unchanged
        """
        return RuleSet(self.rules + (rule,), self.mode, self.error, self.fail_fast)

    def check(self, value: Any) -> ValidationResult:
        """Evaluate the children and aggregate their outcomes.

        Args:
            value: Value handed to every child

        Returns:
            Valid result, or an invalid one with the errors of the failing
            children in evaluation order (or the set's own error, if given)
        """
        if self.mode is GroupMode.ALL:
            result = self._check_all(value)
        else:
            result = self._check_any(value)
        if result.valid or self.error is None:
            return result
        return ValidationResult.failure([self.error])

    def _check_all(self, value: Any) -> ValidationResult:
        result = ValidationResult.success()
        for rule in self.rules:
            child_result = rule.check(value)
            if not child_result.valid:
                result = result.merge(child_result)
                if self.fail_fast:
                    break
        return result

    def _check_any(self, value: Any) -> ValidationResult:
        failures = []
        for rule in self.rules:
            child_result = rule.check(value)
            if child_result.valid:
                return child_result
            failures.append(child_result)
        return ValidationResult.combine(failures)

    def validate(self, value: Any) -> bool:
        return self.check(value).valid


class All(RuleSet):
    """All rules must pass (AND logic)."""

    def __init__(self, *rules: Rule, error: Any = None, fail_fast: bool = False):
        super().__init__(rules, GroupMode.ALL, error=error, fail_fast=fail_fast)


class AnyOf(RuleSet):
    """At least one rule must pass (OR logic)."""

    def __init__(self, *rules: Rule, error: Any = None):
        super().__init__(rules, GroupMode.ANY, error=error)


__all__ = [
    "GroupMode",
    "RuleSet",
    "All",
    "AnyOf",
]
