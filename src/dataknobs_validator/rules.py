"""Leaf rules for presence, size, ordering, equality and membership checks.
"""

from __future__ import annotations

from collections.abc import Callable, Sized
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from .base import Rule, is_absent
from .exceptions import RuleConfigurationError

# Marks an unset equality target, since None is a valid target
_UNSET: Any = object()


def _is_nan(value: Any) -> bool:
    # NaN is the only value unequal to itself; covers float and Decimal
    try:
        return bool(value != value)
    except (TypeError, ValueError, ArithmeticError):
        return False


@dataclass(frozen=True)
class RequiredRule(Rule):
    """Value must be present and non-null.

    Attributes:
        error: Error reported for a missing value
        allow_empty: If True, empty strings/collections are accepted
    """

    error: Any
    allow_empty: bool = False

    def validate(self, value: Any) -> bool:
        return not is_absent(value, self.allow_empty)


class LengthType(Enum):
    """How the length of a string is measured.

    Attributes:
        CHARACTERS: Unicode code points (``len(value)``)
        UTF8: Bytes of the UTF-8 encoding
        UTF16: Code units of the UTF-16 encoding
    """

    CHARACTERS = "characters"
    UTF8 = "utf8"
    UTF16 = "utf16"

    def measure(self, value: Sized) -> int:
        if isinstance(value, str):
            if self is LengthType.UTF8:
                return len(value.encode("utf-8"))
            if self is LengthType.UTF16:
                return len(value.encode("utf-16-le")) // 2
        return len(value)


@dataclass(frozen=True)
class LengthRule(Rule):
    """String/collection length must be within inclusive bounds.

    Attributes:
        error: Error reported when the length is out of bounds
        min: Minimum length (inclusive)
        max: Maximum length (inclusive), or None for no upper bound
        length_type: How string lengths are counted
    """

    error: Any
    min: int = 0
    max: int | None = None
    length_type: LengthType = LengthType.CHARACTERS

    def __post_init__(self) -> None:
        if isinstance(self.length_type, str):
            object.__setattr__(self, "length_type", LengthType(self.length_type.lower()))
        for name, bound in (("min", self.min), ("max", self.max)):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
                raise RuleConfigurationError(
                    "length", f"{name} length must be an integer: {bound!r}", **{name: bound}
                )
        if self.min < 0:
            raise RuleConfigurationError("length", f"min length cannot be negative: {self.min}", min=self.min)
        if self.max is not None and self.max < 0:
            raise RuleConfigurationError("length", f"max length cannot be negative: {self.max}", max=self.max)
        if self.max is not None and self.min > self.max:
            raise RuleConfigurationError(
                "length",
                f"min length ({self.min}) cannot be greater than max ({self.max})",
                min=self.min,
                max=self.max,
            )

    def validate(self, value: Any) -> bool:
        if value is None or not isinstance(value, Sized):
            return False
        length = self.length_type.measure(value)
        if length < self.min:
            return False
        return self.max is None or length <= self.max


@dataclass(frozen=True)
class ComparisonRule(Rule):
    """Value must lie between inclusive bounds.

    Works for anything orderable against the bounds: numbers, dates,
    strings. Values that cannot be compared with a bound, and NaN, fail.

    Attributes:
        error: Error reported when the value is out of range
        min: Lower bound (inclusive), or None
        max: Upper bound (inclusive), or None
    """

    error: Any
    min: Any = None
    max: Any = None

    def __post_init__(self) -> None:
        if self.min is None and self.max is None:
            raise RuleConfigurationError("comparison", "at least one of min or max is required")
        for name, bound in (("min", self.min), ("max", self.max)):
            if _is_nan(bound):
                raise RuleConfigurationError("comparison", f"{name} cannot be NaN", **{name: bound})
        if self.min is not None and self.max is not None:
            try:
                inverted = self.min > self.max
            except TypeError as e:
                raise RuleConfigurationError(
                    "comparison", f"min and max are not comparable: {e}", min=self.min, max=self.max
                ) from e
            if inverted:
                raise RuleConfigurationError(
                    "comparison",
                    f"min ({self.min}) cannot be greater than max ({self.max})",
                    min=self.min,
                    max=self.max,
                )

    def validate(self, value: Any) -> bool:
        if value is None:
            return False
        if _is_nan(value):
            return False
        try:
            if self.min is not None and value < self.min:
                return False
            if self.max is not None and value > self.max:
                return False
        except (TypeError, ArithmeticError):
            return False
        return True


@dataclass(frozen=True)
class EqualityRule(Rule):
    """Value must equal a target.

    The target is either fixed, or computed on every validation by
    ``dynamic_target``, e.g. to compare a confirmation field with the current
    value of the field it confirms.

    Attributes:
        error: Error reported when the values differ
        target: Fixed value to compare against
        dynamic_target: Callable returning the value to compare against
    """

    error: Any
    target: Any = _UNSET
    dynamic_target: Callable[[], Any] | None = None

    def __post_init__(self) -> None:
        if (self.target is _UNSET) == (self.dynamic_target is None):
            raise RuleConfigurationError("equality", "exactly one of target or dynamic_target is required")

    def validate(self, value: Any) -> bool:
        expected = self.dynamic_target() if self.dynamic_target is not None else self.target
        return value is not None and value == expected


@dataclass(frozen=True)
class ContainsRule(Rule):
    """Value must be one of a fixed collection of allowed values.

    Attributes:
        sequence: Allowed values
        error: Error reported for a value outside the collection
    """

    sequence: tuple[Any, ...]
    error: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "sequence", tuple(self.sequence))

    def validate(self, value: Any) -> bool:
        return value is not None and value in self.sequence


@dataclass(frozen=True)
class URLRule(Rule):
    """Value must be an absolute URL with a scheme and a host.

    Attributes:
        error: Error reported for a malformed URL
        schemes: Accepted schemes (lowercase), or None to accept any
    """

    error: Any
    schemes: frozenset[str] | None = field(default=None)

    def __post_init__(self) -> None:
        if self.schemes is not None:
            object.__setattr__(self, "schemes", frozenset(s.lower() for s in self.schemes))

    def validate(self, value: Any) -> bool:
        if not isinstance(value, str) or not value or any(c.isspace() for c in value):
            return False
        try:
            parts = urlsplit(value)
            # Accessing port validates it
            parts.port
        except ValueError:
            return False
        if not parts.scheme or not parts.netloc or not parts.hostname:
            return False
        return self.schemes is None or parts.scheme.lower() in self.schemes


__all__ = [
    "RequiredRule",
    "LengthType",
    "LengthRule",
    "ComparisonRule",
    "EqualityRule",
    "ContainsRule",
    "URLRule",
]
