"""Regular expression rules and the catalogue of named patterns.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from re import Pattern as RegexPattern
from typing import Any

from .base import Rule
from .exceptions import InvalidPatternError, RuleConfigurationError, UnknownPatternError


class ValidationPattern(str, Enum):
    """Named regular expressions for common user input.

    Each member's value is the expression string itself, so a member can be
    used anywhere a raw pattern string is accepted.

    Attributes:
        EMAIL_ADDRESS: An email address
        CONTAINS_NUMBER: At least one digit
        CONTAINS_UPPERCASE: At least one uppercase ASCII letter
        CONTAINS_LOWERCASE: At least one lowercase ASCII letter
        UK_POSTCODE: A UK postcode, with or without the separating space

    Example:
        ```python
        from dataknobs_validator import PatternRule, ValidationPattern

        rule = PatternRule(ValidationPattern.EMAIL_ADDRESS, error="invalid_email")
        rule.validate("user@example.com")  # True
        ```
    """

    EMAIL_ADDRESS = (
        r"^[_A-Za-z0-9-+]+(\.[_A-Za-z0-9-+]+)*@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)*(\.[A-Za-z]{2,})$"
    )
    CONTAINS_NUMBER = r".*\d.*"
    CONTAINS_UPPERCASE = r"^.*?[A-Z].*?$"
    CONTAINS_LOWERCASE = r"^.*?[a-z].*?$"
    # Letter classes exclude QVX (first position), IJZ (second position) and
    # CIKMOV (inward code letters)
    UK_POSTCODE = (
        r"(GIR 0AA)|((([A-PR-UWYZ][0-9][0-9]?)|(([A-PR-UWYZ][A-HK-Y][0-9][0-9]?)"
        r"|(([A-PR-UWYZ][0-9][A-HJKPSTUW])|([A-PR-UWYZ][A-HK-Y][0-9][ABEHMNPRVWXY]))))"
        r"[ ]?[0-9][ABD-HJLNP-UW-Z]{2})"
    )

    @classmethod
    def from_name(cls, name: str) -> ValidationPattern:
        """Look up a pattern by name.

        Accepts the member name (``EMAIL_ADDRESS``), its snake case form
        (``email_address``) or its camel case form (``emailAddress``).

        Args:
            name: Pattern name

        Returns:
            The matching ValidationPattern

        Raises:
            UnknownPatternError: If no pattern has that name
        """
        key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip()).upper()
        try:
            return cls[key]
        except KeyError:
            raise UnknownPatternError(name, [member.name for member in cls]) from None


def compile_pattern(pattern: str | ValidationPattern | RegexPattern, flags: int = 0) -> RegexPattern:
    """Compile a pattern, reporting malformed expressions as InvalidPatternError.

    Args:
        pattern: Raw expression, named pattern, or already compiled pattern
        flags: ``re`` flags applied when compiling a string; a compiled
            pattern already carries its own flags and cannot take more

    Returns:
        Compiled regular expression

    Raises:
        InvalidPatternError: If the expression is malformed
        RuleConfigurationError: If flags are given with a compiled pattern
    """
    if isinstance(pattern, RegexPattern):
        if flags:
            raise RuleConfigurationError(
                "pattern", "flags cannot be applied to a compiled pattern", pattern=pattern.pattern
            )
        return pattern
    expression = pattern.value if isinstance(pattern, ValidationPattern) else pattern
    try:
        return re.compile(expression, flags)
    except re.error as e:
        raise InvalidPatternError(expression, str(e)) from e


@dataclass(frozen=True)
class PatternRule(Rule):
    """Passes when the whole input string matches a regular expression.

    The expression is compiled when the rule is built, so a malformed
    expression fails immediately instead of at the first validation. Matching
    is anchored at both ends: ``"a@b.com extra"`` does not satisfy the email
    pattern even though it contains an address.

    Attributes:
        pattern: Raw expression string, ValidationPattern, or compiled pattern
        error: Error reported when the input does not match
        flags: ``re`` flags used to compile a string pattern
    """

    pattern: str | ValidationPattern | RegexPattern
    error: Any
    flags: int = 0
    regex: RegexPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", compile_pattern(self.pattern, self.flags))

    @property
    def expression(self) -> str:
        """The expression string the rule evaluates."""
        return self.regex.pattern

    def validate(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        return self.regex.fullmatch(value) is not None


__all__ = [
    "ValidationPattern",
    "PatternRule",
    "compile_pattern",
]
