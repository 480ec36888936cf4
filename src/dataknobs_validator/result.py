"""Validation result type shared by rules, rule sets and validatables.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation: valid, or invalid with the collected errors.

    Errors are the opaque values attached to rules by the caller; they are
    kept in the order the failing rules were evaluated. Validity is derived
    from the error sequence, so a valid result never carries errors and an
    invalid one always does.
    """

    errors: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.errors, tuple):
            object.__setattr__(self, "errors", tuple(self.errors))

    @property
    def valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine with another result, appending its errors after ours.

        Args:
            other: Result to merge with this one

        Returns:
            New ValidationResult; valid only if both were valid
        """
        if not other.errors:
            return self
        if not self.errors:
            return other
        return ValidationResult(self.errors + other.errors)

    @classmethod
    def combine(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        """Merge many results in order.

        Args:
            results: Results to fold together

        Returns:
            A single ValidationResult holding every error in sequence
        """
        errors: list[Any] = []
        for result in results:
            errors.extend(result.errors)
        return cls(tuple(errors))

    @classmethod
    def success(cls) -> ValidationResult:
        """Create a valid result."""
        return cls()

    @classmethod
    def failure(cls, errors: Iterable[Any]) -> ValidationResult:
        """Create an invalid result.

        Args:
            errors: Error values describing the failure, in evaluation order

        Returns:
            Invalid ValidationResult

        Raises:
            ValueError: If no errors are given
        """
        errors = tuple(errors)
        if not errors:
            raise ValueError("An invalid ValidationResult requires at least one error")
        return cls(errors)
