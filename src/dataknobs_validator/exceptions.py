"""Exception hierarchy for the dataknobs_validator package.

Validation misses are never raised: a value that does not satisfy a rule is
reported through a ``ValidationResult`` carrying the caller's error values.
The exceptions below cover programming and configuration mistakes only, such
as a malformed regular expression or an unknown rule type in a config file.

Example:
    ```python
    from dataknobs_validator.exceptions import InvalidPatternError, ValidatorError

    try:
        PatternRule("[a-z", error="bad")
    except InvalidPatternError as e:
        logger.error(f"Rule rejected: {e}")
        logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class ValidatorError(Exception):
    """Base exception for all dataknobs_validator errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (pattern, rule type, etc.)
        details: Alternative to context (both are supported for compatibility)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ConfigurationError(ValidatorError):
    """Raised when a rule or rule file is configured incorrectly.

    Example:
        ```python
        raise ConfigurationError(
            "Unsupported rule file format",
            context={"path": "rules.toml", "suffix": ".toml"}
        )
        ```
    """

    pass


class RuleConfigurationError(ConfigurationError):
    """Raised when a rule is constructed with invalid parameters."""

    def __init__(self, rule_type: str, message: str, **context: Any):
        self.rule_type = rule_type
        super().__init__(
            f"Invalid {rule_type} rule: {message}",
            context={"rule_type": rule_type, **context},
        )


class InvalidPatternError(ConfigurationError):
    """Raised when a pattern rule is given a malformed regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(
            f"Invalid regular expression '{pattern}': {reason}",
            context={"pattern": pattern, "reason": reason},
        )


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when a rule configuration file does not exist."""

    pass


class NotFoundError(ValidatorError):
    """Raised when a named item (rule, pattern) is not found."""

    pass


class UnknownPatternError(NotFoundError):
    """Raised when a named validation pattern does not exist."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        super().__init__(
            f"Unknown validation pattern: {name}",
            context={"name": name, "available": available},
        )


class OperationError(ValidatorError):
    """Raised when a registry operation fails, e.g. a duplicate registration."""

    pass


__all__ = [
    "ValidatorError",
    "ConfigurationError",
    "RuleConfigurationError",
    "InvalidPatternError",
    "ConfigFileNotFoundError",
    "NotFoundError",
    "UnknownPatternError",
    "OperationError",
]
