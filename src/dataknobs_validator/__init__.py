"""DataKnobs Validator Package - Composable value validation rules.

The `dataknobs-validator` package checks single values (typically strings from
forms or API payloads) against rules and reports the caller's own error values
on failure. Rules compose into AND/OR rule sets, which are rules themselves.

Modules:
    base: Rule base class, negation, optional and predicate rules
    patterns: Regular expression rules and named ValidationPattern expressions
    rules: Required, length, comparison, equality, membership and URL rules
    cards: Payment card number rule with Luhn checksum
    composite: RuleSet with ALL/ANY modes
    validatable: Validatable mixin and the validate() helper
    result: ValidationResult
    registry: Named rule registry
    factory: Build rules from configuration dictionaries
    config: Load named rules from YAML/JSON files
    exceptions: Custom exceptions for configuration errors

Quick Examples:

    Validate a value:

    ```python
    from dataknobs_validator import LengthRule, PatternRule, ValidationPattern, validate

    result = validate("secret", [
        LengthRule(error="too_short", min=8),
        PatternRule(ValidationPattern.CONTAINS_NUMBER, error="no_digit"),
    ])
    result.valid   # False
    result.errors  # ("too_short", "no_digit")
    ```

    Validate an entity:

    ```python
    from dataknobs_validator import Validatable

    class SignUp(Validatable):
        def __init__(self, email, postcode):
            self.email = email
            self.postcode = postcode

        def validation_rules(self):
            yield self.email, PatternRule(ValidationPattern.EMAIL_ADDRESS, "invalid_email")
            yield self.postcode, PatternRule(ValidationPattern.UK_POSTCODE, "invalid_postcode")

    SignUp("user@example.com", "SW1A 1AA").validate().valid  # True
    ```
"""

from dataknobs_validator.base import ConditionRule, Not, OptionalRule, Rule
from dataknobs_validator.cards import PaymentCardRule, PaymentCardType
from dataknobs_validator.composite import All, AnyOf, GroupMode, RuleSet
from dataknobs_validator.config import load_rules
from dataknobs_validator.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    InvalidPatternError,
    NotFoundError,
    OperationError,
    RuleConfigurationError,
    UnknownPatternError,
    ValidatorError,
)
from dataknobs_validator.factory import RuleFactory, rule_factory
from dataknobs_validator.patterns import PatternRule, ValidationPattern
from dataknobs_validator.registry import Registry, RuleRegistry
from dataknobs_validator.result import ValidationResult
from dataknobs_validator.rules import (
    ComparisonRule,
    ContainsRule,
    EqualityRule,
    LengthRule,
    LengthType,
    RequiredRule,
    URLRule,
)
from dataknobs_validator.validatable import Validatable, validate

__version__ = "0.1.0"

__all__ = [
    # Rules
    "Rule",
    "Not",
    "OptionalRule",
    "ConditionRule",
    "PatternRule",
    "ValidationPattern",
    "RequiredRule",
    "LengthRule",
    "LengthType",
    "ComparisonRule",
    "EqualityRule",
    "ContainsRule",
    "URLRule",
    "PaymentCardRule",
    "PaymentCardType",
    # Composition
    "GroupMode",
    "RuleSet",
    "All",
    "AnyOf",
    # Results
    "ValidationResult",
    "Validatable",
    "validate",
    # Configuration
    "Registry",
    "RuleRegistry",
    "RuleFactory",
    "rule_factory",
    "load_rules",
    # Exceptions
    "ValidatorError",
    "ConfigurationError",
    "RuleConfigurationError",
    "InvalidPatternError",
    "ConfigFileNotFoundError",
    "NotFoundError",
    "UnknownPatternError",
    "OperationError",
    "__version__",
]
