"""Tests for building rules from configuration."""

import pytest

from dataknobs_validator import (
    ComparisonRule,
    ContainsRule,
    EqualityRule,
    GroupMode,
    InvalidPatternError,
    LengthRule,
    LengthType,
    Not,
    OptionalRule,
    PaymentCardRule,
    PaymentCardType,
    PatternRule,
    RequiredRule,
    RuleConfigurationError,
    RuleFactory,
    RuleRegistry,
    RuleSet,
    UnknownPatternError,
    URLRule,
    ValidationPattern,
    rule_factory,
)


class TestLeafRules:
    """Test creating leaf rules."""

    def test_pattern(self):
        rule = rule_factory.create(type="pattern", pattern="[a-z]+", error="lowercase")
        assert isinstance(rule, PatternRule)
        assert rule.validate("abc")
        assert rule.error == "lowercase"

    def test_named_pattern(self):
        rule = rule_factory.create(type="pattern", named_pattern="emailAddress", error="email")
        assert rule.pattern is ValidationPattern.EMAIL_ADDRESS
        assert rule.validate("a@b.com")

    def test_pattern_flags(self):
        rule = rule_factory.create(type="pattern", pattern="[a-z]+", flags=["ignorecase"], error="e")
        assert rule.validate("ABC")

        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="pattern", pattern="[a-z]+", flags=["bogus"], error="e")

    def test_pattern_errors(self):
        with pytest.raises(InvalidPatternError):
            rule_factory.create(type="pattern", pattern="(", error="e")
        with pytest.raises(UnknownPatternError):
            rule_factory.create(type="pattern", named_pattern="phone", error="e")
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="pattern", error="e")

    def test_required(self):
        rule = rule_factory.create(type="required", error="required", allow_empty=True)
        assert isinstance(rule, RequiredRule)
        assert rule.allow_empty

    def test_length(self):
        rule = rule_factory.create(type="length", min=2, max=4, length_type="utf16", error="length")
        assert isinstance(rule, LengthRule)
        assert rule.length_type is LengthType.UTF16
        assert rule.validate("abc")

    def test_comparison_and_range(self):
        for rule_type in ("comparison", "range"):
            rule = rule_factory.create(type=rule_type, min=1, max=10, error="range")
            assert isinstance(rule, ComparisonRule)
            assert rule.validate(5)
            assert not rule.validate(11)

    def test_equality(self):
        rule = rule_factory.create(type="equality", target=None, error="must_be_null")
        assert isinstance(rule, EqualityRule)
        assert rule.target is None

    def test_contains(self):
        rule = rule_factory.create(type="contains", values=["a", "b"], error="choice")
        assert isinstance(rule, ContainsRule)
        assert rule.validate("b")

    def test_url(self):
        rule = rule_factory.create(type="url", schemes=["https"], error="url")
        assert isinstance(rule, URLRule)
        assert rule.schemes == frozenset({"https"})

    def test_payment_card(self):
        rule = rule_factory.create(type="payment_card", accepted_types=["visa"], error="card")
        assert isinstance(rule, PaymentCardRule)
        assert rule.accepted_types == frozenset({PaymentCardType.VISA})

        default = rule_factory.create(type="payment_card", error="card")
        assert default.accepted_types == frozenset(PaymentCardType)

        with pytest.raises(RuleConfigurationError) as exc_info:
            rule_factory.create(type="payment_card", accepted_types=["bogus"], error="card")
        assert "visa" in exc_info.value.context["available"]

    def test_error_is_required(self):
        with pytest.raises(RuleConfigurationError) as exc_info:
            rule_factory.create(type="required")
        assert "error" in str(exc_info.value)

    def test_opaque_error_values(self):
        error = {"code": "E100", "field": "age"}
        rule = rule_factory.create(type="range", min=0, error=error)
        assert rule.check(-1).errors == (error,)

    def test_unknown_type(self):
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="telepathy", error="e")
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(error="e")


class TestCompositeRules:
    """Test creating wrapper and composite rules."""

    def test_all(self):
        rule = rule_factory.create(
            type="all",
            fail_fast=True,
            rules=[
                {"type": "length", "min": 8, "error": "too_short"},
                {"type": "pattern", "named_pattern": "contains_number", "error": "needs_digit"},
            ],
        )
        assert isinstance(rule, RuleSet)
        assert rule.mode is GroupMode.ALL
        assert rule.fail_fast
        assert rule.check("abc").errors == ("too_short",)

    def test_any_with_summary_error(self):
        rule = rule_factory.create(
            type="any",
            error="contact_invalid",
            rules=[
                {"type": "pattern", "named_pattern": "email_address", "error": "email"},
                {"type": "pattern", "named_pattern": "uk_postcode", "error": "postcode"},
            ],
        )
        assert rule.mode is GroupMode.ANY
        assert rule.validate("SW1A 1AA")
        assert rule.check("nothing").errors == ("contact_invalid",)

    def test_rules_must_be_list(self):
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="all", rules={"type": "required", "error": "e"})

    def test_optional_and_not(self):
        optional = rule_factory.create(
            type="optional", rule={"type": "pattern", "named_pattern": "email_address", "error": "email"}
        )
        assert isinstance(optional, OptionalRule)
        assert optional.validate(None)

        negated = rule_factory.create(
            type="not", error="no_digits", rule={"type": "pattern", "pattern": r".*\d.*", "error": "digit"}
        )
        assert isinstance(negated, Not)
        assert negated.check("a1").errors == ("no_digits",)

        inherited = rule_factory.create(type="not", rule={"type": "required", "error": "required"})
        assert inherited.error == "required"

        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="optional")
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="not", rule="required")

    def test_ref(self):
        registry = RuleRegistry()
        required = RequiredRule(error="required")
        registry.register_rule("required", required)
        factory = RuleFactory(registry)

        assert factory.create(type="ref", ref="required") is required
        with pytest.raises(RuleConfigurationError):
            factory.create(type="ref", ref="missing")
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="ref", ref="required")
