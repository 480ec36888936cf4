"""Tests for leaf rules and the generic rule wrappers."""

import math
from datetime import date
from decimal import Decimal

import pytest

from dataknobs_validator import (
    ComparisonRule,
    ConditionRule,
    ContainsRule,
    EqualityRule,
    LengthRule,
    LengthType,
    Not,
    OptionalRule,
    PaymentCardRule,
    PaymentCardType,
    PatternRule,
    RequiredRule,
    RuleConfigurationError,
    URLRule,
)
from dataknobs_validator.cards import luhn_checksum_valid


class TestRequiredRule:
    """Test RequiredRule."""

    def test_required(self, required_rule):
        assert not required_rule.validate(None)
        assert not required_rule.validate("")
        assert not required_rule.validate([])
        assert required_rule.validate("value")
        assert required_rule.validate(0)
        assert required_rule.validate(False)

    def test_allow_empty(self):
        rule = RequiredRule(error="required", allow_empty=True)
        assert rule.validate("")
        assert not rule.validate(None)


class TestLengthRule:
    """Test LengthRule."""

    def test_bounds_are_inclusive(self):
        rule = LengthRule(error="length", min=2, max=5)
        assert rule.validate("ab")
        assert rule.validate("abcde")
        assert not rule.validate("a")
        assert not rule.validate("abcdef")

    def test_collections(self):
        rule = LengthRule(error="length", min=2)
        assert rule.validate([1, 2])
        assert not rule.validate([1])

    def test_absent_and_unsized(self):
        rule = LengthRule(error="length")
        assert not rule.validate(None)
        assert not rule.validate(12345)
        assert rule.validate("")

    def test_length_types(self):
        value = "héllo😀"
        assert LengthRule(error="e", max=6).validate(value)
        assert not LengthRule(error="e", max=6, length_type=LengthType.UTF8).validate(value)
        assert LengthRule(error="e", min=10, max=10, length_type=LengthType.UTF8).validate(value)
        assert LengthRule(error="e", min=7, max=7, length_type=LengthType.UTF16).validate(value)

    def test_length_type_from_string(self):
        rule = LengthRule(error="e", max=1, length_type="utf8")
        assert rule.length_type is LengthType.UTF8
        assert not rule.validate("é")

    def test_invalid_bounds(self):
        with pytest.raises(RuleConfigurationError):
            LengthRule(error="e", min=-1)
        with pytest.raises(RuleConfigurationError):
            LengthRule(error="e", max=-1)
        with pytest.raises(RuleConfigurationError) as exc_info:
            LengthRule(error="e", min=5, max=2)
        assert exc_info.value.context["rule_type"] == "length"

    def test_non_integer_bounds(self):
        with pytest.raises(RuleConfigurationError) as exc_info:
            LengthRule(error="e", min="8")
        assert exc_info.value.context["min"] == "8"
        with pytest.raises(RuleConfigurationError):
            LengthRule(error="e", max=2.5)
        with pytest.raises(RuleConfigurationError):
            LengthRule(error="e", max=True)


class TestComparisonRule:
    """Test ComparisonRule."""

    def test_numeric_range(self):
        rule = ComparisonRule(error="range", min=0, max=100)
        assert rule.validate(0)
        assert rule.validate(50.5)
        assert rule.validate(100)
        assert not rule.validate(-1)
        assert not rule.validate(101)
        assert not rule.validate(math.inf)

    def test_single_bound(self):
        assert ComparisonRule(error="e", min=18).validate(99)
        assert not ComparisonRule(error="e", max=10).validate(11)

    def test_invalid_input(self):
        rule = ComparisonRule(error="range", min=0, max=100)
        assert not rule.validate(None)
        assert not rule.validate(math.nan)
        assert not rule.validate("50")

    def test_orderable_values(self):
        rule = ComparisonRule(error="date", min=date(2020, 1, 1), max=date(2020, 12, 31))
        assert rule.validate(date(2020, 6, 1))
        assert not rule.validate(date(2021, 1, 1))

    def test_invalid_bounds(self):
        with pytest.raises(RuleConfigurationError):
            ComparisonRule(error="e")
        with pytest.raises(RuleConfigurationError):
            ComparisonRule(error="e", min=10, max=1)
        with pytest.raises(RuleConfigurationError):
            ComparisonRule(error="e", min=1, max="z")

    def test_decimal_values(self):
        rule = ComparisonRule(error="range", min=0, max=10)
        assert rule.validate(Decimal("9.99"))
        assert not rule.validate(Decimal("NaN"))
        assert not rule.validate(Decimal("sNaN"))
        assert rule.check(Decimal("NaN")).errors == ("range",)

    def test_nan_bounds(self):
        with pytest.raises(RuleConfigurationError):
            ComparisonRule(error="e", min=math.nan)
        with pytest.raises(RuleConfigurationError):
            ComparisonRule(error="e", min=0, max=Decimal("NaN"))


class TestEqualityRule:
    """Test EqualityRule."""

    def test_static_target(self):
        rule = EqualityRule(error="mismatch", target="yes")
        assert rule.validate("yes")
        assert not rule.validate("no")
        assert not rule.validate(None)

    def test_dynamic_target(self):
        form = {"password": "first"}
        rule = EqualityRule(error="mismatch", dynamic_target=lambda: form["password"])
        assert rule.validate("first")

        form["password"] = "second"
        assert not rule.validate("first")
        assert rule.validate("second")

    def test_requires_exactly_one_target(self):
        with pytest.raises(RuleConfigurationError):
            EqualityRule(error="e")
        with pytest.raises(RuleConfigurationError):
            EqualityRule(error="e", target=1, dynamic_target=lambda: 1)


class TestContainsRule:
    """Test ContainsRule."""

    def test_membership(self):
        rule = ContainsRule(["red", "green"], error="colour")
        assert rule.sequence == ("red", "green")
        assert rule.validate("red")
        assert not rule.validate("blue")
        assert not rule.validate(None)


class TestURLRule:
    """Test URLRule."""

    def test_urls(self):
        rule = URLRule(error="url")
        assert rule.validate("https://example.com")
        assert rule.validate("http://localhost:8080/path?q=1")
        assert rule.validate("ftp://files.example.com/a.txt")
        assert not rule.validate("example.com")
        assert not rule.validate("https://")
        assert not rule.validate("https://exa mple.com")
        assert not rule.validate("http://example.com:99999")
        assert not rule.validate("")
        assert not rule.validate(None)

    def test_schemes(self):
        rule = URLRule(error="url", schemes=["HTTPS"])
        assert rule.validate("https://example.com")
        assert not rule.validate("http://example.com")


class TestPaymentCardRule:
    """Test PaymentCardRule and card detection."""

    @pytest.mark.parametrize(
        "number,card_type",
        [
            ("4111111111111111", PaymentCardType.VISA),
            ("5555555555554444", PaymentCardType.MASTERCARD),
            ("378282246310005", PaymentCardType.AMEX),
            ("6011111111111117", PaymentCardType.DISCOVER),
            ("30569309025904", PaymentCardType.DINERS_CLUB),
            ("3530111333300000", PaymentCardType.JCB),
        ],
    )
    def test_detect(self, number, card_type):
        assert PaymentCardType.detect(number) is card_type
        assert PaymentCardRule(error="card").validate(number)

    def test_separators(self):
        rule = PaymentCardRule(error="card")
        assert rule.validate("4111 1111 1111 1111")
        assert rule.validate("4111-1111-1111-1111")

    def test_checksum(self):
        assert luhn_checksum_valid("4111111111111111")
        assert not luhn_checksum_valid("4111111111111112")
        assert not PaymentCardRule(error="card").validate("4111111111111112")

    def test_invalid_input(self):
        rule = PaymentCardRule(error="card")
        assert not rule.validate(None)
        assert not rule.validate("")
        assert not rule.validate("4111a11111111111")
        assert not rule.validate("1234567812345670")

    def test_accepted_types(self):
        rule = PaymentCardRule(error="card", accepted_types=[PaymentCardType.VISA, "amex"])
        assert rule.validate("4111111111111111")
        assert rule.validate("378282246310005")
        assert not rule.validate("5555555555554444")


class TestWrappers:
    """Test Not, OptionalRule and ConditionRule."""

    def test_not_inherits_error(self, digit_rule):
        rule = Not(digit_rule)
        assert rule.error == "needs_digit"
        assert rule.validate("abc")
        assert not rule.validate("abc1")

    def test_not_with_error(self, digit_rule):
        rule = Not(digit_rule, error="no_digits_allowed")
        assert rule.check("abc1").errors == ("no_digits_allowed",)

    def test_invert_operator(self, digit_rule):
        rule = ~digit_rule
        assert isinstance(rule, Not)
        assert rule.validate("abc")

    def test_not_fails_on_absent_input(self, digit_rule):
        assert Not(digit_rule).validate(None) is False
        assert (~RequiredRule(error="r")).validate(None) is False
        assert Not(digit_rule).check(None).errors == ("needs_digit",)
        assert OptionalRule(~digit_rule).validate(None)

    def test_optional_permits_absence(self, email_rule):
        rule = OptionalRule(email_rule)
        assert rule.validate(None)
        assert rule.validate("")
        assert rule.validate("a@b.com")
        assert not rule.validate("nope")
        assert rule.error == "invalid_email"
        assert rule.check("nope").errors == ("invalid_email",)

    def test_optional_allow_empty(self, email_rule):
        rule = OptionalRule(email_rule, allow_empty=True)
        assert rule.validate(None)
        assert not rule.validate("")

    def test_optional_group_reports_child_errors(self, min_length_rule, digit_rule):
        rule = OptionalRule(min_length_rule & digit_rule)
        assert rule.check("abc").errors == ("too_short", "needs_digit")

    def test_condition(self):
        rule = ConditionRule(lambda v: v is not None and v % 2 == 0, error="odd")
        assert rule.validate(4)
        assert not rule.validate(3)
        assert not rule.validate(None)

    def test_absent_input_fails_by_default(self, email_rule, required_rule):
        rules = [
            email_rule,
            required_rule,
            LengthRule(error="e", max=10),
            ComparisonRule(error="e", min=0),
            EqualityRule(error="e", target="x"),
            ContainsRule(["x"], error="e"),
            URLRule(error="e"),
            PaymentCardRule(error="e"),
            PatternRule(r".*", error="e"),
        ]
        for rule in rules:
            assert rule.validate(None) is False, rule
