"""Pytest configuration for dataknobs_validator tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validator import (  # noqa: E402
    LengthRule,
    PatternRule,
    RequiredRule,
    ValidationPattern,
)


@pytest.fixture
def email_rule():
    return PatternRule(ValidationPattern.EMAIL_ADDRESS, error="invalid_email")


@pytest.fixture
def digit_rule():
    return PatternRule(ValidationPattern.CONTAINS_NUMBER, error="needs_digit")


@pytest.fixture
def min_length_rule():
    return LengthRule(error="too_short", min=8)


@pytest.fixture
def required_rule():
    return RequiredRule(error="required")


@pytest.fixture
def rule_file(tmp_path):
    """Write a YAML rule file and return its path."""
    content = """
rules:
  - name: password
    description: Password strength
    type: all
    rules:
      - type: length
        min: ${PASSWORD_MIN_LENGTH:8}
        error: password_too_short
      - type: pattern
        named_pattern: contains_number
        error: password_needs_digit
      - type: pattern
        named_pattern: containsUppercase
        error: password_needs_uppercase
  - name: contact
    type: any
    error: contact_invalid
    rules:
      - type: pattern
        named_pattern: email_address
        error: invalid_email
      - type: pattern
        named_pattern: uk_postcode
        error: invalid_postcode
  - name: optional_password
    type: optional
    rule:
      type: ref
      ref: password
"""
    path = tmp_path / "rules.yaml"
    path.write_text(content)
    return path
