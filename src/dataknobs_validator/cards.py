"""Payment card number validation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .base import Rule

_SEPARATORS = re.compile(r"[ -]")


class PaymentCardType(Enum):
    """Card networks recognised by their number prefix and length.

    Each member's value is the expression a separator-free card number must
    fully match.
    """

    AMEX = r"3[47][0-9]{5,}"
    MASTERCARD = r"(?:5[1-5][0-9]{2}|222[1-9]|22[3-9][0-9]|2[3-6][0-9]{2}|27[01][0-9]|2720)[0-9]{12}"
    VISA = r"4[0-9]{6,}(?:[0-9]{3})?"
    MAESTRO = r"(?:5[0678][0-9]{2}|6304|6390|67[0-9]{2})[0-9]{8,15}"
    DINERS_CLUB = r"3(?:0[0-5]|[68][0-9])[0-9]{4,}"
    JCB = r"(?:2131|1800|35[0-9]{3})[0-9]{3,}"
    DISCOVER = r"6(?:011|5[0-9]{2})[0-9]{3,}"
    UNION_PAY = r"62[0-5][0-9]{13,16}"

    @classmethod
    def detect(cls, number: str) -> PaymentCardType | None:
        """Identify the network of a card number.

        Args:
            number: Card number, optionally grouped with spaces or dashes

        Returns:
            The first matching card type, or None
        """
        digits = _SEPARATORS.sub("", number)
        for card_type in cls:
            if re.fullmatch(card_type.value, digits):
                return card_type
        return None


def luhn_checksum_valid(digits: str) -> bool:
    """Check a digit string against the Luhn (mod 10) checksum."""
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


@dataclass(frozen=True)
class PaymentCardRule(Rule):
    """Value must be a card number of an accepted network with a valid checksum.

    Attributes:
        error: Error reported for an invalid or unaccepted card number
        accepted_types: Card networks to accept; all networks by default
    """

    error: Any
    accepted_types: frozenset[PaymentCardType] = field(default_factory=lambda: frozenset(PaymentCardType))

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "accepted_types",
            frozenset(t if isinstance(t, PaymentCardType) else PaymentCardType[t.upper()] for t in self.accepted_types),
        )

    def validate(self, value: Any) -> bool:
        if not isinstance(value, str):
            return False
        digits = _SEPARATORS.sub("", value)
        if not digits.isascii() or not digits.isdigit():
            return False
        card_type = PaymentCardType.detect(digits)
        if card_type is None or card_type not in self.accepted_types:
            return False
        return luhn_checksum_valid(digits)


__all__ = [
    "PaymentCardType",
    "PaymentCardRule",
    "luhn_checksum_valid",
]
