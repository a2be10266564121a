"""Parsing of monetary amounts and exchange rates typed on the command line."""

import re
from decimal import Decimal, InvalidOperation

# Currency symbols, thousands separators and whitespace carry no value
_NOISE = re.compile(r"[$€£¥,\s]")


def parse_amount(amount_str: str) -> Decimal:
    """Convert user input such as "1,250.00", "€80" or "(40)" to a Decimal.

    Parentheses mark a negative amount, as on printed statements.

    Raises:
        ValueError: If the text is empty or not a finite number
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValueError("Empty amount string")

    sign = Decimal(1)
    if text[0] == "(" and text[-1] == ")":
        sign, text = Decimal(-1), text[1:-1]

    try:
        value = Decimal(_NOISE.sub("", text))
    except InvalidOperation:
        value = None
    if value is None or not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return sign * value


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse an amount that must be greater than zero (amounts, rates)."""
    amount = parse_amount(amount_str)
    if amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got {amount}")
    return amount
