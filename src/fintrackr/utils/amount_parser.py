"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: object) -> Decimal:
    """Parse an amount into a Decimal.

    Handles various formats:
    - 123.45 (int, float or Decimal)
    - "123.45"
    - "₹123.45", "$123.45"
    - "1,234.56"

    Floats go through ``str`` so that 0.1 stays 0.1 rather than its binary
    expansion.

    Args:
        amount_str: Amount as a number or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed or is not finite
    """
    if isinstance(amount_str, bool):
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if isinstance(amount_str, Decimal):
        amount = amount_str
    elif isinstance(amount_str, (int, float)):
        amount = Decimal(str(amount_str))
    else:
        if amount_str is None or not str(amount_str).strip():
            raise ValueError("Empty amount string")

        text = str(amount_str).strip()

        # Remove currency symbols
        text = re.sub(r"[$€£¥₹]", "", text)

        # Remove thousands separators
        text = text.replace(",", "").strip()

        try:
            amount = Decimal(text)
        except InvalidOperation as e:
            raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount
