"""
Brazilian real (BRL) formatting.

Format: "R$ 1.234,56" ("." groups thousands, "," marks decimals).
"""

from decimal import Decimal, InvalidOperation

from gamestore.models.failure import InvalidInputError
from gamestore.models.validation import to_money

CURRENCY_SYMBOL = "R$"


def format_brl(value: Decimal | int | float | None) -> str:
    """Format an amount as BRL. None formats as zero."""
    if value is None:
        value = Decimal("0")
    amount = to_money(Decimal(str(value)) if isinstance(value, float) else value)
    grouped = f"{abs(amount):,.2f}"
    # "1,234.56" -> "1.234,56"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {localized}"


def parse_brl(text: str | None) -> Decimal:
    """
    Parse a BRL string back to an amount.

    Accepts the output of format_brl and bare numbers like "1234,56".
    Blank input parses as zero.

    Raises:
        InvalidInputError: Text is not a currency amount
    """
    if text is None or not text.strip():
        return Decimal("0")

    clean = (
        text.replace(CURRENCY_SYMBOL, "")
        .replace("\u00a0", "")
        .replace(" ", "")
        .replace(".", "")
        .replace(",", ".")
    )
    try:
        amount = Decimal(clean)
    except InvalidOperation as e:
        raise InvalidInputError(f"Invalid currency format: {text}") from e
    if not amount.is_finite():
        raise InvalidInputError(f"Invalid currency format: {text}")
    return amount
