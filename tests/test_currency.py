from decimal import Decimal

import pytest

from gamestore.models.failure import InvalidInputError
from gamestore.services.currency import format_brl, parse_brl


class TestFormatBrl:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("0"), "R$ 0,00"),
            (Decimal("19.99"), "R$ 19,99"),
            (Decimal("1234.56"), "R$ 1.234,56"),
            (Decimal("1234567.8"), "R$ 1.234.567,80"),
            (None, "R$ 0,00"),
            (10, "R$ 10,00"),
            (Decimal("-5.5"), "-R$ 5,50"),
        ],
    )
    def test_format(self, value, expected: str) -> None:
        assert format_brl(value) == expected


class TestParseBrl:
    def test_parses_formatted_value(self) -> None:
        assert parse_brl("R$ 1.234,56") == Decimal("1234.56")

    def test_parses_bare_number(self) -> None:
        assert parse_brl("89,90") == Decimal("89.90")

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_is_zero(self, text: str | None) -> None:
        assert parse_brl(text) == Decimal("0")

    def test_invalid_raises(self) -> None:
        with pytest.raises(InvalidInputError):
            parse_brl("R$ abc")
