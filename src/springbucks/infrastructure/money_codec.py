"""Conversion between :class:`Money` and the ``price`` column.

The column stores a single INTEGER count of minor units. The currency is not
stored per row; every value decoded by a codec carries that codec's currency.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..domain.errors import ConversionError
from ..domain.value_objects.money import DEFAULT_CURRENCY, MINOR_DIGITS, Money


class MoneyCodec:
    """Encode money to minor units and back for a single fixed currency."""

    def __init__(self, currency: str = DEFAULT_CURRENCY) -> None:
        self.currency = currency

    def encode(self, value: Money | None) -> int | None:
        if value is None:
            return None
        if value.currency != self.currency:
            raise ConversionError(
                f"Cannot store {value.currency} amount in a {self.currency} column"
            )
        return value.minor_units

    def decode(self, scalar: object) -> Money | None:
        if scalar is None:
            return None
        magnitude = self._parse(scalar)
        return Money.of_minor(self.currency, int(magnitude))

    @staticmethod
    def _parse(scalar: object) -> Decimal:
        # bool is an int subclass but never a valid magnitude
        if isinstance(scalar, bool) or not isinstance(scalar, (int, str, Decimal)):
            raise ConversionError(f"Unsupported price scalar type: {type(scalar).__name__}")
        try:
            magnitude = Decimal(scalar.strip() if isinstance(scalar, str) else scalar)
        except InvalidOperation as exc:
            raise ConversionError(f"Price scalar is not a decimal: {scalar!r}") from exc
        if not magnitude.is_finite():
            raise ConversionError(f"Price scalar is not finite: {scalar!r}")
        if magnitude != magnitude.to_integral_value():
            raise ConversionError(
                f"Price scalar must be a whole number of 1/{10 ** MINOR_DIGITS} units: {scalar!r}"
            )
        return magnitude
