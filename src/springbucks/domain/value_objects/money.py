from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CURRENCY = "TWD"
MINOR_DIGITS = 2
_CENT = Decimal(1).scaleb(-MINOR_DIGITS)


class Money(BaseModel):
    amount: Decimal = Field(..., description="Monetary amount in major units")
    currency: str = Field(
        DEFAULT_CURRENCY, pattern=r"^[A-Z]{3}$", description="ISO-4217 currency code"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("amount", mode="before")
    @classmethod
    def _ensure_decimal(cls, v: Decimal | int | float) -> Decimal:
        if not isinstance(v, Decimal):
            try:
                v = Decimal(str(v).strip())
            except InvalidOperation as exc:
                raise ValueError(f"amount is not a decimal: {v!r}") from exc
        if not v.is_finite():
            raise ValueError(f"amount must be finite: {v!r}")
        return v.quantize(_CENT, rounding=ROUND_HALF_EVEN)

    @classmethod
    def of(cls, currency: str, amount: Decimal | int | float) -> "Money":
        return cls(amount=amount, currency=currency)

    @classmethod
    def of_minor(cls, currency: str, minor: int) -> "Money":
        """Build a value from an amount expressed in hundredths."""
        return cls(amount=Decimal(minor).scaleb(-MINOR_DIGITS), currency=currency)

    @property
    def minor_units(self) -> int:
        return int(self.amount.scaleb(MINOR_DIGITS))

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValueError("Currency mismatch")

    def __add__(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, factor: Decimal | int | float) -> "Money":
        amount = self.amount * (factor if isinstance(factor, Decimal) else Decimal(str(factor)))
        return Money(amount=amount, currency=self.currency)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"
