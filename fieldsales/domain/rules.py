from dataclasses import dataclass

from fieldsales.core.config import settings
from fieldsales.domain.exceptions import RuleViolation, AmountMismatch

AMOUNT_TOLERANCE = 1e-6


def line_amount(qty, unit_price) -> float:
    return qty * unit_price


def check_amount(qty, unit_price, amount):
    """Raises AmountMismatch unless amount == qty x unit_price."""
    if abs(amount - line_amount(qty, unit_price)) > AMOUNT_TOLERANCE:
        raise AmountMismatch(qty, unit_price, amount)


@dataclass(frozen=True)
class LineRules:
    require_positive_quantity: bool = True
    require_non_negative_price: bool = False

    @classmethod
    def from_settings(cls) -> "LineRules":
        return cls(
            require_positive_quantity=settings.REQUIRE_POSITIVE_QUANTITY,
            require_non_negative_price=settings.REQUIRE_NON_NEGATIVE_PRICE,
        )

    def check_quantity(self, qty):
        if self.require_positive_quantity and qty <= 0:
            raise RuleViolation(f"Quantity must be positive, got {qty}")

    def check_price(self, price):
        if self.require_non_negative_price and price < 0:
            raise RuleViolation(f"Price must not be negative, got {price}")

    def check_line(self, qty, unit_price):
        self.check_quantity(qty)
        self.check_price(unit_price)
