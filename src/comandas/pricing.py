"""Pricing calculator: line prices for unit and weight priced products.

A product is priced one of two ways, modelled as a tagged variant:

    UnitPricing(price)            price × quantity
    WeightPricing(price_per_kg)   grams / 1000 × price_per_kg

Money is rounded half-up to the cent *after* each arithmetic step, using
``Decimal`` so the result does not depend on binary float artefacts. The same
``round2`` is applied to line values and to order totals, so either can be
reproduced independently.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from protean.exceptions import ValidationError

from comandas.errors import InvalidPricePerKgError, MissingWeightError

CENT = Decimal("0.01")
GRAMS_PER_KG = Decimal(1000)


class PricingType(Enum):
    UNIT = "unit"
    WEIGHT = "weight"


@dataclass(frozen=True)
class UnitPricing:
    price: float


@dataclass(frozen=True)
class WeightPricing:
    price_per_kg: float


PricingMode = UnitPricing | WeightPricing


def _money(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value or 0))


def round2(value) -> float:
    """Round a monetary amount half-up to two decimal places."""
    return float(_money(value).quantize(CENT, rounding=ROUND_HALF_UP))


def price(mode: PricingMode, quantity: int = 1, weight_grams: int | None = None) -> float:
    """Price of ``quantity`` units or of one ``weight_grams`` serving."""
    if isinstance(mode, WeightPricing):
        if weight_grams is None:
            raise MissingWeightError()
        if weight_grams <= 0:
            raise ValidationError({"weight_grams": ["Weight must be a positive number of grams"]})
        if not mode.price_per_kg or mode.price_per_kg <= 0:
            raise InvalidPricePerKgError()
        return round2(Decimal(weight_grams) / GRAMS_PER_KG * _money(mode.price_per_kg))

    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})
    return round2(_money(mode.price) * quantity)


def line_value(item_price: float, quantity: int) -> float:
    return round2(_money(item_price) * quantity)


def order_total(lines) -> float:
    """Total of ``(price, quantity)`` pairs, each line rounded before summing."""
    return round2(sum((_money(line_value(p, q)) for p, q in lines), Decimal(0)))


def change_due(cash_paid: float, total: float) -> float:
    return round2(_money(cash_paid) - _money(total))
