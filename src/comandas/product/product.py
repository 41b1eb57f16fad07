"""Product aggregate: the catalog entry a comanda item is priced from.

The comanda engine only reads products. Registration exists so the catalog
can be seeded; editing and searching the catalog belong elsewhere.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, String

from comandas.domain import comandas
from comandas.errors import InvalidPricePerKgError
from comandas.pricing import PricingMode, PricingType, UnitPricing, WeightPricing


@comandas.aggregate
class Product:
    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    pricing_type = String(choices=PricingType, default=PricingType.UNIT.value)
    price = Float(default=0.0, min_value=0.0)
    price_per_kg = Float()
    active = Boolean(default=True)

    @invariant.post
    def weight_products_must_have_price_per_kg(self):
        if self.pricing_type == PricingType.WEIGHT.value and not self.price_per_kg:
            raise ValidationError({"price_per_kg": ["Weight-priced products require price_per_kg"]})

    @classmethod
    def register(cls, name, category, pricing_type=PricingType.UNIT.value, price=None, price_per_kg=None, active=True):
        """Create a catalog product.

        Unit products keep ``price`` (default 0) and drop any per-kg rate.
        Weight products need ``price_per_kg > 0`` and carry a zero unit price.
        """
        if PricingType(pricing_type) == PricingType.WEIGHT:
            if price_per_kg is None or price_per_kg <= 0:
                raise InvalidPricePerKgError()
            return cls(
                name=name.strip(),
                category=category.strip(),
                pricing_type=PricingType.WEIGHT.value,
                price=0.0,
                price_per_kg=price_per_kg,
                active=active,
            )

        return cls(
            name=name.strip(),
            category=category.strip(),
            pricing_type=PricingType.UNIT.value,
            price=price or 0.0,
            price_per_kg=None,
            active=active,
        )

    def pricing_mode(self) -> PricingMode:
        if PricingType(self.pricing_type) == PricingType.WEIGHT:
            return WeightPricing(price_per_kg=self.price_per_kg)
        return UnitPricing(price=self.price or 0.0)
