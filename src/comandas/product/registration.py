"""Product registration: command and handler."""

from protean import handle
from protean.fields import Boolean, Float, String
from protean.utils.globals import current_domain

from comandas.domain import comandas
from comandas.pricing import PricingType
from comandas.product.product import Product


@comandas.command(part_of="Product")
class RegisterProduct:
    """Add a product to the catalog."""

    name = String(required=True, max_length=255)
    category = String(required=True, max_length=100)
    pricing_type = String(choices=PricingType, default=PricingType.UNIT.value)
    price = Float(min_value=0.0)
    price_per_kg = Float()
    active = Boolean(default=True)


@comandas.command_handler(part_of=Product)
class RegisterProductHandler:
    @handle(RegisterProduct)
    def register_product(self, command):
        product = Product.register(
            name=command.name,
            category=command.category,
            pricing_type=command.pricing_type,
            price=command.price,
            price_per_kg=command.price_per_kg,
            active=command.active if command.active is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
