import pytest
from comandas.errors import InvalidPricePerKgError
from comandas.product.product import Product
from comandas.product.registration import RegisterProduct
from protean import current_domain


class TestRegisterProductCommand:
    def test_unit_product_persists(self):
        product_id = current_domain.process(
            RegisterProduct(name=" Suco ", category="Bebidas", price=8.0),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Suco"
        assert product.pricing_type == "unit"
        assert product.price == 8.0
        assert product.active is True

    def test_weight_product_persists(self, weight_product_id):
        product = current_domain.repository_for(Product).get(weight_product_id)
        assert product.pricing_type == "weight"
        assert product.price_per_kg == 40.0
        assert product.price == 0.0

    def test_weight_product_without_rate(self):
        with pytest.raises(InvalidPricePerKgError):
            current_domain.process(
                RegisterProduct(name="Buffet", category="Pratos", pricing_type="weight"),
                asynchronous=False,
            )

    def test_inactive_product(self, inactive_product_id):
        product = current_domain.repository_for(Product).get(inactive_product_id)
        assert product.active is False
