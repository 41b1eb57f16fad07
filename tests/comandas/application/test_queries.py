"""Application tests for comanda and product lookups."""

import pytest
from comandas.comanda.closing import CloseComanda
from comandas.comanda.items import AddItem
from comandas.comanda.opening import OpenComanda
from comandas.comanda.queries import comandas_opened_today, get_comanda
from comandas.errors import OrderNotFoundError, ProductNotFoundError
from comandas.product.lookup import get_product
from protean import current_domain


def _open(number):
    return current_domain.process(OpenComanda(number=number), asynchronous=False)


class TestGetComanda:
    def test_returns_comanda_with_items(self, unit_product_id):
        comanda_id = _open(3)
        current_domain.process(AddItem(comanda_id=comanda_id, product_id=unit_product_id), asynchronous=False)

        comanda = get_comanda(comanda_id)
        assert comanda.number == 3
        assert len(comanda.items) == 1

    def test_unknown(self):
        with pytest.raises(OrderNotFoundError) as exc:
            get_comanda("no-such-comanda")
        assert exc.value.comanda_id == "no-such-comanda"


class TestGetProduct:
    def test_returns_product(self, weight_product_id):
        product = get_product(weight_product_id)
        assert product.name == "Buffet"
        assert product.price_per_kg == 40.0

    def test_unknown(self):
        with pytest.raises(ProductNotFoundError):
            get_product("no-such-product")


class TestComandasOpenedToday:
    def test_empty(self):
        assert comandas_opened_today() == []

    def test_excludes_other_days(self, clock):
        _open(1)
        clock.advance(days=1)
        today_id = _open(2)

        assert [str(c.id) for c in comandas_opened_today()] == [today_id]

    def test_open_before_closed_then_newest_first(self, clock, unit_product_id):
        first = _open(1)
        clock.advance(minutes=5)
        second = _open(2)
        clock.advance(minutes=5)
        third = _open(3)
        clock.advance(minutes=5)

        current_domain.process(AddItem(comanda_id=third, product_id=unit_product_id), asynchronous=False)
        current_domain.process(CloseComanda(comanda_id=third, payment_method="pix"), asynchronous=False)

        listed = [str(c.id) for c in comandas_opened_today()]
        assert listed == [second, first, third]

    def test_includes_items(self, unit_product_id):
        comanda_id = _open(1)
        current_domain.process(
            AddItem(comanda_id=comanda_id, product_id=unit_product_id, quantity=2),
            asynchronous=False,
        )

        (comanda,) = comandas_opened_today()
        assert comanda.items[0].quantity == 2
        assert comanda.total == 19.0
