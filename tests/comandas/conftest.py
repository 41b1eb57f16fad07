import os
from datetime import datetime

import pytest


@pytest.fixture(scope="session")
def comandas_domain(request):
    """Initialize the comandas domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from comandas.domain import comandas

    comandas.init()
    return comandas


@pytest.fixture(autouse=True)
def run_around_tests(comandas_domain):
    """Push domain context before each test, cleanup after."""
    ctx = comandas_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture(autouse=True)
def clock():
    """Freeze time at noon on a fixed business day."""
    from comandas.clock import FixedClock, reset_clock, set_clock

    fixed = FixedClock(datetime(2024, 3, 8, 12, 0, 0))
    set_clock(fixed)
    yield fixed
    reset_clock()


@pytest.fixture()
def coxinha():
    """Unit-priced product at 9.50."""
    from comandas.product.product import Product

    return Product.register(name="Coxinha", category="Salgados", pricing_type="unit", price=9.50)


@pytest.fixture()
def buffet():
    """Weight-priced product at 40.00/kg."""
    from comandas.product.product import Product

    return Product.register(name="Buffet", category="Pratos", pricing_type="weight", price_per_kg=40.00)


def register_product(**kwargs):
    from comandas.product.registration import RegisterProduct
    from protean import current_domain

    return current_domain.process(RegisterProduct(**kwargs), asynchronous=False)


@pytest.fixture()
def unit_product_id():
    return register_product(name="Coxinha", category="Salgados", pricing_type="unit", price=9.50)


@pytest.fixture()
def weight_product_id():
    return register_product(name="Buffet", category="Pratos", pricing_type="weight", price_per_kg=40.00)


@pytest.fixture()
def inactive_product_id():
    return register_product(name="Pastel", category="Salgados", pricing_type="unit", price=7.00, active=False)
