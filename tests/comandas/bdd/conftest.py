"""Shared BDD fixtures and step definitions for comandas."""

import pytest
from comandas.comanda.comanda import Comanda
from comandas.comanda.events import ComandaClosed, ComandaOpened, ItemAdded, ItemQuantityChanged, ItemRemoved
from comandas.errors import ComandaError
from comandas.product.product import Product
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_COMANDA_EVENT_CLASSES = {
    "ComandaOpened": ComandaOpened,
    "ItemAdded": ItemAdded,
    "ItemQuantityChanged": ItemQuantityChanged,
    "ItemRemoved": ItemRemoved,
    "ComandaClosed": ComandaClosed,
}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog():
    return {
        "Coxinha": Product.register(name="Coxinha", category="Salgados", price=9.50),
        "Buffet": Product.register(name="Buffet", category="Pratos", pricing_type="weight", price_per_kg=40.00),
    }


@pytest.fixture()
def error():
    """Container for the business rule failure raised by a When step."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an open comanda", target_fixture="comanda")
def open_comanda():
    comanda = Comanda.open(12)
    comanda._events.clear()
    return comanda


@given(parsers.cfparse('{qty:d} "{name}" is on the comanda'), target_fixture="comanda")
@given(parsers.cfparse('{qty:d} "{name}" are on the comanda'), target_fixture="comanda")
def comanda_with_items(comanda, catalog, qty, name):
    comanda.add_item(catalog[name], quantity=qty)
    comanda._events.clear()
    return comanda


@given(parsers.cfparse('the comanda is closed with "{method}"'), target_fixture="comanda")
def closed_comanda(comanda, method):
    comanda.close(method)
    comanda._events.clear()
    return comanda


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the comanda status is "{status}"'))
def comanda_status_is(comanda, status):
    assert comanda.status == status


@then(parsers.cfparse("the comanda total is {total:f}"))
def comanda_total_is(comanda, total):
    assert comanda.total == pytest.approx(total)


@then(parsers.cfparse('the action fails with "{code}"'))
def action_fails(error, code):
    assert error["exc"] is not None, "Expected a business rule failure but none was raised"
    assert isinstance(error["exc"], ComandaError)
    assert error["exc"].code == code


@then(parsers.cfparse("a {event_type} event is raised"))
def comanda_event_raised(comanda, event_type):
    event_cls = _COMANDA_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in comanda._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in comanda._events]}"
