"""Tests for closing a comanda and settling its payment."""

import pytest
from comandas.comanda.comanda import Comanda, ComandaStatus
from comandas.comanda.events import ComandaClosed
from comandas.errors import (
    AlreadyClosedError,
    CashInsufficientError,
    EmptyOrderError,
)
from protean.exceptions import ValidationError


@pytest.fixture()
def comanda(coxinha):
    comanda = Comanda.open(7)
    comanda.add_item(coxinha, quantity=2)
    comanda.add_item(coxinha)
    comanda._events.clear()
    return comanda  # total 28.50


class TestCashPayment:
    def test_cash_with_change(self, comanda, clock):
        comanda.close("cash", cash_paid=50.0)
        assert comanda.status == ComandaStatus.CLOSED.value
        assert comanda.payment_method == "cash"
        assert comanda.cash_paid == 50.0
        assert comanda.change == 21.5
        assert comanda.closed_at == clock.now()

    def test_exact_cash_gives_zero_change(self, comanda):
        comanda.close("cash", cash_paid=28.5)
        assert comanda.change == 0.0

    def test_insufficient_cash(self, comanda):
        with pytest.raises(CashInsufficientError) as exc:
            comanda.close("cash", cash_paid=20.0)
        assert exc.value.total == 28.5
        assert comanda.status == ComandaStatus.OPEN.value
        assert comanda.payment_method is None

    def test_missing_cash_amount(self, comanda):
        with pytest.raises(CashInsufficientError):
            comanda.close("cash")
        assert comanda.is_open

    def test_change_rounded_to_cent(self, buffet):
        comanda = Comanda.open(3)
        comanda.add_item(buffet, weight_grams=333)  # 13.32
        comanda.close("cash", cash_paid=20.0)
        assert comanda.change == 6.68


class TestNonCashPayment:
    @pytest.mark.parametrize("method", ["pix", "card"])
    def test_cash_fields_stay_empty(self, comanda, method):
        comanda.close(method)
        assert comanda.payment_method == method
        assert comanda.cash_paid is None
        assert comanda.change is None

    def test_cash_amount_ignored_for_card(self, comanda):
        comanda.close("card", cash_paid=100.0)
        assert comanda.cash_paid is None
        assert comanda.change is None


class TestCloseRules:
    def test_already_closed(self, comanda):
        comanda.close("pix")
        with pytest.raises(AlreadyClosedError):
            comanda.close("card")
        assert comanda.payment_method == "pix"

    def test_empty_comanda(self):
        comanda = Comanda.open(9)
        with pytest.raises(EmptyOrderError):
            comanda.close("pix")
        assert comanda.is_open

    def test_emptied_comanda(self, coxinha):
        comanda = Comanda.open(9)
        item = comanda.add_item(coxinha)
        comanda.adjust_quantity(item.id, -1)
        with pytest.raises(EmptyOrderError):
            comanda.close("card")

    def test_unknown_payment_method(self, comanda):
        with pytest.raises(ValidationError):
            comanda.close("voucher")
        assert comanda.is_open

    def test_settles_on_recalculated_total(self, comanda):
        comanda.total = 1.0
        comanda.items_count = 99
        comanda.close("cash", cash_paid=30.0)
        assert comanda.total == 28.5
        assert comanda.items_count == 3
        assert comanda.change == 1.5

    def test_stale_total_cannot_hide_a_shortfall(self, comanda):
        comanda.total = 1.0
        with pytest.raises(CashInsufficientError):
            comanda.close("cash", cash_paid=10.0)


class TestClosedEvent:
    def test_raises_event(self, comanda):
        comanda.close("cash", cash_paid=30.0)
        event = comanda._events[-1]
        assert isinstance(event, ComandaClosed)
        assert event.number == 7
        assert event.total == 28.5
        assert event.items_count == 3
        assert event.payment_method == "cash"
        assert event.cash_paid == 30.0
        assert event.change == 1.5

    def test_no_event_when_rejected(self, comanda):
        with pytest.raises(CashInsufficientError):
            comanda.close("cash", cash_paid=1.0)
        assert not any(isinstance(e, ComandaClosed) for e in comanda._events)
