"""Comanda aggregate: an open tab from the moment a number is called until payment.

State Machine:
    OPEN → CLOSED (terminal)

While open, items can be added, have their quantity adjusted and carry a free
text observation. Every change to the item set ends with ``recalculate()``
inside the same ``atomic_change`` block, so ``total`` and ``items_count``
never describe a different item set than the one persisted with them.

Item prices:
    unit items    price is the unit price, line value = price × quantity
    weight items  price is the value of one weighed serving
"""

from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from comandas.clock import get_clock
from comandas.comanda.daily import business_date, daily_key
from comandas.comanda.events import (
    ComandaClosed,
    ComandaOpened,
    ItemAdded,
    ItemObservationChanged,
    ItemQuantityChanged,
    ItemRemoved,
)
from comandas.domain import comandas
from comandas.errors import (
    AlreadyClosedError,
    CashInsufficientError,
    EmptyOrderError,
    ItemNotFoundError,
    OrderClosedError,
    ProductInactiveError,
)
from comandas.pricing import PricingType, WeightPricing, change_due, line_value, order_total, price, round2


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ComandaStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"


class PaymentMethod(Enum):
    PIX = "pix"
    CARD = "card"
    CASH = "cash"


# Table and ticket numbers; also bounds the length of ``daily_key``.
MAX_COMANDA_NUMBER = 99999


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@comandas.entity(part_of="Comanda")
class ComandaItem:
    """A priced line on a comanda.

    ``name`` and ``pricing_type`` are snapshots taken when the product was
    added; later catalog edits do not touch existing lines.
    """

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    pricing_type = String(choices=PricingType, required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    weight_grams = Integer(min_value=1)
    observation = String(max_length=500)

    @invariant.post
    def only_weight_items_carry_weight(self):
        if self.pricing_type == PricingType.WEIGHT.value and self.weight_grams is None:
            raise ValidationError({"weight_grams": ["Weight-priced items require weight_grams"]})
        if self.pricing_type == PricingType.UNIT.value and self.weight_grams is not None:
            raise ValidationError({"weight_grams": ["Unit-priced items cannot carry weight_grams"]})

    @property
    def line_value(self) -> float:
        return line_value(self.price, self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@comandas.aggregate
class Comanda:
    number = Integer(required=True, min_value=1, max_value=MAX_COMANDA_NUMBER)
    status = String(choices=ComandaStatus, default=ComandaStatus.OPEN.value)
    items = HasMany(ComandaItem)
    total = Float(default=0.0)
    items_count = Integer(default=0)
    payment_method = String(choices=PaymentMethod)
    cash_paid = Float()
    change = Float()
    business_date = String(max_length=10)
    daily_key = String(max_length=32, unique=True)
    created_at = DateTime()
    closed_at = DateTime()

    @invariant.post
    def cash_fields_only_for_cash_payments(self):
        is_cash = self.payment_method == PaymentMethod.CASH.value
        if is_cash and (self.cash_paid is None or self.change is None):
            raise ValidationError({"cash_paid": ["Cash payments must record cash paid and change"]})
        if not is_cash and (self.cash_paid is not None or self.change is not None):
            raise ValidationError({"cash_paid": ["Cash paid and change apply to cash payments only"]})

    @invariant.post
    def settlement_recorded_only_when_closed(self):
        closed = self.status == ComandaStatus.CLOSED.value
        if closed != (self.closed_at is not None) or closed != (self.payment_method is not None):
            raise ValidationError({"status": ["Closed comandas, and only those, carry payment and close time"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, number):
        """Open a comanda for ``number`` on the current business day."""
        now = get_clock().now()
        comanda = cls(
            number=number,
            status=ComandaStatus.OPEN.value,
            total=0.0,
            items_count=0,
            business_date=business_date(now),
            daily_key=daily_key(number, now),
            created_at=now,
        )
        comanda.raise_(
            ComandaOpened(
                comanda_id=str(comanda.id),
                number=number,
                business_date=comanda.business_date,
                opened_at=now,
            )
        )
        return comanda

    @property
    def is_open(self) -> bool:
        return ComandaStatus(self.status) == ComandaStatus.OPEN

    def _assert_open(self):
        if not self.is_open:
            raise OrderClosedError(str(self.id))

    def _find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ItemNotFoundError(str(self.id), str(item_id))
        return item

    # -------------------------------------------------------------------
    # Recalculation
    # -------------------------------------------------------------------
    def recalculate(self):
        """Derive ``total`` and ``items_count`` from the current items."""
        self.total = order_total((item.price, item.quantity) for item in self.items)
        self.items_count = sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Item management (only while OPEN)
    # -------------------------------------------------------------------
    def add_item(self, product, quantity=1, weight_grams=None, observation=None):
        """Add ``product`` to the comanda.

        A unit product already on the comanda as a unit line gets its quantity
        increased instead of a new line. Weight products always produce a new
        line: every weighing is its own serving.
        """
        self._assert_open()
        if not product.active:
            raise ProductInactiveError(str(product.id))

        quantity = 1 if quantity is None else quantity
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        mode = product.pricing_mode()
        existing = None
        if isinstance(mode, WeightPricing):
            item_price = price(mode, quantity=quantity, weight_grams=weight_grams)
            item_weight = weight_grams
        else:
            item_price = price(mode, quantity=1)
            item_weight = None
            existing = next(
                (i for i in self.items if str(i.product_id) == str(product.id) and i.weight_grams is None),
                None,
            )

        with atomic_change(self):
            if existing:
                existing.quantity += quantity
                item = existing
            else:
                item = ComandaItem(
                    product_id=str(product.id),
                    name=product.name,
                    pricing_type=product.pricing_type,
                    quantity=quantity,
                    price=item_price,
                    weight_grams=item_weight,
                    observation=observation or None,
                )
                self.add_items(item)
            self.recalculate()

        self.raise_(
            ItemAdded(
                comanda_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.id),
                name=item.name,
                quantity=quantity,
                price=item.price,
                weight_grams=item.weight_grams,
                merged=existing is not None,
                new_total=self.total,
                new_items_count=self.items_count,
            )
        )
        return item

    def adjust_quantity(self, item_id, delta):
        """Shift an item's quantity by ``delta``; at zero or below the line is removed."""
        self._assert_open()
        item = self._find_item(item_id)

        previous_quantity = item.quantity
        new_quantity = previous_quantity + delta

        with atomic_change(self):
            if new_quantity <= 0:
                self.remove_items(item)
            else:
                item.quantity = new_quantity
            self.recalculate()

        if new_quantity <= 0:
            self.raise_(
                ItemRemoved(
                    comanda_id=str(self.id),
                    item_id=str(item_id),
                    new_total=self.total,
                    new_items_count=self.items_count,
                )
            )
        else:
            self.raise_(
                ItemQuantityChanged(
                    comanda_id=str(self.id),
                    item_id=str(item_id),
                    previous_quantity=previous_quantity,
                    new_quantity=new_quantity,
                    new_total=self.total,
                    new_items_count=self.items_count,
                )
            )

    def set_observation(self, item_id, observation=None):
        """Replace the item's note. ``None`` or an empty string clears it."""
        self._assert_open()
        item = self._find_item(item_id)
        item.observation = observation or None

        self.raise_(
            ItemObservationChanged(
                comanda_id=str(self.id),
                item_id=str(item_id),
                observation=item.observation,
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def close(self, payment_method, cash_paid=None):
        """Settle and close the comanda.

        The total is recalculated before it is read, so settlement never
        uses a total that predates the current items. Cash payments must
        cover the total and record the change; pix and card leave the cash
        fields empty.
        """
        if not self.is_open:
            raise AlreadyClosedError(str(self.id))

        try:
            method = PaymentMethod(payment_method)
        except ValueError:
            raise ValidationError({"payment_method": [f"Unknown payment method: {payment_method}"]}) from None

        with atomic_change(self):
            self.recalculate()

        if self.items_count <= 0:
            raise EmptyOrderError(str(self.id))

        paid = None
        change = None
        if method == PaymentMethod.CASH:
            if cash_paid is None or cash_paid < self.total:
                raise CashInsufficientError(cash_paid, self.total)
            paid = round2(cash_paid)
            change = change_due(cash_paid, self.total)

        now = get_clock().now()
        with atomic_change(self):
            self.status = ComandaStatus.CLOSED.value
            self.payment_method = method.value
            self.cash_paid = paid
            self.change = change
            self.closed_at = now

        self.raise_(
            ComandaClosed(
                comanda_id=str(self.id),
                number=self.number,
                total=self.total,
                items_count=self.items_count,
                payment_method=method.value,
                cash_paid=paid,
                change=change,
                closed_at=now,
            )
        )
