"""Domain events for the Comanda aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from comandas.domain import comandas


@comandas.event(part_of="Comanda")
class ComandaOpened:
    """A comanda was opened for a table/ticket number."""

    __version__ = "v1"

    comanda_id = Identifier(required=True)
    number = Integer(required=True)
    business_date = String(required=True, max_length=10)
    opened_at = DateTime(required=True)


@comandas.event(part_of="Comanda")
class ItemAdded:
    """A product was added as a new line, or merged into an existing unit line."""

    __version__ = "v1"

    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True)
    price = Float(required=True)
    weight_grams = Integer()
    merged = Boolean(default=False)
    new_total = Float(required=True)
    new_items_count = Integer(required=True)


@comandas.event(part_of="Comanda")
class ItemQuantityChanged:
    __version__ = "v1"

    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    new_total = Float(required=True)
    new_items_count = Integer(required=True)


@comandas.event(part_of="Comanda")
class ItemRemoved:
    """An item's quantity dropped to zero or below and the line was deleted."""

    __version__ = "v1"

    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    new_total = Float(required=True)
    new_items_count = Integer(required=True)


@comandas.event(part_of="Comanda")
class ItemObservationChanged:
    __version__ = "v1"

    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    observation = String(max_length=500)


@comandas.event(part_of="Comanda")
class ComandaClosed:
    """The comanda was settled and is now terminal."""

    __version__ = "v1"

    comanda_id = Identifier(required=True)
    number = Integer(required=True)
    total = Float(required=True)
    items_count = Integer(required=True)
    payment_method = String(required=True, max_length=10)
    cash_paid = Float()
    change = Float()
    closed_at = DateTime(required=True)
