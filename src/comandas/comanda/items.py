"""Comanda item management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from comandas.comanda.comanda import Comanda
from comandas.comanda.queries import get_comanda
from comandas.domain import comandas
from comandas.errors import OrderClosedError
from comandas.product.lookup import get_product

logger = structlog.get_logger(__name__)


@comandas.command(part_of="Comanda")
class AddItem:
    comanda_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    weight_grams = Integer(min_value=1)  # Required for weight-priced products
    observation = String(max_length=500)


@comandas.command(part_of="Comanda")
class AdjustItemQuantity:
    """Shift an item's quantity by a signed delta (+1 / -1 from the counter)."""

    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    delta = Integer(required=True)


@comandas.command(part_of="Comanda")
class SetItemObservation:
    comanda_id = Identifier(required=True)
    item_id = Identifier(required=True)
    observation = String(max_length=500)  # Empty clears the note


@comandas.command_handler(part_of=Comanda)
class ManageComandaItemsHandler:
    @handle(AddItem)
    def add_item(self, command):
        comanda = get_comanda(command.comanda_id)
        if not comanda.is_open:
            raise OrderClosedError(str(comanda.id))

        product = get_product(command.product_id)
        item = comanda.add_item(
            product,
            quantity=command.quantity,
            weight_grams=command.weight_grams,
            observation=command.observation,
        )
        current_domain.repository_for(Comanda).add(comanda)

        logger.info(
            "Item added to comanda",
            comanda_id=str(comanda.id),
            item_id=str(item.id),
            product_id=str(product.id),
            total=comanda.total,
            items_count=comanda.items_count,
        )
        return str(comanda.id)

    @handle(AdjustItemQuantity)
    def adjust_item_quantity(self, command):
        comanda = get_comanda(command.comanda_id)
        comanda.adjust_quantity(item_id=command.item_id, delta=command.delta)
        current_domain.repository_for(Comanda).add(comanda)

        logger.info(
            "Item quantity adjusted",
            comanda_id=str(comanda.id),
            item_id=str(command.item_id),
            delta=command.delta,
            total=comanda.total,
            items_count=comanda.items_count,
        )
        return str(comanda.id)

    @handle(SetItemObservation)
    def set_item_observation(self, command):
        comanda = get_comanda(command.comanda_id)
        comanda.set_observation(item_id=command.item_id, observation=command.observation)
        current_domain.repository_for(Comanda).add(comanda)
        return str(comanda.id)
