"""Explicit recalculation: repairs total and item count from the stored items."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from comandas.comanda.comanda import Comanda
from comandas.comanda.queries import get_comanda
from comandas.domain import comandas


@comandas.command(part_of="Comanda")
class RecalculateComanda:
    comanda_id = Identifier(required=True)


@comandas.command_handler(part_of=Comanda)
class RecalculateComandaHandler:
    @handle(RecalculateComanda)
    def recalculate_comanda(self, command):
        comanda = get_comanda(command.comanda_id)
        comanda.recalculate()
        current_domain.repository_for(Comanda).add(comanda)
        return str(comanda.id)
