"""Comanda opening: command and handler.

Numbers are handed out by staff (table or ticket numbers) and only need to be
unique within the current calendar day. Yesterday's number 12 does not block
today's number 12; today's closed number 12 does.
"""

import structlog
from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from comandas.clock import get_clock
from comandas.comanda.comanda import MAX_COMANDA_NUMBER, Comanda
from comandas.comanda.daily import business_date
from comandas.comanda.queries import comandas_numbered_on
from comandas.domain import comandas
from comandas.errors import NumberAlreadyExistsTodayError

logger = structlog.get_logger(__name__)


@comandas.command(part_of="Comanda")
class OpenComanda:
    number = Integer(required=True, min_value=1, max_value=MAX_COMANDA_NUMBER)


@comandas.command_handler(part_of=Comanda)
class OpenComandaHandler:
    @handle(OpenComanda)
    def open_comanda(self, command):
        now = get_clock().now()
        if comandas_numbered_on(command.number, now):
            logger.warning(
                "Comanda number already used today",
                number=command.number,
                business_date=business_date(now),
            )
            raise NumberAlreadyExistsTodayError(command.number, business_date(now))

        comanda = Comanda.open(command.number)
        current_domain.repository_for(Comanda).add(comanda)

        logger.info("Comanda opened", comanda_id=str(comanda.id), number=comanda.number)
        return str(comanda.id)
