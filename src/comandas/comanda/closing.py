"""Comanda closing: command and handler.

Closing settles the tab against a payment method. Cash payments record the
amount tendered and the change returned; pix and card record neither.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from comandas.comanda.comanda import Comanda, PaymentMethod
from comandas.comanda.queries import get_comanda
from comandas.domain import comandas
from comandas.errors import ComandaError

logger = structlog.get_logger(__name__)


@comandas.command(part_of="Comanda")
class CloseComanda:
    comanda_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)
    cash_paid = Float(min_value=0.0)  # Required when payment_method is cash


@comandas.command_handler(part_of=Comanda)
class CloseComandaHandler:
    @handle(CloseComanda)
    def close_comanda(self, command):
        comanda = get_comanda(command.comanda_id)
        try:
            comanda.close(payment_method=command.payment_method, cash_paid=command.cash_paid)
        except ComandaError as exc:
            logger.warning(
                "Comanda close rejected",
                comanda_id=str(comanda.id),
                error=exc.code,
                total=comanda.total,
            )
            raise
        current_domain.repository_for(Comanda).add(comanda)

        logger.info(
            "Comanda closed",
            comanda_id=str(comanda.id),
            number=comanda.number,
            total=comanda.total,
            payment_method=comanda.payment_method,
            change=comanda.change,
        )
        return str(comanda.id)
