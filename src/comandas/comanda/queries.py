"""Read helpers over the Comanda repository."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from comandas.clock import get_clock
from comandas.comanda.comanda import Comanda, ComandaStatus
from comandas.comanda.daily import business_date, within_day
from comandas.errors import OrderNotFoundError


def get_comanda(comanda_id) -> Comanda:
    try:
        return current_domain.repository_for(Comanda).get(str(comanda_id))
    except ObjectNotFoundError:
        raise OrderNotFoundError(str(comanda_id)) from None


def comandas_numbered_on(number, moment) -> list:
    """Comandas of any status created with ``number`` on the day of ``moment``."""
    results = (
        current_domain.repository_for(Comanda)
        ._dao.query.filter(
            number=number,
            business_date=business_date(moment),
        )
        .all()
        .items
    )
    return [c for c in results if within_day(c.created_at, moment)]


def comandas_opened_today() -> list:
    """Today's comandas, open ones first, newest first within each status."""
    now = get_clock().now()
    repo = current_domain.repository_for(Comanda)
    results = repo._dao.query.filter(business_date=business_date(now)).all().items

    todays = [repo.get(str(c.id)) for c in results if within_day(c.created_at, now)]
    todays.sort(key=lambda c: c.created_at, reverse=True)
    todays.sort(key=lambda c: c.status != ComandaStatus.OPEN.value)
    return todays
