"""Calendar-day helpers for the daily number rule and the today listing.

A comanda number only has to be unique among comandas created on the same
local calendar day. The day is identified by its ``YYYY-MM-DD`` string, and
``daily_key`` pairs it with the number so storage can enforce uniqueness.
"""

from datetime import datetime, time


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Inclusive start and end of the calendar day containing ``moment``."""
    start = datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)
    end = datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)
    return start, end


def business_date(moment: datetime) -> str:
    start, _ = day_bounds(moment)
    return start.date().isoformat()


def daily_key(number: int, moment: datetime) -> str:
    return f"{business_date(moment)}#{number}"


def within_day(candidate: datetime | None, moment: datetime) -> bool:
    if candidate is None:
        return False
    start, end = day_bounds(moment)
    return start <= candidate <= end
