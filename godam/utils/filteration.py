from datetime import date
from typing import Optional

from godam.logger_config import logger

# Bounds used when a range filter is requested with one side left open
RANGE_START = date(1900, 1, 1)
RANGE_END = date(2999, 12, 31)


def apply_date_filters(
    query,
    column,
    as_of: Optional[date] = None,
    on_date: Optional[date] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
):
    """
    Narrow ``query`` on a date ``column``.

    as_of keeps rows dated on or before the day, on_date keeps rows of that
    exact day, and start_date/end_date form an inclusive range whose missing
    side falls back to RANGE_START / RANGE_END.
    """
    if as_of:
        query = query.filter(column <= as_of)
        logger.debug(f"Filtering as of: {as_of}")

    if on_date:
        query = query.filter(column == on_date)
        logger.debug(f"Filtering by date: {on_date}")

    if start_date or end_date:
        lower, upper = date_range(start_date, end_date)
        query = query.filter(column.between(lower, upper))
        logger.debug(f"Filtering by range: {lower} - {upper}")

    return query


def date_range(start_date: Optional[date] = None, end_date: Optional[date] = None):
    return start_date or RANGE_START, end_date or RANGE_END
