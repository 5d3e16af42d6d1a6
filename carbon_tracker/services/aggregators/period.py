"""
Period windows for filtering and aggregating emissions.
"""
import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from carbon_tracker.utils.constants import Period

EPOCH = datetime(1970, 1, 1)

PERIODS = (Period.WEEK, Period.MONTH, Period.YEAR, Period.ALL)


def shift_months(moment: datetime, months: int) -> datetime:
    """
    Move a datetime by a number of calendar months.

    The day is clamped to the length of the target month, so Mar 31 minus one
    month is Feb 28 (or 29).
    """
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class PeriodWindow:
    """
    Closed interval [start, end] ending at the moment it was resolved.

    Not cached: two requests a second apart get windows a second apart.
    """

    period: str
    start: datetime
    end: datetime

    @classmethod
    def resolve(cls, period: Optional[str], now: Optional[datetime] = None) -> "PeriodWindow":
        """
        Build the window for a period token.

        Unknown or missing tokens fall back to month.
        """
        if period not in PERIODS:
            period = Period.MONTH

        end = now or datetime.utcnow()

        if period == Period.WEEK:
            start = end - timedelta(days=7)
        elif period == Period.YEAR:
            start = shift_months(end, -12)
        elif period == Period.ALL:
            start = EPOCH
        else:
            start = shift_months(end, -1)

        return cls(period=period, start=start, end=end)

    def __contains__(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end
