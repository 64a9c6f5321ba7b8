"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List


def stepped_dates(start: date, periods: int, interval_days: int = 7) -> List[date]:
    """Dates following `start`, `interval_days` apart (start itself excluded)"""
    return [start + timedelta(days=i * interval_days) for i in range(1, periods + 1)]


def days_ago(days: int, today: date | None = None) -> date:
    """Calendar date `days` before today"""
    return (today or date.today()) - timedelta(days=days)
