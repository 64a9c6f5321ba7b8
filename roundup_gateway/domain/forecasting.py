"""Income forecasting - trend classification and weekly projection"""

import random
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Protocol, Sequence

from roundup_gateway.domain.models import DECREASING, INCREASING, MIN_HISTORY, STABLE, IncomePoint, PredictionResult
from roundup_gateway.domain.roundup import to_decimal
from roundup_gateway.utils.date_utils import stepped_dates

ANCHOR_WINDOW = 4
TREND_THRESHOLD_PERCENT = Decimal("5")
WEEKLY_GROWTH = Decimal("0.02")
WEEKLY_DECLINE = Decimal("0.01")
JITTER_LOW = 0.9
JITTER_HIGH = 1.1


class JitterSource(Protocol):
    """Anything with `uniform(a, b)`, e.g. a seeded `random.Random`"""

    def uniform(self, a: float, b: float) -> float: ...


def _mean(points: Sequence[IncomePoint]) -> Decimal:
    return sum((to_decimal(p.amount) for p in points), Decimal("0")) / len(points)


def moving_average(series: Sequence[IncomePoint], window: int) -> List[Decimal]:
    """Trailing-window means, one per position once the window is full"""
    return [_mean(series[i - window + 1 : i + 1]) for i in range(window - 1, len(series))]


def classify_trend(series: Sequence[IncomePoint]) -> str:
    """
    Compare the mean of the second half of the series with the first half.

    Halves are split by position. More than 5% growth is increasing, more
    than 5% decline is decreasing, anything else (or < 2 points) is stable.
    """
    if len(series) < 2:
        return STABLE

    middle = len(series) // 2
    first_avg = _mean(series[:middle])
    second_avg = _mean(series[middle:])

    # No baseline to take a percentage of
    if first_avg == 0:
        return INCREASING if second_avg > 0 else STABLE

    change_percent = (second_avg - first_avg) / first_avg * 100

    if change_percent > TREND_THRESHOLD_PERCENT:
        return INCREASING
    if change_percent < -TREND_THRESHOLD_PERCENT:
        return DECREASING
    return STABLE


def project(
    historical: Sequence[IncomePoint],
    trend: str,
    periods: int,
    rng: JitterSource,
) -> List[IncomePoint]:
    """
    Weekly projection anchored on the mean of the last 4 observations.

    Step i is scaled by (1 + 0.02*i) when increasing, (1 - 0.01*i) when
    decreasing, then multiplied by a jitter in [0.9, 1.1].
    """
    if len(historical) < MIN_HISTORY or periods <= 0:
        return []

    anchor = moving_average(historical, ANCHOR_WINDOW)[-1]
    dates = stepped_dates(historical[-1].date, periods)

    forecast = []
    for i, forecast_date in enumerate(dates, start=1):
        amount = anchor
        if trend == INCREASING:
            amount *= 1 + WEEKLY_GROWTH * i
        elif trend == DECREASING:
            amount *= 1 - WEEKLY_DECLINE * i

        amount *= Decimal(str(rng.uniform(JITTER_LOW, JITTER_HIGH)))

        forecast.append(
            IncomePoint(
                date=forecast_date,
                amount=amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
            )
        )

    return forecast


def forecast(
    historical: Sequence[IncomePoint],
    periods: int = 12,
    rng: Optional[JitterSource] = None,
) -> PredictionResult:
    """
    Main entry point: classify the income trend and project it forward.

    With fewer than 4 observations the forecast is empty but the trend is
    still reported. Pass a seeded `random.Random` (or any object with
    `uniform`) as `rng` for reproducible output.
    """
    if rng is None:
        rng = random.Random()

    historical = list(historical)
    trend = classify_trend(historical)

    return PredictionResult(
        historical=historical,
        forecast=project(historical, trend, periods, rng),
        trend=trend,
    )
