import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from stockflow.core.constants import MIN_OBSERVED_DAYS, SECONDS_PER_DAY
from stockflow.core.dates import as_utc


@dataclass(frozen=True)
class SalesVelocity:
    total_units_sold: int
    observed_days: Optional[int]

    @property
    def avg_daily_sales(self) -> float:
        if not self.total_units_sold or not self.observed_days:
            return 0.0
        return self.total_units_sold / self.observed_days


NO_SALES = SalesVelocity(total_units_sold=0, observed_days=None)


def observed_days(first_sale_at: datetime, now: datetime) -> int:
    elapsed = (as_utc(now) - as_utc(first_sale_at)).total_seconds()
    return max(MIN_OBSERVED_DAYS, math.ceil(elapsed / SECONDS_PER_DAY))


def build_velocity(total_units_sold, first_sale_at, now) -> SalesVelocity:
    total_units_sold = abs(int(total_units_sold or 0))
    if total_units_sold == 0 or first_sale_at is None:
        return NO_SALES
    return SalesVelocity(
        total_units_sold=total_units_sold,
        observed_days=observed_days(first_sale_at, now),
    )


def has_sales_signal(velocity: SalesVelocity) -> bool:
    # Items with no sales in the window never alert, however low their stock.
    return velocity.total_units_sold > 0


def days_until_stockout(quantity: int, velocity: SalesVelocity) -> Optional[int]:
    if velocity.total_units_sold <= 0 or not velocity.observed_days:
        return None
    # floor(quantity / (sold / days)) without float rounding.
    return max(0, quantity) * velocity.observed_days // velocity.total_units_sold


__all__ = [
    "NO_SALES",
    "SalesVelocity",
    "build_velocity",
    "days_until_stockout",
    "has_sales_signal",
    "observed_days",
]
