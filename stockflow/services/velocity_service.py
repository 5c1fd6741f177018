from datetime import datetime, timedelta
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from stockflow.config import get_settings
from stockflow.core.constants import REASON_SALE
from stockflow.core.dates import as_utc, utc_now
from stockflow.core.stock_rules import NO_SALES, SalesVelocity, build_velocity
from stockflow.services.movement_log_service import aggregate_movements


def estimate_sales_velocity(
    db: Session,
    pairs: Iterable[tuple[int, int]],
    *,
    now: Optional[datetime] = None,
    lookback_days: Optional[int] = None,
) -> dict[tuple[int, int], SalesVelocity]:
    """Sales velocity for every requested pair from a single grouped query."""
    pairs = set(pairs)
    if not pairs:
        return {}
    if lookback_days is None:
        lookback_days = get_settings().SALES_LOOKBACK_DAYS
    now = as_utc(now) if now is not None else utc_now()
    since = now - timedelta(days=lookback_days)

    velocities = {pair: NO_SALES for pair in pairs}
    for row in aggregate_movements(db, pairs, REASON_SALE, since):
        velocities[(row.product_id, row.warehouse_id)] = build_velocity(
            row.total_units,
            row.earliest_at,
            now,
        )
    return velocities
