from datetime import datetime
from typing import Iterable, NamedTuple, Optional

from sqlalchemy import func, select, tuple_
from sqlalchemy.orm import Session

from stockflow.core.dates import utc_now
from stockflow.models.movement_log import InventoryMovementLog

# Two bind parameters per pair; stays well under SQLite's variable limit.
PAIR_CHUNK_SIZE = 400


class MovementAggregate(NamedTuple):
    product_id: int
    warehouse_id: int
    total_units: int
    earliest_at: Optional[datetime]


def append_movement(
    db: Session,
    product_id: int,
    warehouse_id: int,
    quantity_change: int,
    reason: str,
    *,
    created_at: Optional[datetime] = None,
) -> InventoryMovementLog:
    """Add one ledger entry to the caller's transaction. Never commits."""
    entry = InventoryMovementLog(
        product_id=product_id,
        warehouse_id=warehouse_id,
        quantity_change=quantity_change,
        reason=reason,
        created_at=created_at or utc_now(),
    )
    db.add(entry)
    db.flush()
    return entry


def aggregate_movements(
    db: Session,
    pairs: Iterable[tuple[int, int]],
    reason: str,
    since: datetime,
) -> list[MovementAggregate]:
    """
    Grouped totals for many (product, warehouse) pairs.

    One grouped query per PAIR_CHUNK_SIZE pairs, never one per pair.

    total_units is the sum of absolute quantity changes, so outflow entries
    (stored negative) come back as positive unit counts.
    """
    pairs = sorted(set(pairs))
    results = []
    for start in range(0, len(pairs), PAIR_CHUNK_SIZE):
        results.extend(
            _aggregate_chunk(db, pairs[start:start + PAIR_CHUNK_SIZE], reason, since)
        )
    return results


def _aggregate_chunk(db: Session, pairs, reason: str, since: datetime) -> list[MovementAggregate]:
    stmt = (
        select(
            InventoryMovementLog.product_id,
            InventoryMovementLog.warehouse_id,
            func.sum(func.abs(InventoryMovementLog.quantity_change)).label("total_units"),
            func.min(InventoryMovementLog.created_at).label("earliest_at"),
        )
        .where(
            tuple_(
                InventoryMovementLog.product_id,
                InventoryMovementLog.warehouse_id,
            ).in_(pairs),
            InventoryMovementLog.reason == reason,
            InventoryMovementLog.created_at >= since,
        )
        .group_by(
            InventoryMovementLog.product_id,
            InventoryMovementLog.warehouse_id,
        )
    )
    return [
        MovementAggregate(
            product_id=row.product_id,
            warehouse_id=row.warehouse_id,
            total_units=int(row.total_units or 0),
            earliest_at=row.earliest_at,
        )
        for row in db.execute(stmt)
    ]


def list_movements(
    db: Session,
    product_id: int,
    warehouse_id: Optional[int] = None,
) -> list[InventoryMovementLog]:
    stmt = select(InventoryMovementLog).where(InventoryMovementLog.product_id == product_id)
    if warehouse_id is not None:
        stmt = stmt.where(InventoryMovementLog.warehouse_id == warehouse_id)
    stmt = stmt.order_by(InventoryMovementLog.created_at, InventoryMovementLog.id)
    return list(db.execute(stmt).scalars())
