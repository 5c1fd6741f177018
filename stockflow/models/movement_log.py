from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from stockflow.database.base import Base


class InventoryMovementLog(Base):
    """Append-only ledger of quantity changes. Rows are never updated."""

    __tablename__ = "inventory_movement_logs"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    warehouse_id = Column(Integer, ForeignKey("warehouses.id"), nullable=False)

    quantity_change = Column(Integer, nullable=False)
    reason = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index(
            "idx_movement_pair_reason_created",
            "product_id",
            "warehouse_id",
            "reason",
            "created_at",
        ),
    )


__all__ = ["InventoryMovementLog"]
