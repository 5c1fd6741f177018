import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockflow.core.constants import MOVEMENT_REASONS
from stockflow.core.errors import ConflictError, NotFoundError
from stockflow.database import transaction_scope
from stockflow.models.inventory import Inventory
from stockflow.models.movement_log import InventoryMovementLog
from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse
from stockflow.services.movement_log_service import append_movement

logger = logging.getLogger(__name__)


def list_at_risk(db: Session, company_id: int):
    """
    Inventory rows of one company at or below their product threshold.

    Both the product and the warehouse must belong to the company, so a row
    pointing across tenants is never reported.
    """
    stmt = (
        select(Inventory, Product, Warehouse, Supplier)
        .join(Product, Product.id == Inventory.product_id)
        .join(Warehouse, Warehouse.id == Inventory.warehouse_id)
        .outerjoin(
            Supplier,
            (Supplier.id == Product.primary_supplier_id)
            & (Supplier.company_id == Product.company_id),
        )
        .where(
            Product.company_id == company_id,
            Warehouse.company_id == company_id,
            Inventory.quantity <= Product.low_stock_threshold,
        )
        .order_by(Inventory.product_id, Inventory.warehouse_id)
    )
    return db.execute(stmt).all()


def get_quantity(db: Session, product_id: int, warehouse_id: int) -> Optional[int]:
    return db.execute(
        select(Inventory.quantity).where(
            Inventory.product_id == product_id,
            Inventory.warehouse_id == warehouse_id,
        )
    ).scalar_one_or_none()


def _apply_quantity_change(db: Session, product_id: int, warehouse_id: int, delta: int) -> int:
    # Conditional in-place increment keeps quantity >= 0 under concurrent writers.
    result = db.execute(
        update(Inventory)
        .where(
            Inventory.product_id == product_id,
            Inventory.warehouse_id == warehouse_id,
            Inventory.quantity + delta >= 0,
        )
        .values(quantity=Inventory.quantity + delta)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 1:
        return get_quantity(db, product_id, warehouse_id)

    current = get_quantity(db, product_id, warehouse_id)
    if current is None and delta > 0:
        db.add(Inventory(product_id=product_id, warehouse_id=warehouse_id, quantity=delta))
        db.flush()
        return delta

    raise ConflictError(
        "Insufficient stock: product {} has {} units in warehouse {}, change of {} rejected".format(
            product_id,
            current or 0,
            warehouse_id,
            delta,
        )
    )


def _get_same_tenant_pair(db: Session, product_id: int, warehouse_id: int):
    product = db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    warehouse = db.get(Warehouse, warehouse_id)
    if warehouse is None or warehouse.company_id != product.company_id:
        raise NotFoundError("Warehouse not found or does not belong to the product's company")
    return product, warehouse


def record_movement(
    db: Session,
    product_id: int,
    warehouse_id: int,
    quantity_change: int,
    reason: str,
) -> tuple[InventoryMovementLog, int]:
    """Apply a stock movement to inventory and append it to the ledger."""
    if reason not in MOVEMENT_REASONS:
        logger.warning("Recording movement with unrecognised reason %r", reason)
    try:
        try:
            return _record_movement_once(db, product_id, warehouse_id, quantity_change, reason)
        except IntegrityError:
            # Another writer created the inventory row first; the update path now applies.
            logger.warning(
                "Inventory row for product=%s warehouse=%s created concurrently, retrying",
                product_id,
                warehouse_id,
            )
        try:
            return _record_movement_once(db, product_id, warehouse_id, quantity_change, reason)
        except IntegrityError as exc:
            raise ConflictError(
                "Inventory for product {} in warehouse {} changed concurrently, retry the request".format(
                    product_id,
                    warehouse_id,
                )
            ) from exc
    except ConflictError:
        logger.warning(
            "Rejected movement product=%s warehouse=%s change=%s reason=%s",
            product_id,
            warehouse_id,
            quantity_change,
            reason,
        )
        raise


def _record_movement_once(db, product_id, warehouse_id, quantity_change, reason):
    with transaction_scope(db):
        _get_same_tenant_pair(db, product_id, warehouse_id)
        quantity = _apply_quantity_change(db, product_id, warehouse_id, quantity_change)
        entry = append_movement(db, product_id, warehouse_id, quantity_change, reason)
    return entry, quantity
