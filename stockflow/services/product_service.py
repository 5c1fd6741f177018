import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from stockflow.config import get_settings
from stockflow.core.constants import REASON_STOCK_IN
from stockflow.core.errors import ConflictError, TransactionFailure, ValidationError
from stockflow.database import transaction_scope
from stockflow.models.inventory import Inventory
from stockflow.models.product import Product
from stockflow.services.company_service import (
    get_company_or_raise,
    get_company_supplier_or_raise,
    get_company_warehouse_or_raise,
)
from stockflow.services.movement_log_service import append_movement

logger = logging.getLogger(__name__)

_SKU_CONSTRAINT_MARKERS = (
    "company_sku_unique_constraint",
    "products.company_id, products.sku",
)


def _is_sku_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig) if exc.orig is not None else str(exc)
    return any(marker in message for marker in _SKU_CONSTRAINT_MARKERS)


def sku_exists(db: Session, company_id: int, sku: str) -> bool:
    stmt = (
        select(Product.id)
        .where(Product.company_id == company_id, Product.sku == sku)
        .limit(1)
    )
    return db.execute(stmt).first() is not None


def _create_initial_inventory(
    db: Session,
    product: Product,
    warehouse_id: int,
    initial_quantity: int,
) -> Inventory:
    inventory = Inventory(
        product_id=product.id,
        warehouse_id=warehouse_id,
        quantity=initial_quantity,
    )
    db.add(inventory)
    db.flush()
    append_movement(db, product.id, warehouse_id, initial_quantity, REASON_STOCK_IN)
    return inventory


def create_product(
    db: Session,
    company_id: int,
    *,
    name: str,
    sku: str,
    price,
    warehouse_id: int,
    initial_quantity: int,
    low_stock_threshold: Optional[int] = None,
    primary_supplier_id: Optional[int] = None,
) -> Product:
    """
    Create a product with its first inventory row and stock_in entry.

    The three inserts share one transaction: either all of them persist or
    none do.
    """
    name = (name or "").strip()
    sku = (sku or "").strip()
    if not name or not sku:
        raise ValidationError("Missing required fields: name, sku")
    if initial_quantity is None or initial_quantity < 0:
        raise ValidationError("initial_quantity must be a non-negative integer")
    if low_stock_threshold is None:
        low_stock_threshold = get_settings().DEFAULT_LOW_STOCK_THRESHOLD
    if low_stock_threshold < 0:
        raise ValidationError("low_stock_threshold must be non-negative")
    try:
        price = Decimal(str(price))
    except InvalidOperation as exc:
        raise ValidationError("price must be a number") from exc
    if not price.is_finite() or price < 0:
        raise ValidationError("price must be non-negative")

    try:
        with transaction_scope(db):
            get_company_or_raise(db, company_id)
            get_company_warehouse_or_raise(db, company_id, warehouse_id)
            if primary_supplier_id is not None:
                get_company_supplier_or_raise(db, company_id, primary_supplier_id)
            if sku_exists(db, company_id, sku):
                raise ConflictError(
                    "Product with SKU '{}' already exists for this company".format(sku)
                )

            product = Product(
                company_id=company_id,
                name=name,
                sku=sku,
                price=price,
                low_stock_threshold=low_stock_threshold,
                primary_supplier_id=primary_supplier_id,
            )
            db.add(product)
            db.flush()
            _create_initial_inventory(db, product, warehouse_id, initial_quantity)
    except ConflictError:
        logger.warning("Duplicate SKU %r for company %s", sku, company_id)
        raise
    except IntegrityError as exc:
        if _is_sku_violation(exc):
            logger.warning("Duplicate SKU %r for company %s (constraint)", sku, company_id)
            raise ConflictError(
                "Product with SKU '{}' already exists for this company".format(sku)
            ) from exc
        logger.exception("Product creation rolled back for company %s", company_id)
        raise TransactionFailure("Product could not be created") from exc
    except SQLAlchemyError as exc:
        logger.exception("Product creation rolled back for company %s", company_id)
        raise TransactionFailure("Product could not be created") from exc

    logger.info(
        "Created product %s (sku=%s) for company %s with %s units in warehouse %s",
        product.id,
        sku,
        company_id,
        initial_quantity,
        warehouse_id,
    )
    return product


def list_products(db: Session, company_id: int) -> list[Product]:
    get_company_or_raise(db, company_id)
    return list(
        db.execute(
            select(Product)
            .where(Product.company_id == company_id)
            .order_by(Product.id)
        ).scalars()
    )
