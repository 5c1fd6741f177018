import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from stockflow.core.dates import as_utc, utc_now
from stockflow.core.stock_rules import (
    NO_SALES,
    SalesVelocity,
    days_until_stockout,
    has_sales_signal,
)
from stockflow.models.supplier import Supplier
from stockflow.schemas.alert import LowStockAlert, LowStockAlertsResponse, SupplierSummary
from stockflow.services.company_service import get_company_or_raise
from stockflow.services.inventory_service import list_at_risk
from stockflow.services.velocity_service import estimate_sales_velocity

logger = logging.getLogger(__name__)

AlertPolicy = Callable[[SalesVelocity], bool]


def _supplier_summary(supplier: Optional[Supplier]) -> Optional[SupplierSummary]:
    if supplier is None:
        return None
    return SupplierSummary(
        id=supplier.id,
        name=supplier.name,
        contact_email=supplier.contact_email,
    )


def _alert_sort_key(alert: LowStockAlert):
    days = alert.days_until_stockout
    return (days is None, days or 0, alert.product_id, alert.warehouse_id)


def compute_low_stock_alerts(
    db: Session,
    company_id: int,
    *,
    now: Optional[datetime] = None,
    lookback_days: Optional[int] = None,
    policy: AlertPolicy = has_sales_signal,
) -> LowStockAlertsResponse:
    get_company_or_raise(db, company_id)
    now = as_utc(now) if now is not None else utc_now()

    at_risk = list_at_risk(db, company_id)
    if not at_risk:
        logger.info(
            "Low-stock check for company %s: nothing at or below threshold",
            company_id,
            extra={"company_id": company_id},
        )
        return LowStockAlertsResponse(alerts=[], total_alerts=0)

    velocities = estimate_sales_velocity(
        db,
        ((row.Inventory.product_id, row.Inventory.warehouse_id) for row in at_risk),
        now=now,
        lookback_days=lookback_days,
    )

    alerts = []
    for row in at_risk:
        inventory, product, warehouse = row.Inventory, row.Product, row.Warehouse
        velocity = velocities.get((inventory.product_id, inventory.warehouse_id), NO_SALES)
        if not policy(velocity):
            continue

        alerts.append(
            LowStockAlert(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                warehouse_id=warehouse.id,
                warehouse_name=warehouse.name,
                current_stock=inventory.quantity,
                threshold=product.low_stock_threshold,
                days_until_stockout=days_until_stockout(inventory.quantity, velocity),
                supplier=_supplier_summary(row.Supplier),
            )
        )

    alerts.sort(key=_alert_sort_key)
    logger.info(
        "Low-stock check for company %s: %s at-risk rows, %s alerts",
        company_id,
        len(at_risk),
        len(alerts),
        extra={"company_id": company_id},
    )
    return LowStockAlertsResponse(alerts=alerts, total_alerts=len(alerts))
