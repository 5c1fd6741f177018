from stockflow.services.alert_service import compute_low_stock_alerts
from stockflow.services.company_service import (
    create_company,
    create_supplier,
    create_warehouse,
    get_company_or_raise,
)
from stockflow.services.inventory_service import list_at_risk, record_movement
from stockflow.services.movement_log_service import aggregate_movements, append_movement
from stockflow.services.product_service import create_product
from stockflow.services.velocity_service import estimate_sales_velocity

__all__ = [
    "aggregate_movements",
    "append_movement",
    "compute_low_stock_alerts",
    "create_company",
    "create_product",
    "create_supplier",
    "create_warehouse",
    "estimate_sales_velocity",
    "get_company_or_raise",
    "list_at_risk",
    "record_movement",
]
