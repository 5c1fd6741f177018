from typing import List, Optional

from pydantic import BaseModel


class SupplierSummary(BaseModel):
    id: int
    name: str
    contact_email: Optional[str] = None


class LowStockAlert(BaseModel):
    product_id: int
    product_name: str
    sku: str
    warehouse_id: int
    warehouse_name: str
    current_stock: int
    threshold: int
    days_until_stockout: Optional[int] = None
    supplier: Optional[SupplierSummary] = None


class LowStockAlertsResponse(BaseModel):
    alerts: List[LowStockAlert]
    total_alerts: int
