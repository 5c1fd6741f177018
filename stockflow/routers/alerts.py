from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockflow.dependencies import get_db
from stockflow.schemas.alert import LowStockAlertsResponse
from stockflow.services.alert_service import compute_low_stock_alerts

router = APIRouter(prefix="/companies/{company_id}/alerts", tags=["Alerts"])


@router.get("/low-stock", response_model=LowStockAlertsResponse)
def get_low_stock_alerts(company_id: int, db: Session = Depends(get_db)):
    return compute_low_stock_alerts(db, company_id)


__all__ = ["router"]
