from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from stockflow.dependencies import get_db
from stockflow.schemas.inventory import MovementCreate, MovementRead, MovementRecorded
from stockflow.services.inventory_service import record_movement
from stockflow.services.movement_log_service import list_movements

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.post("/log", response_model=MovementRecorded, status_code=status.HTTP_201_CREATED)
def post_movement(payload: MovementCreate, db: Session = Depends(get_db)):
    entry, quantity = record_movement(
        db,
        payload.product_id,
        payload.warehouse_id,
        payload.quantity_change,
        payload.reason,
    )
    return MovementRecorded(movement=MovementRead.model_validate(entry), quantity=quantity)


@router.get("/log", response_model=List[MovementRead])
def get_movements(
    product_id: int = Query(..., description="Product to list movements for"),
    warehouse_id: Optional[int] = Query(None, description="Restrict to one warehouse"),
    db: Session = Depends(get_db),
):
    return list_movements(db, product_id, warehouse_id)


__all__ = ["router"]
