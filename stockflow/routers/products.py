from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockflow.dependencies import get_db
from stockflow.schemas.product import ProductCreate, ProductCreated, ProductRead
from stockflow.services.product_service import create_product, list_products

router = APIRouter(prefix="/companies/{company_id}/products", tags=["Products"])


@router.post("", response_model=ProductCreated, status_code=status.HTTP_201_CREATED)
def post_product(company_id: int, payload: ProductCreate, db: Session = Depends(get_db)):
    product = create_product(
        db,
        company_id,
        name=payload.name,
        sku=payload.sku,
        price=payload.price,
        warehouse_id=payload.warehouse_id,
        initial_quantity=payload.initial_quantity,
        low_stock_threshold=payload.low_stock_threshold,
        primary_supplier_id=payload.primary_supplier_id,
    )
    return ProductCreated(product_id=product.id)


@router.get("", response_model=List[ProductRead])
def get_products(company_id: int, db: Session = Depends(get_db)):
    return list_products(db, company_id)


__all__ = ["router"]
