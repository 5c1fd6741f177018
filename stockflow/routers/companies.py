from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockflow.dependencies import get_db
from stockflow.schemas.company import (
    CompanyCreate,
    CompanyRead,
    SupplierCreate,
    SupplierRead,
    WarehouseCreate,
    WarehouseRead,
)
from stockflow.services.company_service import (
    create_company,
    create_supplier,
    create_warehouse,
    get_company_or_raise,
    list_suppliers,
    list_warehouses,
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=status.HTTP_201_CREATED)
def post_company(payload: CompanyCreate, db: Session = Depends(get_db)):
    company = create_company(db, payload.name)
    return {"message": "Company created", "company_id": company.id}


@router.get("/{company_id}", response_model=CompanyRead)
def get_company(company_id: int, db: Session = Depends(get_db)):
    return get_company_or_raise(db, company_id)


@router.post("/{company_id}/warehouses", status_code=status.HTTP_201_CREATED)
def post_warehouse(company_id: int, payload: WarehouseCreate, db: Session = Depends(get_db)):
    warehouse = create_warehouse(db, company_id, payload.name, payload.location)
    return {"message": "Warehouse created", "warehouse_id": warehouse.id}


@router.get("/{company_id}/warehouses", response_model=List[WarehouseRead])
def get_warehouses(company_id: int, db: Session = Depends(get_db)):
    return list_warehouses(db, company_id)


@router.post("/{company_id}/suppliers", status_code=status.HTTP_201_CREATED)
def post_supplier(company_id: int, payload: SupplierCreate, db: Session = Depends(get_db)):
    supplier = create_supplier(db, company_id, payload.name, payload.contact_email)
    return {"message": "Supplier created", "supplier_id": supplier.id}


@router.get("/{company_id}/suppliers", response_model=List[SupplierRead])
def get_suppliers(company_id: int, db: Session = Depends(get_db)):
    return list_suppliers(db, company_id)


__all__ = ["router"]
