import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from stockflow.core.errors import NotFoundError, ValidationError
from stockflow.database import transaction_scope
from stockflow.models.company import Company
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse

logger = logging.getLogger(__name__)


def _require_name(value: Optional[str], field: str = "name") -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError("Missing '{}' field".format(field))
    return value


def get_company_or_raise(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if company is None:
        raise NotFoundError("Company not found")
    return company


def get_company_warehouse_or_raise(db: Session, company_id: int, warehouse_id: int) -> Warehouse:
    warehouse = (
        db.execute(
            select(Warehouse).where(
                Warehouse.id == warehouse_id,
                Warehouse.company_id == company_id,
            )
        )
        .scalars()
        .first()
    )
    if warehouse is None:
        raise NotFoundError("Warehouse not found or does not belong to this company")
    return warehouse


def get_company_supplier_or_raise(db: Session, company_id: int, supplier_id: int) -> Supplier:
    supplier = (
        db.execute(
            select(Supplier).where(
                Supplier.id == supplier_id,
                Supplier.company_id == company_id,
            )
        )
        .scalars()
        .first()
    )
    if supplier is None:
        raise NotFoundError("Supplier not found or does not belong to this company")
    return supplier


def create_company(db: Session, name: str) -> Company:
    company = Company(name=_require_name(name))
    with transaction_scope(db):
        db.add(company)
    logger.info("Created company %s (%s)", company.id, company.name)
    return company


def create_warehouse(
    db: Session,
    company_id: int,
    name: str,
    location: Optional[str] = None,
) -> Warehouse:
    name = _require_name(name)
    with transaction_scope(db):
        get_company_or_raise(db, company_id)
        warehouse = Warehouse(company_id=company_id, name=name, location=location)
        db.add(warehouse)
    logger.info("Created warehouse %s for company %s", warehouse.id, company_id)
    return warehouse


def create_supplier(
    db: Session,
    company_id: int,
    name: str,
    contact_email: Optional[str] = None,
) -> Supplier:
    name = _require_name(name)
    with transaction_scope(db):
        get_company_or_raise(db, company_id)
        supplier = Supplier(company_id=company_id, name=name, contact_email=contact_email)
        db.add(supplier)
    logger.info("Created supplier %s for company %s", supplier.id, company_id)
    return supplier


def list_warehouses(db: Session, company_id: int) -> list[Warehouse]:
    get_company_or_raise(db, company_id)
    return list(
        db.execute(
            select(Warehouse)
            .where(Warehouse.company_id == company_id)
            .order_by(Warehouse.id)
        ).scalars()
    )


def list_suppliers(db: Session, company_id: int) -> list[Supplier]:
    get_company_or_raise(db, company_id)
    return list(
        db.execute(
            select(Supplier)
            .where(Supplier.company_id == company_id)
            .order_by(Supplier.id)
        ).scalars()
    )
