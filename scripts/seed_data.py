import argparse
from datetime import timedelta

from sqlalchemy import delete, select

from stockflow.core.constants import REASON_SALE
from stockflow.core.dates import utc_now
from stockflow.core.logging import setup_logging
from stockflow.database import SessionLocal, create_schema
from stockflow.models import (
    Company,
    Inventory,
    InventoryMovementLog,
    Product,
    Supplier,
    Warehouse,
)
from stockflow.services.company_service import create_company, create_supplier, create_warehouse
from stockflow.services.movement_log_service import append_movement
from stockflow.services.product_service import create_product


def parse_args():
    parser = argparse.ArgumentParser(description="Seed a demo company with low-stock data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    create_schema()

    db = SessionLocal()
    try:
        if args.reset:
            db.execute(delete(InventoryMovementLog))
            db.execute(delete(Inventory))
            db.execute(delete(Product))
            db.execute(delete(Supplier))
            db.execute(delete(Warehouse))
            db.execute(delete(Company))
            db.commit()

        has_company = db.execute(select(Company.id).limit(1)).first()
        if has_company:
            print("Seed skipped: companies already exist.")
            return

        company = create_company(db, "Acme Retail")
        main_warehouse = create_warehouse(db, company.id, "Main Warehouse", "Pune")
        overflow = create_warehouse(db, company.id, "Overflow Depot", "Mumbai")
        supplier = create_supplier(db, company.id, "Widget Supply Co", "orders@widgetsupply.example")

        widget = create_product(
            db,
            company.id,
            name="Widget A",
            sku="WID-001",
            price="12.50",
            warehouse_id=main_warehouse.id,
            initial_quantity=5,
            low_stock_threshold=10,
            primary_supplier_id=supplier.id,
        )
        create_product(
            db,
            company.id,
            name="Gadget B",
            sku="GAD-002",
            price="40.00",
            warehouse_id=overflow.id,
            initial_quantity=0,
            low_stock_threshold=5,
        )

        # Historical sales for the on-hand stock above.
        now = utc_now()
        append_movement(db, widget.id, main_warehouse.id, -12, REASON_SALE, created_at=now - timedelta(days=20))
        append_movement(db, widget.id, main_warehouse.id, -8, REASON_SALE, created_at=now - timedelta(days=5))
        db.commit()

        print("Seed data created for company {}.".format(company.id))
    finally:
        db.close()


if __name__ == "__main__":
    main()
