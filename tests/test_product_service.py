import unittest
from unittest.mock import patch

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stockflow.core.constants import REASON_STOCK_IN
from stockflow.core.errors import ConflictError, NotFoundError, TransactionFailure, ValidationError
from stockflow.database import build_engine, create_schema
from stockflow.models import Inventory, InventoryMovementLog, Product
from stockflow.services import product_service
from stockflow.services.company_service import create_company, create_supplier, create_warehouse
from stockflow.services.product_service import create_product


class ProductServiceTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        create_schema(bind=self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db = self.Session()

        self.company = create_company(self.db, "Acme")
        self.warehouse = create_warehouse(self.db, self.company.id, "Main", "Pune")

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _count(self, model):
        with self.Session() as db:
            return db.execute(select(func.count()).select_from(model)).scalar_one()

    def _create(self, company_id=None, **overrides):
        values = dict(
            name="Widget",
            sku="WID-1",
            price="9.99",
            warehouse_id=self.warehouse.id,
            initial_quantity=25,
        )
        values.update(overrides)
        return create_product(self.db, company_id or self.company.id, **values)

    def test_creates_product_inventory_and_stock_in_entry(self):
        supplier = create_supplier(self.db, self.company.id, "Parts Co", "parts@example.com")
        product = self._create(low_stock_threshold=4, primary_supplier_id=supplier.id)

        with self.Session() as db:
            stored = db.get(Product, product.id)
            self.assertEqual(stored.sku, "WID-1")
            self.assertEqual(stored.low_stock_threshold, 4)
            self.assertEqual(stored.primary_supplier_id, supplier.id)

            inventory = db.execute(select(Inventory)).scalars().one()
            self.assertEqual(inventory.product_id, product.id)
            self.assertEqual(inventory.warehouse_id, self.warehouse.id)
            self.assertEqual(inventory.quantity, 25)

            entry = db.execute(select(InventoryMovementLog)).scalars().one()
            self.assertEqual(entry.quantity_change, 25)
            self.assertEqual(entry.reason, REASON_STOCK_IN)

    def test_threshold_defaults_to_ten(self):
        product = self._create()
        self.assertEqual(product.low_stock_threshold, 10)

    def test_inventory_failure_rolls_back_product(self):
        with patch.object(
            product_service,
            "_create_initial_inventory",
            side_effect=SQLAlchemyError("disk full"),
        ):
            with self.assertRaises(TransactionFailure):
                self._create()

        self.assertEqual(self._count(Product), 0)
        self.assertEqual(self._count(Inventory), 0)
        self.assertEqual(self._count(InventoryMovementLog), 0)

    def test_duplicate_sku_in_same_company_conflicts(self):
        self._create()
        with self.assertRaises(ConflictError):
            self._create(name="Widget again")
        self.assertEqual(self._count(Product), 1)

    def test_same_sku_allowed_in_another_company(self):
        other = create_company(self.db, "Globex")
        other_warehouse = create_warehouse(self.db, other.id, "Depot")

        self._create()
        self._create(company_id=other.id, warehouse_id=other_warehouse.id)

        self.assertEqual(self._count(Product), 2)

    def test_unique_constraint_violation_is_reported_as_conflict(self):
        self._create()
        with patch.object(product_service, "sku_exists", return_value=False):
            with self.assertRaises(ConflictError):
                self._create()
        self.assertEqual(self._count(Product), 1)
        self.assertEqual(self._count(Inventory), 1)

    def test_unknown_company(self):
        with self.assertRaises(NotFoundError):
            self._create(company_id=999)

    def test_warehouse_of_other_company_is_not_found(self):
        other = create_company(self.db, "Globex")
        foreign_warehouse = create_warehouse(self.db, other.id, "Depot")

        with self.assertRaises(NotFoundError):
            self._create(warehouse_id=foreign_warehouse.id)
        self.assertEqual(self._count(Product), 0)

    def test_supplier_of_other_company_is_not_found(self):
        other = create_company(self.db, "Globex")
        foreign_supplier = create_supplier(self.db, other.id, "Elsewhere Ltd")

        with self.assertRaises(NotFoundError):
            self._create(primary_supplier_id=foreign_supplier.id)
        self.assertEqual(self._count(Product), 0)

    def test_rejects_invalid_values(self):
        cases = [
            dict(initial_quantity=-1),
            dict(low_stock_threshold=-5),
            dict(price="-1"),
            dict(price="abc"),
            dict(sku="   "),
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    self._create(**overrides)
        self.assertEqual(self._count(Product), 0)


if __name__ == "__main__":
    unittest.main()
