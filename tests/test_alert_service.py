import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from sqlalchemy.orm import sessionmaker

from stockflow.core.constants import REASON_SALE, REASON_TRANSFER
from stockflow.core.errors import NotFoundError
from stockflow.database import build_engine, create_schema
from stockflow.models import Inventory, InventoryMovementLog, Product
from stockflow.services import velocity_service
from stockflow.services.alert_service import compute_low_stock_alerts
from stockflow.services.company_service import create_company, create_supplier, create_warehouse
from stockflow.services.inventory_service import list_at_risk
from stockflow.services.movement_log_service import aggregate_movements, append_movement
from stockflow.services.product_service import create_product

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class LowStockAlertTest(unittest.TestCase):
    def setUp(self):
        self.engine = build_engine("sqlite://")
        create_schema(bind=self.engine)
        Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.db = Session()

        self.company = create_company(self.db, "C1")
        self.warehouse = create_warehouse(self.db, self.company.id, "W1", "Pune")
        self.supplier = create_supplier(self.db, self.company.id, "Parts Co", "parts@example.com")

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _product(self, sku, quantity, threshold, company=None, warehouse=None, supplier=None):
        company = company or self.company
        warehouse = warehouse or self.warehouse
        return create_product(
            self.db,
            company.id,
            name="Product {}".format(sku),
            sku=sku,
            price="10.00",
            warehouse_id=warehouse.id,
            initial_quantity=quantity,
            low_stock_threshold=threshold,
            primary_supplier_id=supplier.id if supplier else None,
        )

    def _sale(self, product, units, days_ago, warehouse=None, reason=REASON_SALE):
        append_movement(
            self.db,
            product.id,
            (warehouse or self.warehouse).id,
            -units,
            reason,
            created_at=NOW - timedelta(days=days_ago),
        )
        self.db.commit()

    def _alerts(self, company=None, **kwargs):
        return compute_low_stock_alerts(self.db, (company or self.company).id, now=NOW, **kwargs)

    def test_documented_scenario(self):
        product = self._product("P1", quantity=5, threshold=10, supplier=self.supplier)
        self._sale(product, 12, days_ago=20)
        self._sale(product, 8, days_ago=5)

        report = self._alerts()

        self.assertEqual(report.total_alerts, 1)
        alert = report.alerts[0]
        self.assertEqual(alert.product_id, product.id)
        self.assertEqual(alert.product_name, "Product P1")
        self.assertEqual(alert.sku, "P1")
        self.assertEqual(alert.warehouse_id, self.warehouse.id)
        self.assertEqual(alert.warehouse_name, "W1")
        self.assertEqual(alert.current_stock, 5)
        self.assertEqual(alert.threshold, 10)
        self.assertEqual(alert.days_until_stockout, 5)
        self.assertEqual(alert.supplier.id, self.supplier.id)
        self.assertEqual(alert.supplier.name, "Parts Co")
        self.assertEqual(alert.supplier.contact_email, "parts@example.com")

    def test_velocity_over_ten_days(self):
        product = self._product("P3", quantity=20, threshold=20)
        self._sale(product, 10, days_ago=10)
        self._sale(product, 20, days_ago=1)

        alert = self._alerts().alerts[0]
        self.assertEqual(alert.days_until_stockout, 6)

    def test_quantity_equal_to_threshold_is_at_risk(self):
        product = self._product("EQ", quantity=10, threshold=10)
        self._sale(product, 1, days_ago=1)

        rows = list_at_risk(self.db, self.company.id)
        self.assertEqual([row.Product.id for row in rows], [product.id])
        self.assertEqual(self._alerts().total_alerts, 1)

    def test_quantity_above_threshold_is_ignored(self):
        product = self._product("OK", quantity=11, threshold=10)
        self._sale(product, 5, days_ago=1)

        self.assertEqual(list_at_risk(self.db, self.company.id), [])
        self.assertEqual(self._alerts().total_alerts, 0)

    def test_no_sales_means_no_alert(self):
        self._product("ZERO", quantity=0, threshold=10)

        report = self._alerts()
        self.assertEqual(report.alerts, [])
        self.assertEqual(report.total_alerts, 0)

    def test_only_sales_inside_window_count(self):
        product = self._product("OLD", quantity=2, threshold=10)
        self._sale(product, 40, days_ago=61)
        self._sale(product, 5, days_ago=3, reason=REASON_TRANSFER)

        self.assertEqual(self._alerts().total_alerts, 0)
        self.assertEqual(self._alerts(lookback_days=90).total_alerts, 1)

    def test_sale_today_uses_one_day_floor(self):
        product = self._product("NEW", quantity=6, threshold=10)
        self._sale(product, 3, days_ago=0)

        alert = self._alerts().alerts[0]
        self.assertEqual(alert.days_until_stockout, 2)
        self.assertIsNone(alert.supplier)

    def test_other_company_rows_never_leak(self):
        other = create_company(self.db, "C2")
        other_warehouse = create_warehouse(self.db, other.id, "W2")
        mine = self._product("MINE", quantity=1, threshold=5)
        theirs = self._product("THEIRS", quantity=1, threshold=5, company=other, warehouse=other_warehouse)
        self._sale(mine, 2, days_ago=2)
        self._sale(theirs, 2, days_ago=2, warehouse=other_warehouse)

        # A stray row that pairs our product with the other tenant's warehouse.
        self.db.add(Inventory(product_id=mine.id, warehouse_id=other_warehouse.id, quantity=0))
        self.db.commit()
        self._sale(mine, 2, days_ago=2, warehouse=other_warehouse)

        report = self._alerts()
        self.assertEqual(
            [(alert.product_id, alert.warehouse_id) for alert in report.alerts],
            [(mine.id, self.warehouse.id)],
        )
        other_report = self._alerts(company=other)
        self.assertEqual([alert.product_id for alert in other_report.alerts], [theirs.id])

    def test_alerts_sorted_by_urgency(self):
        slow = self._product("SLOW", quantity=9, threshold=10)
        fast = self._product("FAST", quantity=9, threshold=10)
        self._sale(slow, 1, days_ago=10)
        self._sale(fast, 30, days_ago=10)

        report = self._alerts()
        self.assertEqual([alert.sku for alert in report.alerts], ["FAST", "SLOW"])
        self.assertEqual([alert.days_until_stockout for alert in report.alerts], [3, 90])

    def test_velocity_lookup_is_batched(self):
        second_warehouse = create_warehouse(self.db, self.company.id, "W-extra")
        for index in range(3):
            product = self._product("B{}".format(index), quantity=1, threshold=5)
            self._sale(product, 2, days_ago=4)
        extra = self._product("B-extra", quantity=0, threshold=5, warehouse=second_warehouse)
        self._sale(extra, 1, days_ago=1, warehouse=second_warehouse)

        with patch.object(
            velocity_service,
            "aggregate_movements",
            wraps=aggregate_movements,
        ) as aggregate:
            report = self._alerts()

        aggregate.assert_called_once()
        self.assertEqual(report.total_alerts, 4)

    def test_handles_more_than_a_thousand_at_risk_pairs(self):
        products = [
            Product(
                company_id=self.company.id,
                name="Bulk {}".format(index),
                sku="BULK-{}".format(index),
                price=1,
                low_stock_threshold=10,
            )
            for index in range(1200)
        ]
        self.db.add_all(products)
        self.db.flush()
        for product in products:
            self.db.add(Inventory(product_id=product.id, warehouse_id=self.warehouse.id, quantity=1))
            self.db.add(
                InventoryMovementLog(
                    product_id=product.id,
                    warehouse_id=self.warehouse.id,
                    quantity_change=-2,
                    reason=REASON_SALE,
                    created_at=NOW - timedelta(days=2),
                )
            )
        self.db.commit()

        report = self._alerts()

        self.assertEqual(report.total_alerts, 1200)
        self.assertTrue(all(alert.days_until_stockout == 1 for alert in report.alerts))

    def test_policy_can_be_swapped(self):
        self._product("QUIET", quantity=0, threshold=10)

        report = self._alerts(policy=lambda velocity: True)

        self.assertEqual(report.total_alerts, 1)
        self.assertIsNone(report.alerts[0].days_until_stockout)

    def test_unknown_company(self):
        with self.assertRaises(NotFoundError):
            compute_low_stock_alerts(self.db, 404, now=NOW)


if __name__ == "__main__":
    unittest.main()
