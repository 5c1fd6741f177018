import json
import logging
import unittest

from stockflow.core.logging import JsonFormatter


class JsonFormatterTest(unittest.TestCase):
    def _record(self, **extra):
        record = logging.LogRecord(
            name="stockflow.services.alert_service",
            level=logging.INFO,
            pathname=__file__,
            lineno=12,
            msg="Low-stock check for company %s",
            args=(7,),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_includes_app_and_company(self):
        formatter = JsonFormatter("StockFlow Inventory API", "test")
        payload = json.loads(formatter.format(self._record(company_id=7)))

        self.assertEqual(payload["app"], "StockFlow Inventory API")
        self.assertEqual(payload["environment"], "test")
        self.assertEqual(payload["company_id"], 7)
        self.assertEqual(payload["message"], "Low-stock check for company 7")
        self.assertEqual(payload["level"], "INFO")

    def test_company_is_omitted_when_not_given(self):
        payload = json.loads(JsonFormatter().format(self._record()))
        self.assertNotIn("company_id", payload)


if __name__ == "__main__":
    unittest.main()
