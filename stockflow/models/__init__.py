import importlib

from stockflow.models.company import Company
from stockflow.models.inventory import Inventory
from stockflow.models.movement_log import InventoryMovementLog
from stockflow.models.product import Product
from stockflow.models.supplier import Supplier
from stockflow.models.warehouse import Warehouse


def import_all_models() -> None:
    for module_name in (
        "stockflow.models.company",
        "stockflow.models.inventory",
        "stockflow.models.movement_log",
        "stockflow.models.product",
        "stockflow.models.supplier",
        "stockflow.models.warehouse",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Company",
    "Inventory",
    "InventoryMovementLog",
    "Product",
    "Supplier",
    "Warehouse",
    "import_all_models",
]
