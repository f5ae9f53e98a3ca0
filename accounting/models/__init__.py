import importlib

from accounting.models.inventory import InventoryItem, InventoryMovement
from accounting.models.project import Project, ProjectCost, ProjectSale
from accounting.models.transaction import Transaction


def import_all_models() -> None:
    for module_name in (
        "accounting.models.inventory",
        "accounting.models.project",
        "accounting.models.transaction",
    ):
        importlib.import_module(module_name)


__all__ = [
    "InventoryItem",
    "InventoryMovement",
    "Project",
    "ProjectCost",
    "ProjectSale",
    "Transaction",
    "import_all_models",
]
