"""
Storage interface for the accounting ledger.

Two backends implement it: a relational one (SqlAccountingStore) and an
in-memory one used when no database is configured (MemoryAccountingStore).
Rules that do not depend on the backend live here so that both produce
the same movements, derived transactions and descriptions.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Optional

from accounting.core.constants import DEFAULT_DESCRIPTION_LOCALE
from accounting.schemas.accounting import (
    AccountingSnapshot,
    InventoryIssueCreate,
    InventoryItem,
    InventoryItemCreate,
    InventoryMovementResult,
    InventoryReceiptCreate,
    Project,
    ProjectCostCreate,
    ProjectCostCreateResult,
    ProjectCreate,
    ProjectSaleCreate,
    ProjectSaleCreateResult,
    ProjectSnapshot,
    Transaction,
    TransactionCreate,
)
from accounting.services.descriptions import (
    check_locale,
    cost_description,
    issue_description,
    receipt_description,
    sale_description,
)

TRANSACTION = "Transaction"
INVENTORY_ITEM = "Inventory item"
PROJECT = "Project"


def new_uuid() -> str:
    return str(uuid.uuid4())


def movement_total(qty: float, unit_price: float) -> float:
    return qty * unit_price


def issued_quantity(current: float, qty: float) -> float:
    """Stock left after issuing qty; never below zero."""
    return max(0.0, current - qty)


class AccountingStore(ABC):
    backend = "abstract"

    def __init__(
        self,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        locale: str = DEFAULT_DESCRIPTION_LOCALE,
    ):
        self._new_id = id_factory or new_uuid
        self.locale = check_locale(locale)

    # ------------------------------------------------------------------
    # Derived ledger entries
    # ------------------------------------------------------------------

    def receipt_transaction(
        self, item_name: str, unit: str, payload: InventoryReceiptCreate
    ) -> TransactionCreate:
        return TransactionCreate(
            date=payload.date,
            type="expense",
            description=receipt_description(
                item_name, unit, payload.supplier, payload.qty, payload.unit_price, self.locale
            ),
            amount=movement_total(payload.qty, payload.unit_price),
            approved=payload.approved,
            created_by=payload.created_by,
        )

    def issue_transaction(
        self, item_name: str, unit: str, payload: InventoryIssueCreate
    ) -> TransactionCreate:
        return TransactionCreate(
            date=payload.date,
            type="expense",
            description=issue_description(
                item_name, unit, payload.project, payload.qty, payload.unit_price, self.locale
            ),
            amount=movement_total(payload.qty, payload.unit_price),
            approved=payload.approved,
            created_by=payload.created_by,
        )

    def cost_transaction(self, payload: ProjectCostCreate) -> TransactionCreate:
        return TransactionCreate(
            date=payload.date,
            type="expense",
            description=cost_description(payload.type, payload.project_name, self.locale),
            amount=payload.amount,
            approved=payload.approved,
            created_by=payload.created_by,
        )

    def sale_transaction(self, payload: ProjectSaleCreate) -> TransactionCreate:
        return TransactionCreate(
            date=payload.date,
            type="revenue",
            description=sale_description(
                payload.unit_no, payload.project_name, payload.buyer, self.locale
            ),
            amount=payload.price,
            approved=payload.approved,
            created_by=payload.created_by,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def snapshot(self) -> AccountingSnapshot:
        """Every collection, each sorted newest first."""

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        ...

    @abstractmethod
    def get_project_snapshot(self, project_id: str) -> ProjectSnapshot:
        ...

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @abstractmethod
    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        ...

    @abstractmethod
    def approve_transaction(self, transaction_id: str) -> Transaction:
        ...

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        ...

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    @abstractmethod
    def create_inventory_item(self, payload: InventoryItemCreate) -> InventoryItem:
        ...

    @abstractmethod
    def delete_inventory_item(self, item_id: str) -> None:
        """Delete an item together with its movements."""

    @abstractmethod
    def record_inventory_receipt(self, payload: InventoryReceiptCreate) -> InventoryMovementResult:
        ...

    @abstractmethod
    def record_inventory_issue(self, payload: InventoryIssueCreate) -> InventoryMovementResult:
        ...

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    @abstractmethod
    def create_project(self, payload: ProjectCreate) -> Project:
        ...

    @abstractmethod
    def delete_project(self, project_id: str) -> None:
        """Delete a project with all of its sales and costs."""

    @abstractmethod
    def create_project_cost(self, payload: ProjectCostCreate) -> ProjectCostCreateResult:
        ...

    @abstractmethod
    def create_project_sale(self, payload: ProjectSaleCreate) -> ProjectSaleCreateResult:
        ...


__all__ = [
    "AccountingStore",
    "INVENTORY_ITEM",
    "PROJECT",
    "TRANSACTION",
    "issued_quantity",
    "movement_total",
    "new_uuid",
]
