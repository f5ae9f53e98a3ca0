import logging
from typing import Callable, Dict, Optional

from accounting.core.constants import DEFAULT_DESCRIPTION_LOCALE
from accounting.core.dates import start_of_day, utc_now_iso
from accounting.core.errors import NotFoundError
from accounting.schemas.accounting import (
    AccountingSnapshot,
    InventoryIssueCreate,
    InventoryItem,
    InventoryItemCreate,
    InventoryMovementResult,
    InventoryReceiptCreate,
    Movement,
    Project,
    ProjectCost,
    ProjectCostCreate,
    ProjectCostCreateResult,
    ProjectCreate,
    ProjectSale,
    ProjectSaleCreate,
    ProjectSaleCreateResult,
    ProjectSnapshot,
    Transaction,
    TransactionCreate,
)
from accounting.services.store import (
    INVENTORY_ITEM,
    PROJECT,
    TRANSACTION,
    AccountingStore,
    issued_quantity,
    movement_total,
)

logger = logging.getLogger(__name__)


def _by_date_desc(records):
    # Newest insertions first so records sharing a date stay newest first.
    return sorted(reversed(list(records)), key=lambda record: record.date, reverse=True)


def _sort_transactions(transactions):
    return sorted(
        transactions,
        key=lambda txn: (txn.date, txn.created_at or ""),
        reverse=True,
    )


def _sort_items(items):
    by_name = sorted(items, key=lambda item: item.name)
    return sorted(by_name, key=lambda item: item.updated_at, reverse=True)


def _sort_projects(projects):
    by_name = sorted(projects, key=lambda project: project.name)
    return sorted(by_name, key=lambda project: project.created_at, reverse=True)


class MemoryAccountingStore(AccountingStore):
    """
    Process-local store used when no database is configured.

    Not synchronized: callers must not share one instance across threads.
    Each compound operation checks its preconditions and builds every
    record before mutating any collection. Records are frozen, so the
    ones handed to callers can be shared with the collections.
    """

    backend = "memory"

    def __init__(
        self,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
        locale: str = DEFAULT_DESCRIPTION_LOCALE,
    ):
        super().__init__(id_factory=id_factory, locale=locale)
        self._clock = clock or utc_now_iso
        self.transactions: Dict[str, Transaction] = {}
        self.items: Dict[str, InventoryItem] = {}
        self.movements: Dict[str, Movement] = {}
        self.projects: Dict[str, Project] = {}
        self.costs: Dict[str, ProjectCost] = {}
        self.sales: Dict[str, ProjectSale] = {}

    def snapshot(self) -> AccountingSnapshot:
        return AccountingSnapshot(
            transactions=_sort_transactions(self.transactions.values()),
            items=_sort_items(self.items.values()),
            movements=_by_date_desc(self.movements.values()),
            projects=_sort_projects(self.projects.values()),
            costs=_by_date_desc(self.costs.values()),
            sales=_by_date_desc(self.sales.values()),
        )

    # Transactions

    def _build_transaction(self, payload: TransactionCreate) -> Transaction:
        return Transaction(
            id=self._new_id(),
            date=payload.date.isoformat(),
            type=payload.type,
            description=payload.description,
            amount=payload.amount,
            approved=payload.approved,
            created_by=payload.created_by,
            created_at=self._clock(),
        )

    def create_transaction(self, payload: TransactionCreate) -> Transaction:
        transaction = self._build_transaction(payload)
        self.transactions[transaction.id] = transaction
        return transaction

    def approve_transaction(self, transaction_id: str) -> Transaction:
        existing = self.transactions.get(transaction_id)
        if existing is None:
            raise NotFoundError(TRANSACTION, transaction_id)
        updated = existing.model_copy(update={"approved": True})
        self.transactions[transaction_id] = updated
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        if self.transactions.pop(transaction_id, None) is None:
            raise NotFoundError(TRANSACTION, transaction_id)

    # Inventory

    def _get_item(self, item_id: str) -> InventoryItem:
        item = self.items.get(item_id)
        if item is None:
            raise NotFoundError(INVENTORY_ITEM, item_id)
        return item

    def create_inventory_item(self, payload: InventoryItemCreate) -> InventoryItem:
        item = InventoryItem(
            id=self._new_id(),
            name=payload.name,
            updated_at=payload.updated_at,
            quantity=payload.quantity,
            unit=payload.unit,
            min=payload.min,
        )
        self.items[item.id] = item
        return item

    def delete_inventory_item(self, item_id: str) -> None:
        self._get_item(item_id)
        for movement in list(self.movements.values()):
            if movement.item_id == item_id:
                del self.movements[movement.id]
        del self.items[item_id]

    def _record_movement(self, item, kind, quantity, party, payload, derived):
        updated = item.model_copy(
            update={"quantity": quantity, "updated_at": start_of_day(payload.date).isoformat()}
        )
        movement = Movement(
            id=self._new_id(),
            item_id=item.id,
            kind=kind,
            qty=payload.qty,
            unit_price=payload.unit_price,
            total=movement_total(payload.qty, payload.unit_price),
            party=party,
            date=payload.date.isoformat(),
        )
        transaction = self._build_transaction(derived)

        self.items[updated.id] = updated
        self.movements[movement.id] = movement
        self.transactions[transaction.id] = transaction
        logger.info(
            "Recorded inventory %s item=%s qty=%s total=%s transaction=%s",
            kind,
            item.id,
            payload.qty,
            movement.total,
            transaction.id,
        )
        return InventoryMovementResult(item=updated, movement=movement, transaction=transaction)

    def record_inventory_receipt(self, payload: InventoryReceiptCreate) -> InventoryMovementResult:
        item = self._get_item(payload.item_id)
        return self._record_movement(
            item,
            "in",
            item.quantity + payload.qty,
            payload.supplier,
            payload,
            self.receipt_transaction(item.name, item.unit, payload),
        )

    def record_inventory_issue(self, payload: InventoryIssueCreate) -> InventoryMovementResult:
        item = self._get_item(payload.item_id)
        return self._record_movement(
            item,
            "out",
            issued_quantity(item.quantity, payload.qty),
            payload.project,
            payload,
            self.issue_transaction(item.name, item.unit, payload),
        )

    # Projects

    def create_project(self, payload: ProjectCreate) -> Project:
        project = Project(
            id=self._new_id(),
            name=payload.name,
            location=payload.location,
            floors=payload.floors,
            units=payload.units,
            created_at=payload.created_at,
        )
        self.projects[project.id] = project
        return project

    def get_project(self, project_id: str) -> Project:
        project = self.projects.get(project_id)
        if project is None:
            raise NotFoundError(PROJECT, project_id)
        return project

    def get_project_snapshot(self, project_id: str) -> ProjectSnapshot:
        project = self.get_project(project_id)
        return ProjectSnapshot(
            project=project,
            costs=_by_date_desc(c for c in self.costs.values() if c.project_id == project_id),
            sales=_by_date_desc(s for s in self.sales.values() if s.project_id == project_id),
        )

    def delete_project(self, project_id: str) -> None:
        self.get_project(project_id)
        for sale in list(self.sales.values()):
            if sale.project_id == project_id:
                del self.sales[sale.id]
        for cost in list(self.costs.values()):
            if cost.project_id == project_id:
                del self.costs[cost.id]
        del self.projects[project_id]

    def create_project_cost(self, payload: ProjectCostCreate) -> ProjectCostCreateResult:
        self.get_project(payload.project_id)
        cost = ProjectCost(
            id=self._new_id(),
            project_id=payload.project_id,
            type=payload.type,
            amount=payload.amount,
            date=payload.date.isoformat(),
            note=payload.note,
        )
        transaction = self._build_transaction(self.cost_transaction(payload))

        self.costs[cost.id] = cost
        self.transactions[transaction.id] = transaction
        logger.info(
            "Recorded project cost project=%s amount=%s transaction=%s",
            payload.project_id,
            cost.amount,
            transaction.id,
        )
        return ProjectCostCreateResult(cost=cost, transaction=transaction)

    def create_project_sale(self, payload: ProjectSaleCreate) -> ProjectSaleCreateResult:
        self.get_project(payload.project_id)
        sale = ProjectSale(
            id=self._new_id(),
            project_id=payload.project_id,
            unit_no=payload.unit_no,
            buyer=payload.buyer,
            price=payload.price,
            date=payload.date.isoformat(),
            terms=payload.terms,
            area=payload.area,
            payment_method=payload.payment_method,
        )
        transaction = self._build_transaction(self.sale_transaction(payload))

        self.sales[sale.id] = sale
        self.transactions[transaction.id] = transaction
        logger.info(
            "Recorded project sale project=%s unit=%s price=%s transaction=%s",
            payload.project_id,
            sale.unit_no,
            sale.price,
            transaction.id,
        )
        return ProjectSaleCreateResult(sale=sale, transaction=transaction)


__all__ = ["MemoryAccountingStore"]
