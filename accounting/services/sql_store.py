import logging
from typing import Callable, Optional

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from accounting.core.coercion import as_number
from accounting.core.constants import DEFAULT_DESCRIPTION_LOCALE
from accounting.core.dates import parse_timestamp, start_of_day
from accounting.core.errors import NotFoundError
from accounting.database.session import make_session_factory, session_scope
from accounting.models.inventory import InventoryItem, InventoryMovement
from accounting.models.project import Project, ProjectCost, ProjectSale
from accounting.models.transaction import Transaction
from accounting.schemas import accounting as schemas
from accounting.services.row_mapping import (
    map_inventory_item_row,
    map_movement_row,
    map_project_cost_row,
    map_project_row,
    map_project_sale_row,
    map_transaction_row,
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


class SqlAccountingStore(AccountingStore):
    """
    Relational store. Every operation runs in its own session scope:
    compound operations commit all of their writes together or roll
    them all back and re-raise the error unchanged.
    """

    backend = "sql"

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        engine: Optional[Engine] = None,
        id_factory: Optional[Callable[[], str]] = None,
        locale: str = DEFAULT_DESCRIPTION_LOCALE,
    ):
        super().__init__(id_factory=id_factory, locale=locale)
        self._session_factory = session_factory
        self._engine = engine

    @classmethod
    def from_engine(cls, engine: Engine, **kwargs) -> "SqlAccountingStore":
        return cls(make_session_factory(engine), engine=engine, **kwargs)

    @property
    def engine(self) -> Optional[Engine]:
        return self._engine

    def _scope(self):
        return session_scope(self._session_factory)

    @staticmethod
    def _get_or_raise(db: Session, model, entity: str, record_id: str, *, lock: bool = False):
        stmt = select(model).where(model.id == record_id).limit(1)
        if lock:
            stmt = stmt.with_for_update()
        row = db.execute(stmt).scalars().first()
        if row is None:
            raise NotFoundError(entity, record_id)
        return row

    def _insert_transaction(self, db: Session, payload: schemas.TransactionCreate) -> Transaction:
        row = Transaction(
            id=self._new_id(),
            date=payload.date,
            type=payload.type,
            description=payload.description,
            amount=payload.amount,
            approved=payload.approved,
            created_by=payload.created_by,
        )
        db.add(row)
        return row

    # Queries

    def snapshot(self) -> schemas.AccountingSnapshot:
        with self._scope() as db:
            transactions = db.execute(
                select(Transaction).order_by(Transaction.date.desc(), Transaction.created_at.desc())
            ).scalars().all()
            items = db.execute(
                select(InventoryItem).order_by(InventoryItem.updated_at.desc(), InventoryItem.name.asc())
            ).scalars().all()
            movements = db.execute(
                select(InventoryMovement).order_by(
                    InventoryMovement.date.desc(), InventoryMovement.created_at.desc()
                )
            ).scalars().all()
            projects = db.execute(
                select(Project).order_by(Project.created_at.desc(), Project.name.asc())
            ).scalars().all()
            costs = db.execute(
                select(ProjectCost).order_by(ProjectCost.date.desc(), ProjectCost.created_at.desc())
            ).scalars().all()
            sales = db.execute(
                select(ProjectSale).order_by(ProjectSale.date.desc(), ProjectSale.created_at.desc())
            ).scalars().all()

            return schemas.AccountingSnapshot(
                transactions=[map_transaction_row(row) for row in transactions],
                items=[map_inventory_item_row(row) for row in items],
                movements=[map_movement_row(row) for row in movements],
                projects=[map_project_row(row) for row in projects],
                costs=[map_project_cost_row(row) for row in costs],
                sales=[map_project_sale_row(row) for row in sales],
            )

    def get_project(self, project_id: str) -> schemas.Project:
        with self._scope() as db:
            return map_project_row(self._get_or_raise(db, Project, PROJECT, project_id))

    def get_project_snapshot(self, project_id: str) -> schemas.ProjectSnapshot:
        with self._scope() as db:
            project = self._get_or_raise(db, Project, PROJECT, project_id)
            costs = db.execute(
                select(ProjectCost)
                .where(ProjectCost.project_id == project_id)
                .order_by(ProjectCost.date.desc(), ProjectCost.created_at.desc())
            ).scalars().all()
            sales = db.execute(
                select(ProjectSale)
                .where(ProjectSale.project_id == project_id)
                .order_by(ProjectSale.date.desc(), ProjectSale.created_at.desc())
            ).scalars().all()
            return schemas.ProjectSnapshot(
                project=map_project_row(project),
                costs=[map_project_cost_row(row) for row in costs],
                sales=[map_project_sale_row(row) for row in sales],
            )

    # Transactions

    def create_transaction(self, payload: schemas.TransactionCreate) -> schemas.Transaction:
        with self._scope() as db:
            row = self._insert_transaction(db, payload)
            db.flush()
            return map_transaction_row(row)

    def approve_transaction(self, transaction_id: str) -> schemas.Transaction:
        with self._scope() as db:
            row = self._get_or_raise(db, Transaction, TRANSACTION, transaction_id, lock=True)
            row.approved = True
            db.flush()
            return map_transaction_row(row)

    def delete_transaction(self, transaction_id: str) -> None:
        with self._scope() as db:
            self._get_or_raise(db, Transaction, TRANSACTION, transaction_id, lock=True)
            db.execute(delete(Transaction).where(Transaction.id == transaction_id))

    # Inventory

    def create_inventory_item(self, payload: schemas.InventoryItemCreate) -> schemas.InventoryItem:
        with self._scope() as db:
            row = InventoryItem(
                id=self._new_id(),
                name=payload.name,
                quantity=payload.quantity,
                unit=payload.unit,
                min=payload.min,
                updated_at=parse_timestamp(payload.updated_at, "updated_at"),
            )
            db.add(row)
            db.flush()
            return map_inventory_item_row(row)

    def delete_inventory_item(self, item_id: str) -> None:
        with self._scope() as db:
            self._get_or_raise(db, InventoryItem, INVENTORY_ITEM, item_id, lock=True)
            db.execute(delete(InventoryMovement).where(InventoryMovement.item_id == item_id))
            db.execute(delete(InventoryItem).where(InventoryItem.id == item_id))

    def _record_movement(self, db, item, kind, quantity, party, payload, derived):
        item.quantity = quantity
        item.updated_at = start_of_day(payload.date)
        movement = InventoryMovement(
            id=self._new_id(),
            item_id=item.id,
            kind=kind,
            qty=payload.qty,
            unit_price=payload.unit_price,
            total=movement_total(payload.qty, payload.unit_price),
            party=party,
            date=payload.date,
        )
        db.add(movement)
        transaction = self._insert_transaction(db, derived)
        db.flush()
        logger.info(
            "Recorded inventory %s item=%s qty=%s total=%s transaction=%s",
            kind,
            item.id,
            payload.qty,
            movement.total,
            transaction.id,
        )
        return schemas.InventoryMovementResult(
            item=map_inventory_item_row(item),
            movement=map_movement_row(movement),
            transaction=map_transaction_row(transaction),
        )

    def record_inventory_receipt(
        self, payload: schemas.InventoryReceiptCreate
    ) -> schemas.InventoryMovementResult:
        with self._scope() as db:
            item = self._get_or_raise(db, InventoryItem, INVENTORY_ITEM, payload.item_id, lock=True)
            return self._record_movement(
                db,
                item,
                "in",
                as_number(item.quantity) + payload.qty,
                payload.supplier,
                payload,
                self.receipt_transaction(item.name, item.unit, payload),
            )

    def record_inventory_issue(
        self, payload: schemas.InventoryIssueCreate
    ) -> schemas.InventoryMovementResult:
        with self._scope() as db:
            item = self._get_or_raise(db, InventoryItem, INVENTORY_ITEM, payload.item_id, lock=True)
            return self._record_movement(
                db,
                item,
                "out",
                issued_quantity(as_number(item.quantity), payload.qty),
                payload.project,
                payload,
                self.issue_transaction(item.name, item.unit, payload),
            )

    # Projects

    def create_project(self, payload: schemas.ProjectCreate) -> schemas.Project:
        with self._scope() as db:
            row = Project(
                id=self._new_id(),
                name=payload.name,
                location=payload.location,
                floors=payload.floors,
                units=payload.units,
                created_at=parse_timestamp(payload.created_at, "created_at"),
            )
            db.add(row)
            db.flush()
            return map_project_row(row)

    def delete_project(self, project_id: str) -> None:
        with self._scope() as db:
            self._get_or_raise(db, Project, PROJECT, project_id, lock=True)
            db.execute(delete(ProjectSale).where(ProjectSale.project_id == project_id))
            db.execute(delete(ProjectCost).where(ProjectCost.project_id == project_id))
            db.execute(delete(Project).where(Project.id == project_id))
        logger.info("Deleted project %s with its costs and sales", project_id)

    def create_project_cost(
        self, payload: schemas.ProjectCostCreate
    ) -> schemas.ProjectCostCreateResult:
        with self._scope() as db:
            self._get_or_raise(db, Project, PROJECT, payload.project_id)
            cost = ProjectCost(
                id=self._new_id(),
                project_id=payload.project_id,
                type=payload.type,
                amount=payload.amount,
                date=payload.date,
                note=payload.note or None,
            )
            db.add(cost)
            transaction = self._insert_transaction(db, self.cost_transaction(payload))
            db.flush()
            logger.info(
                "Recorded project cost project=%s amount=%s transaction=%s",
                payload.project_id,
                payload.amount,
                transaction.id,
            )
            return schemas.ProjectCostCreateResult(
                cost=map_project_cost_row(cost),
                transaction=map_transaction_row(transaction),
            )

    def create_project_sale(
        self, payload: schemas.ProjectSaleCreate
    ) -> schemas.ProjectSaleCreateResult:
        with self._scope() as db:
            self._get_or_raise(db, Project, PROJECT, payload.project_id)
            sale = ProjectSale(
                id=self._new_id(),
                project_id=payload.project_id,
                unit_no=payload.unit_no,
                buyer=payload.buyer,
                price=payload.price,
                date=payload.date,
                terms=payload.terms or None,
                area=payload.area,
                payment_method=payload.payment_method,
            )
            db.add(sale)
            transaction = self._insert_transaction(db, self.sale_transaction(payload))
            db.flush()
            logger.info(
                "Recorded project sale project=%s unit=%s price=%s transaction=%s",
                payload.project_id,
                payload.unit_no,
                payload.price,
                transaction.id,
            )
            return schemas.ProjectSaleCreateResult(
                sale=map_project_sale_row(sale),
                transaction=map_transaction_row(transaction),
            )


__all__ = ["SqlAccountingStore"]
