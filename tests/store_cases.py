import itertools

from pydantic import ValidationError as SchemaValidationError

from accounting.core.errors import NotFoundError
from accounting.schemas.accounting import (
    InventoryIssueCreate,
    InventoryItemCreate,
    InventoryReceiptCreate,
    ProjectCostCreate,
    ProjectCreate,
    ProjectSaleCreate,
    TransactionCreate,
)


def sequential_ids(prefix="id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


class StoreContractCases:
    """Behaviour every AccountingStore backend must share."""

    def make_store(self):
        raise NotImplementedError

    def setUp(self):
        self.store = self.make_store()

    def add_item(self, name="Cement", quantity=20, unit="bag", updated_at="2024-01-01"):
        return self.store.create_inventory_item(
            InventoryItemCreate(name=name, quantity=quantity, unit=unit, min=5, updated_at=updated_at)
        )

    def add_project(self, name="Nile Towers", created_at="2024-01-01T08:00:00"):
        return self.store.create_project(
            ProjectCreate(name=name, location="Giza", floors=12, units=48, created_at=created_at)
        )

    def add_transaction(self, date, amount=100, approved=False):
        return self.store.create_transaction(
            TransactionCreate(
                date=date,
                type="expense",
                description="Site fuel",
                amount=amount,
                approved=approved,
                created_by="user-1",
            )
        )

    # Inventory receipts and issues

    def test_receipt_increases_stock_and_books_expense(self):
        item = self.add_item()

        result = self.store.record_inventory_receipt(
            InventoryReceiptCreate(
                item_id=item.id,
                qty=10,
                unit_price=5,
                supplier="Acme",
                date="2024-03-01",
                approved=True,
                created_by="user-1",
            )
        )

        self.assertEqual(result.item.quantity, 30)
        self.assertTrue(result.item.updated_at.startswith("2024-03-01"))
        self.assertEqual(result.movement.kind, "in")
        self.assertEqual(result.movement.item_id, item.id)
        self.assertEqual(result.movement.party, "Acme")
        self.assertEqual(result.movement.total, 50)
        self.assertEqual(result.movement.date, "2024-03-01")
        self.assertEqual(result.transaction.type, "expense")
        self.assertEqual(result.transaction.amount, 50)
        self.assertTrue(result.transaction.approved)
        self.assertEqual(result.transaction.created_by, "user-1")
        self.assertEqual(result.transaction.description, "Purchase of Cement from Acme (10 bag × 5)")

        snapshot = self.store.snapshot()
        self.assertEqual(len(snapshot.movements), 1)
        self.assertEqual(len(snapshot.transactions), 1)
        self.assertEqual(snapshot.items[0].quantity, 30)

    def test_issue_reduces_stock(self):
        item = self.add_item()

        result = self.store.record_inventory_issue(
            InventoryIssueCreate(
                item_id=item.id,
                qty=8,
                unit_price=5,
                project="Nile Towers",
                date="2024-03-02",
            )
        )

        self.assertEqual(result.item.quantity, 12)
        self.assertEqual(result.movement.kind, "out")
        self.assertEqual(result.movement.party, "Nile Towers")
        self.assertEqual(result.transaction.type, "expense")
        self.assertEqual(result.transaction.amount, 40)
        self.assertFalse(result.transaction.approved)
        self.assertEqual(
            result.transaction.description,
            "Issue of Cement to project Nile Towers (8 bag × 5)",
        )

    def test_issue_beyond_stock_clamps_to_zero(self):
        item = self.add_item(quantity=20)

        result = self.store.record_inventory_issue(
            InventoryIssueCreate(
                item_id=item.id,
                qty=25,
                unit_price=5,
                project="Nile Towers",
                date="2024-03-02",
            )
        )

        self.assertEqual(result.item.quantity, 0)
        self.assertEqual(result.movement.qty, 25)
        self.assertEqual(result.movement.total, 125)
        self.assertEqual(self.store.snapshot().items[0].quantity, 0)

    def test_receipt_for_unknown_item_writes_nothing(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.store.record_inventory_receipt(
                InventoryReceiptCreate(
                    item_id="missing",
                    qty=1,
                    unit_price=1,
                    supplier="Acme",
                    date="2024-03-01",
                )
            )

        self.assertEqual(str(ctx.exception), "Inventory item not found")
        snapshot = self.store.snapshot()
        self.assertEqual(snapshot.movements, [])
        self.assertEqual(snapshot.transactions, [])

    def test_delete_inventory_item_removes_its_movements(self):
        cement = self.add_item()
        steel = self.add_item(name="Steel", unit="ton")
        for item in (cement, steel):
            self.store.record_inventory_receipt(
                InventoryReceiptCreate(
                    item_id=item.id, qty=2, unit_price=3, supplier="Acme", date="2024-03-01"
                )
            )

        self.store.delete_inventory_item(cement.id)

        snapshot = self.store.snapshot()
        self.assertEqual([item.id for item in snapshot.items], [steel.id])
        self.assertEqual([movement.item_id for movement in snapshot.movements], [steel.id])
        self.assertEqual(len(snapshot.transactions), 2)

    def test_delete_missing_inventory_item_raises(self):
        with self.assertRaises(NotFoundError):
            self.store.delete_inventory_item("missing")

    # Transactions

    def test_approve_transaction_is_idempotent(self):
        transaction = self.add_transaction("2024-01-05")

        first = self.store.approve_transaction(transaction.id)
        second = self.store.approve_transaction(transaction.id)

        self.assertTrue(first.approved)
        self.assertTrue(second.approved)
        self.assertEqual(second.id, transaction.id)
        transactions = self.store.snapshot().transactions
        self.assertEqual(len(transactions), 1)
        self.assertTrue(transactions[0].approved)

    def test_approve_missing_transaction_raises(self):
        with self.assertRaises(NotFoundError):
            self.store.approve_transaction("missing")

    def test_delete_transaction(self):
        keep = self.add_transaction("2024-01-05")
        drop = self.add_transaction("2024-01-06")

        self.store.delete_transaction(drop.id)

        self.assertEqual([t.id for t in self.store.snapshot().transactions], [keep.id])
        with self.assertRaises(NotFoundError):
            self.store.delete_transaction(drop.id)

    def test_snapshot_orders_transactions_newest_date_first(self):
        for date in ("2024-01-01", "2024-03-01", "2024-02-01"):
            self.add_transaction(date)

        dates = [t.date for t in self.store.snapshot().transactions]

        self.assertEqual(dates, ["2024-03-01", "2024-02-01", "2024-01-01"])

    def test_snapshot_breaks_date_ties_by_creation_time(self):
        older = self.add_transaction("2024-01-01")
        newer = self.add_transaction("2024-01-01")

        ids = [t.id for t in self.store.snapshot().transactions]

        self.assertEqual(ids, [newer.id, older.id])

    def test_snapshot_orders_items_by_last_update(self):
        stale = self.add_item(name="Sand", updated_at="2024-01-01")
        fresh = self.add_item(name="Bricks", updated_at="2024-02-01")

        ids = [item.id for item in self.store.snapshot().items]

        self.assertEqual(ids, [fresh.id, stale.id])

    # Projects

    def test_project_cost_books_matching_expense(self):
        project = self.add_project()

        result = self.store.create_project_cost(
            ProjectCostCreate(
                project_id=project.id,
                project_name=project.name,
                type="expense",
                amount=1500,
                date="2024-04-01",
                note="Permits",
            )
        )

        self.assertEqual(result.cost.project_id, project.id)
        self.assertEqual(result.cost.note, "Permits")
        self.assertEqual(result.transaction.type, "expense")
        self.assertEqual(result.transaction.amount, result.cost.amount)
        self.assertEqual(
            result.transaction.description,
            "General expense cost for project Nile Towers",
        )

    def test_project_sale_books_matching_revenue(self):
        project = self.add_project()

        result = self.store.create_project_sale(
            ProjectSaleCreate(
                project_id=project.id,
                project_name=project.name,
                unit_no="A-101",
                buyer="Mona",
                price=950000,
                date="2024-04-02",
                terms="24 installments",
                payment_method="installments",
            )
        )

        self.assertEqual(result.sale.unit_no, "A-101")
        self.assertEqual(result.sale.terms, "24 installments")
        self.assertEqual(result.sale.payment_method, "installments")
        self.assertEqual(result.transaction.type, "revenue")
        self.assertEqual(result.transaction.amount, 950000)
        self.assertEqual(
            result.transaction.description,
            "Sale of unit A-101 in project Nile Towers to Mona",
        )

    def test_cost_for_unknown_project_raises(self):
        with self.assertRaises(NotFoundError):
            self.store.create_project_cost(
                ProjectCostCreate(
                    project_id="missing",
                    project_name="Ghost",
                    type="construction",
                    amount=10,
                    date="2024-04-01",
                )
            )
        self.assertEqual(self.store.snapshot().transactions, [])

    def test_project_snapshot_filters_and_orders_by_date(self):
        project = self.add_project()
        other = self.add_project(name="Delta Heights", created_at="2024-01-02T08:00:00")
        for date in ("2024-04-01", "2024-06-01", "2024-05-01"):
            self.store.create_project_cost(
                ProjectCostCreate(
                    project_id=project.id,
                    project_name=project.name,
                    type="construction",
                    amount=100,
                    date=date,
                )
            )
        self.store.create_project_cost(
            ProjectCostCreate(
                project_id=other.id,
                project_name=other.name,
                type="operation",
                amount=50,
                date="2024-07-01",
            )
        )

        snapshot = self.store.get_project_snapshot(project.id)

        self.assertEqual(snapshot.project.id, project.id)
        self.assertEqual([c.date for c in snapshot.costs], ["2024-06-01", "2024-05-01", "2024-04-01"])
        self.assertEqual(snapshot.sales, [])
        self.assertEqual([p.id for p in self.store.snapshot().projects], [other.id, project.id])

    def test_delete_project_cascades_costs_and_sales(self):
        project = self.add_project()
        other = self.add_project(name="Delta Heights")
        for target in (project, other):
            self.store.create_project_cost(
                ProjectCostCreate(
                    project_id=target.id,
                    project_name=target.name,
                    type="construction",
                    amount=100,
                    date="2024-04-01",
                )
            )
            self.store.create_project_sale(
                ProjectSaleCreate(
                    project_id=target.id,
                    project_name=target.name,
                    unit_no="B-2",
                    buyer="Omar",
                    price=200,
                    date="2024-04-02",
                )
            )

        self.store.delete_project(project.id)

        snapshot = self.store.snapshot()
        self.assertEqual([p.id for p in snapshot.projects], [other.id])
        self.assertEqual({c.project_id for c in snapshot.costs}, {other.id})
        self.assertEqual({s.project_id for s in snapshot.sales}, {other.id})
        self.assertEqual(len(snapshot.transactions), 4)
        with self.assertRaises(NotFoundError):
            self.store.get_project_snapshot(project.id)
        with self.assertRaises(NotFoundError):
            self.store.get_project(project.id)

    def test_delete_missing_project_raises(self):
        with self.assertRaises(NotFoundError):
            self.store.delete_project("missing")

    def test_sale_for_unknown_project_raises(self):
        with self.assertRaises(NotFoundError) as ctx:
            self.store.create_project_sale(
                ProjectSaleCreate(
                    project_id="missing",
                    project_name="Ghost",
                    unit_no="A-1",
                    buyer="Mona",
                    price=10,
                    date="2024-04-02",
                )
            )

        self.assertEqual(str(ctx.exception), "Project not found")
        snapshot = self.store.snapshot()
        self.assertEqual(snapshot.sales, [])
        self.assertEqual(snapshot.transactions, [])

    # Ordering

    def test_snapshot_orders_movements_costs_and_sales_newest_date_first(self):
        item = self.add_item()
        project = self.add_project()
        other = self.add_project(name="Delta Heights")
        for date in ("2024-03-01", "2024-05-01", "2024-04-01"):
            self.store.record_inventory_receipt(
                InventoryReceiptCreate(item_id=item.id, qty=1, unit_price=2, supplier="Acme", date=date)
            )
        for target, date in ((project, "2024-06-01"), (other, "2024-08-01"), (project, "2024-07-01")):
            self.store.create_project_cost(
                ProjectCostCreate(
                    project_id=target.id,
                    project_name=target.name,
                    type="operation",
                    amount=10,
                    date=date,
                )
            )
            self.store.create_project_sale(
                ProjectSaleCreate(
                    project_id=target.id,
                    project_name=target.name,
                    unit_no="C-" + date[5:7],
                    buyer="Omar",
                    price=100,
                    date=date,
                )
            )

        snapshot = self.store.snapshot()

        self.assertEqual([m.date for m in snapshot.movements], ["2024-05-01", "2024-04-01", "2024-03-01"])
        self.assertEqual([c.date for c in snapshot.costs], ["2024-08-01", "2024-07-01", "2024-06-01"])
        self.assertEqual([s.unit_no for s in snapshot.sales], ["C-08", "C-07", "C-06"])
        self.assertEqual(
            [t.date for t in snapshot.transactions],
            ["2024-08-01", "2024-08-01", "2024-07-01", "2024-07-01", "2024-06-01", "2024-06-01",
             "2024-05-01", "2024-04-01", "2024-03-01"],
        )

    def test_items_and_projects_with_equal_timestamps_sort_by_name(self):
        sand = self.add_item(name="Sand", updated_at="2024-02-01T00:00:00Z")
        bricks = self.add_item(name="Bricks", updated_at="2024-02-01")
        tiles = self.add_project(name="Tiles Tower", created_at="2024-01-01T08:00:00")
        acacia = self.add_project(name="Acacia Court", created_at="2024-01-01T10:00:00+02:00")

        snapshot = self.store.snapshot()

        self.assertEqual([item.id for item in snapshot.items], [bricks.id, sand.id])
        self.assertEqual([p.id for p in snapshot.projects], [acacia.id, tiles.id])

    # Timestamps

    def test_offset_timestamps_keep_their_instant(self):
        east = self.add_item(name="A", updated_at="2024-01-01T10:00:00+05:00")
        west = self.add_item(name="B", updated_at="2024-01-01T06:00:00Z")

        snapshot = self.store.snapshot()

        self.assertEqual(east.updated_at, "2024-01-01T05:00:00+00:00")
        self.assertEqual([item.id for item in snapshot.items], [west.id, east.id])
        self.assertEqual(snapshot.items[1], east)

    def test_created_records_match_the_snapshot(self):
        transaction = self.add_transaction("2024-01-05")
        project = self.add_project(created_at="2024-01-01T08:00:00+02:00")
        item = self.add_item()
        receipt = self.store.record_inventory_receipt(
            InventoryReceiptCreate(item_id=item.id, qty=3, unit_price=2, supplier="Acme", date="2024-03-01")
        )

        snapshot = self.store.snapshot()

        self.assertEqual(project.created_at, "2024-01-01T06:00:00+00:00")
        self.assertEqual(snapshot.projects, [project])
        self.assertEqual(snapshot.items, [receipt.item])
        self.assertEqual(snapshot.movements, [receipt.movement])
        self.assertEqual(snapshot.transactions, [receipt.transaction, transaction])

    # Returned records

    def test_returned_records_cannot_change_the_store(self):
        transaction = self.add_transaction("2024-01-05", amount=100)
        item = self.add_item(quantity=20)

        with self.assertRaises(SchemaValidationError):
            transaction.approved = True
        with self.assertRaises(SchemaValidationError):
            item.quantity = 999
        snapshot = self.store.snapshot()
        with self.assertRaises(SchemaValidationError):
            snapshot.transactions[0].amount = 999
        snapshot.transactions.clear()
        snapshot.items.clear()

        fresh = self.store.snapshot()
        self.assertEqual(len(fresh.transactions), 1)
        self.assertFalse(fresh.transactions[0].approved)
        self.assertEqual(fresh.transactions[0].amount, 100)
        self.assertEqual(fresh.items[0].quantity, 20)

    # Derived transactions

    def test_derived_transactions_can_be_approved_and_deleted(self):
        item = self.add_item()
        project = self.add_project()
        receipt = self.store.record_inventory_receipt(
            InventoryReceiptCreate(item_id=item.id, qty=2, unit_price=3, supplier="Acme", date="2024-03-01")
        )
        cost = self.store.create_project_cost(
            ProjectCostCreate(
                project_id=project.id,
                project_name=project.name,
                type="construction",
                amount=100,
                date="2024-04-01",
            )
        )

        approved = self.store.approve_transaction(receipt.transaction.id)
        self.store.delete_transaction(cost.transaction.id)

        self.assertTrue(approved.approved)
        self.assertEqual(approved.amount, 6)
        snapshot = self.store.snapshot()
        self.assertEqual([t.id for t in snapshot.transactions], [receipt.transaction.id])
        self.assertTrue(snapshot.transactions[0].approved)
        self.assertEqual([m.id for m in snapshot.movements], [receipt.movement.id])
        self.assertEqual([c.id for c in snapshot.costs], [cost.cost.id])
        self.assertEqual(snapshot.items[0].quantity, 22)
