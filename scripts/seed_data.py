import argparse
import logging
from datetime import date, timedelta

from sqlalchemy import delete

from accounting.config import get_settings
from accounting.core.logging import setup_logging
from accounting.database import Base
from accounting.models import (
    InventoryItem,
    InventoryMovement,
    Project,
    ProjectCost,
    ProjectSale,
    Transaction,
    import_all_models,
)
from accounting.schemas.accounting import (
    InventoryIssueCreate,
    InventoryItemCreate,
    InventoryReceiptCreate,
    ProjectCostCreate,
    ProjectCreate,
    ProjectSaleCreate,
)
from accounting.services import SqlAccountingStore, build_store

logger = logging.getLogger("seed_data")


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample accounting data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def prepare_database(store, reset):
    import_all_models()
    engine = store.engine
    Base.metadata.create_all(bind=engine)
    if not reset:
        return
    with engine.begin() as conn:
        for model in (ProjectSale, ProjectCost, Project, InventoryMovement, InventoryItem, Transaction):
            conn.execute(delete(model))


def main():
    settings = get_settings()
    setup_logging(settings)
    args = parse_args()
    store = build_store(settings)

    if isinstance(store, SqlAccountingStore):
        prepare_database(store, args.reset)
        if not args.reset and store.snapshot().projects:
            logger.info("Seed skipped: projects already exist.")
            return

    today = date.today()
    cement = store.create_inventory_item(
        InventoryItemCreate(
            name="Cement",
            quantity=20,
            unit="bag",
            min=5,
            updated_at=(today - timedelta(days=7)).isoformat(),
        )
    )
    project = store.create_project(
        ProjectCreate(
            name="Nile Towers",
            location="Giza",
            floors=12,
            units=48,
            created_at=(today - timedelta(days=30)).isoformat(),
        )
    )

    store.record_inventory_receipt(
        InventoryReceiptCreate(
            item_id=cement.id,
            qty=10,
            unit_price=5,
            supplier="Acme Supplies",
            date=today - timedelta(days=3),
            approved=True,
        )
    )
    store.record_inventory_issue(
        InventoryIssueCreate(
            item_id=cement.id,
            qty=8,
            unit_price=5,
            project=project.name,
            date=today - timedelta(days=2),
        )
    )
    store.create_project_cost(
        ProjectCostCreate(
            project_id=project.id,
            project_name=project.name,
            type="construction",
            amount=125000,
            date=today - timedelta(days=1),
            note="Foundation works",
            approved=True,
        )
    )
    store.create_project_sale(
        ProjectSaleCreate(
            project_id=project.id,
            project_name=project.name,
            unit_no="A-101",
            buyer="Mona Adel",
            price=950000,
            date=today,
            terms="30% down payment, 24 monthly installments",
        )
    )

    snapshot = store.snapshot()
    logger.info(
        "Seed complete (%s store): %s transactions, %s items, %s movements, "
        "%s projects, %s costs, %s sales",
        store.backend,
        len(snapshot.transactions),
        len(snapshot.items),
        len(snapshot.movements),
        len(snapshot.projects),
        len(snapshot.costs),
        len(snapshot.sales),
    )


if __name__ == "__main__":
    main()
