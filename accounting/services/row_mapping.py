"""
Row mappers: turn raw database rows into canonical records.

A row may be a driver mapping (numbers as strings, booleans as 0/1,
dates as strings or native dates) or an ORM instance.
"""
from collections.abc import Mapping

from accounting.core.coercion import as_boolean, as_number
from accounting.core.dates import format_date, format_timestamp
from accounting.schemas.accounting import (
    InventoryItem,
    Movement,
    Project,
    ProjectCost,
    ProjectSale,
    Transaction,
)


def _field(row, name):
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def map_transaction_row(row) -> Transaction:
    return Transaction(
        id=_field(row, "id"),
        date=format_date(_field(row, "date")),
        type=_field(row, "type"),
        description=_field(row, "description") or "",
        amount=as_number(_field(row, "amount")),
        approved=as_boolean(_field(row, "approved")),
        created_by=_field(row, "created_by"),
        created_at=format_timestamp(_field(row, "created_at")),
    )


def map_inventory_item_row(row) -> InventoryItem:
    return InventoryItem(
        id=_field(row, "id"),
        name=_field(row, "name"),
        updated_at=format_timestamp(_field(row, "updated_at")) or "",
        quantity=as_number(_field(row, "quantity")),
        unit=_field(row, "unit"),
        min=as_number(_field(row, "min")),
    )


def map_movement_row(row) -> Movement:
    qty = as_number(_field(row, "qty"))
    unit_price = as_number(_field(row, "unit_price"))
    total = _field(row, "total")
    return Movement(
        id=_field(row, "id"),
        item_id=_field(row, "item_id"),
        kind=_field(row, "kind"),
        qty=qty,
        unit_price=unit_price,
        total=qty * unit_price if total is None else as_number(total),
        party=_field(row, "party"),
        date=format_date(_field(row, "date")),
    )


def map_project_row(row) -> Project:
    return Project(
        id=_field(row, "id"),
        name=_field(row, "name"),
        location=_field(row, "location"),
        floors=int(as_number(_field(row, "floors"))),
        units=int(as_number(_field(row, "units"))),
        created_at=format_timestamp(_field(row, "created_at")) or "",
    )


def map_project_cost_row(row) -> ProjectCost:
    return ProjectCost(
        id=_field(row, "id"),
        project_id=_field(row, "project_id"),
        type=_field(row, "type"),
        amount=as_number(_field(row, "amount")),
        date=format_date(_field(row, "date")),
        note=_field(row, "note") or "",
    )


def map_project_sale_row(row) -> ProjectSale:
    return ProjectSale(
        id=_field(row, "id"),
        project_id=_field(row, "project_id"),
        unit_no=_field(row, "unit_no"),
        buyer=_field(row, "buyer"),
        price=as_number(_field(row, "price")),
        date=format_date(_field(row, "date")),
        terms=_field(row, "terms"),
        area=_field(row, "area"),
        payment_method=_field(row, "payment_method"),
    )


__all__ = [
    "map_inventory_item_row",
    "map_movement_row",
    "map_project_cost_row",
    "map_project_row",
    "map_project_sale_row",
    "map_transaction_row",
]
