import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from accounting.core.dates import normalize_timestamp

TransactionType = Literal["revenue", "expense"]
MovementKind = Literal["in", "out"]
CostType = Literal["construction", "operation", "expense"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==============================
# Records
# ==============================


class RecordModel(CamelModel):
    """Stored records are read-only; stores hand out new versions via model_copy."""

    model_config = ConfigDict(frozen=True)


class Transaction(RecordModel):
    id: str
    date: str
    type: TransactionType
    description: str
    amount: float
    approved: bool
    created_by: Optional[str] = None
    created_at: Optional[str] = None


class InventoryItem(RecordModel):
    id: str
    name: str
    updated_at: str
    quantity: float
    unit: str
    min: float


class Movement(RecordModel):
    id: str
    item_id: str
    kind: MovementKind
    qty: float
    unit_price: float
    total: float
    party: str
    date: str


class Project(RecordModel):
    id: str
    name: str
    location: str
    floors: int
    units: int
    created_at: str


class ProjectCost(RecordModel):
    id: str
    project_id: str
    type: CostType
    amount: float
    date: str
    note: str = ""


class ProjectSale(RecordModel):
    id: str
    project_id: str
    unit_no: str
    buyer: str
    price: float
    date: str
    terms: Optional[str] = None
    area: Optional[str] = None
    payment_method: Optional[str] = None


# ==============================
# Inputs
# ==============================


def _check_timestamp(value: str, field: str) -> str:
    return normalize_timestamp(value, field)


class TransactionCreate(CamelModel):
    date: dt.date
    type: TransactionType
    description: str = Field(min_length=1)
    amount: float = Field(gt=0)
    approved: bool = False
    created_by: Optional[str] = None


class InventoryItemCreate(CamelModel):
    name: str = Field(min_length=1)
    quantity: float = Field(ge=0)
    unit: str = Field(min_length=1)
    min: float = Field(default=0, ge=0)
    updated_at: str

    @field_validator("updated_at")
    @classmethod
    def _updated_at_is_timestamp(cls, value: str) -> str:
        return _check_timestamp(value, "updated_at")


class InventoryReceiptCreate(CamelModel):
    item_id: str = Field(min_length=1)
    qty: float = Field(gt=0)
    unit_price: float = Field(gt=0)
    supplier: str = Field(min_length=1)
    date: dt.date
    approved: bool = False
    created_by: Optional[str] = None


class InventoryIssueCreate(CamelModel):
    item_id: str = Field(min_length=1)
    qty: float = Field(gt=0)
    unit_price: float = Field(gt=0)
    project: str = Field(min_length=1)
    date: dt.date
    approved: bool = False
    created_by: Optional[str] = None


class ProjectCreate(CamelModel):
    name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    floors: int = Field(gt=0)
    units: int = Field(gt=0)
    created_at: str

    @field_validator("created_at")
    @classmethod
    def _created_at_is_timestamp(cls, value: str) -> str:
        return _check_timestamp(value, "created_at")


class ProjectCostCreate(CamelModel):
    project_id: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    type: CostType
    amount: float = Field(gt=0)
    date: dt.date
    note: str = ""
    approved: bool = False
    created_by: Optional[str] = None


class ProjectSaleCreate(CamelModel):
    project_id: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    unit_no: str = Field(min_length=1)
    buyer: str = Field(min_length=1)
    price: float = Field(gt=0)
    date: dt.date
    terms: Optional[str] = None
    area: Optional[str] = None
    payment_method: Optional[str] = None
    approved: bool = False
    created_by: Optional[str] = None


# ==============================
# Results
# ==============================


class InventoryMovementResult(CamelModel):
    item: InventoryItem
    movement: Movement
    transaction: Transaction


class ProjectCostCreateResult(CamelModel):
    cost: ProjectCost
    transaction: Transaction


class ProjectSaleCreateResult(CamelModel):
    sale: ProjectSale
    transaction: Transaction


class AccountingSnapshot(CamelModel):
    transactions: List[Transaction] = Field(default_factory=list)
    items: List[InventoryItem] = Field(default_factory=list)
    movements: List[Movement] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    costs: List[ProjectCost] = Field(default_factory=list)
    sales: List[ProjectSale] = Field(default_factory=list)


class ProjectSnapshot(CamelModel):
    project: Project
    costs: List[ProjectCost] = Field(default_factory=list)
    sales: List[ProjectSale] = Field(default_factory=list)


class ProjectTotals(CamelModel):
    costs: float
    sales: float
    profit: float


class LedgerTotals(CamelModel):
    revenue: float
    expense: float
    net: float
    pending_approval: int
