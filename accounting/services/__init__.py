from accounting.services.memory_store import MemoryAccountingStore
from accounting.services.sql_store import SqlAccountingStore
from accounting.services.store import AccountingStore
from accounting.services.store_factory import build_store, get_store
from accounting.services.summary import ledger_totals, project_totals

__all__ = [
    "AccountingStore",
    "MemoryAccountingStore",
    "SqlAccountingStore",
    "build_store",
    "get_store",
    "ledger_totals",
    "project_totals",
]
