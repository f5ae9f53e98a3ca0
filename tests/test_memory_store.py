import itertools
import unittest

from store_cases import StoreContractCases, sequential_ids

from accounting.core.errors import ValidationError
from accounting.schemas.accounting import InventoryReceiptCreate, ProjectCostCreate, ProjectCreate
from accounting.services import MemoryAccountingStore


def ticking_clock():
    counter = itertools.count(1)
    return lambda: "2024-01-01T00:00:{:02d}+00:00".format(next(counter))


class MemoryAccountingStoreTest(StoreContractCases, unittest.TestCase):
    def make_store(self):
        return MemoryAccountingStore(id_factory=sequential_ids(), clock=ticking_clock(), locale="en")

    def test_uses_injected_ids_and_clock(self):
        transaction = self.add_transaction("2024-01-05")

        self.assertEqual(transaction.id, "id-1")
        self.assertEqual(transaction.created_at, "2024-01-01T00:00:01+00:00")

    def test_receipt_stamps_item_with_receipt_date(self):
        item = self.add_item(updated_at="2024-01-01T09:15:00")

        self.store.record_inventory_receipt(
            InventoryReceiptCreate(
                item_id=item.id, qty=1, unit_price=2, supplier="Acme", date="2024-03-09"
            )
        )

        self.assertEqual(self.store.items[item.id].updated_at, "2024-03-09T00:00:00+00:00")

    def test_stores_are_independent(self):
        other = MemoryAccountingStore(locale="en")
        self.add_item()

        self.assertEqual(other.snapshot().items, [])

    def test_arabic_descriptions_by_default(self):
        store = MemoryAccountingStore(id_factory=sequential_ids())
        project = store.create_project(
            ProjectCreate(name="Nile", location="Giza", floors=3, units=6, created_at="2024-01-01")
        )

        result = store.create_project_cost(
            ProjectCostCreate(
                project_id=project.id,
                project_name="برج النيل",
                type="construction",
                amount=100,
                date="2024-04-01",
            )
        )

        self.assertEqual(result.transaction.description, "تكلفة إنشاء لمشروع برج النيل")

    def test_rejects_unknown_locale(self):
        with self.assertRaises(ValidationError):
            MemoryAccountingStore(locale="fr")


if __name__ == "__main__":
    unittest.main()
