from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Index, String

from accounting.database.base import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(String(36), primary_key=True)
    name = Column(String(191), nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(32), nullable=False)
    min = Column(Float, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("idx_inventory_items_updated", "updated_at"),
    )


class InventoryMovement(Base):
    __tablename__ = "inventory_movements"

    id = Column(String(36), primary_key=True)
    item_id = Column(String(36), ForeignKey("inventory_items.id"), nullable=False)
    kind = Column(String(3), nullable=False)
    qty = Column(Float, nullable=False)
    unit_price = Column(Float, nullable=False)
    total = Column(Float)
    party = Column(String(191), nullable=False)
    date = Column(Date, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_inventory_movements_item", "item_id"),
        Index("idx_inventory_movements_date", "date", "created_at"),
    )


__all__ = ["InventoryItem", "InventoryMovement"]
