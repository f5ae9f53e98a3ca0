from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, Date, DateTime, Float, Index, String

from accounting.database.base import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True)
    date = Column(Date, nullable=False)
    type = Column(String(16), nullable=False)
    description = Column(String(500), nullable=False)
    amount = Column(Float, nullable=False)
    approved = Column(Boolean, nullable=False, default=False)
    created_by = Column(String(36))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_transactions_date_created", "date", "created_at"),
    )


__all__ = ["Transaction"]
