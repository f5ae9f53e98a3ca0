from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Index, Integer, String

from accounting.database.base import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True)
    name = Column(String(191), nullable=False)
    location = Column(String(191), nullable=False)
    floors = Column(Integer, nullable=False)
    units = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True))


class ProjectCost(Base):
    __tablename__ = "project_costs"

    id = Column(String(36), primary_key=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False)
    type = Column(String(16), nullable=False)
    amount = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    note = Column(String(500))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_project_costs_project_date", "project_id", "date"),
    )


class ProjectSale(Base):
    __tablename__ = "project_sales"

    id = Column(String(36), primary_key=True)
    project_id = Column(String(36), ForeignKey("projects.id"), nullable=False)
    unit_no = Column(String(64), nullable=False)
    buyer = Column(String(191), nullable=False)
    price = Column(Float, nullable=False)
    date = Column(Date, nullable=False)
    terms = Column(String(1000))
    area = Column(String(64))
    payment_method = Column(String(64))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_project_sales_project_date", "project_id", "date"),
    )


__all__ = ["Project", "ProjectCost", "ProjectSale"]
