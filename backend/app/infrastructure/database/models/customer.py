"""SQLAlchemy ORM model for the Customer entity."""

from datetime import date, datetime, timezone

from sqlalchemy import BigInteger, Date, DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class CustomerModel(Base):
    """ORM model — maps to the 'customers' table."""

    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    member_number: Mapped[int] = mapped_column(BigInteger, nullable=False)
    interests: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("member_number", name="uq_customers_member_number"),
        Index("ix_customers_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<CustomerModel(id={self.id}, "
            f"member_number={self.member_number}, name='{self.name}')>"
        )
