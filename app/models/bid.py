#app/models/bid.py
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.enums import BidStatus


class Bid(Base):
    __tablename__ = "bids"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    developer_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )

    bid_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    message: Mapped[str] = mapped_column(String(500), nullable=False)

    # pending -> accepted | rejected, exactly once
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=BidStatus.pending.value,
        server_default=text(f"'{BidStatus.pending.value}'"),
    )

    estimated_delivery: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    project = relationship("Project", back_populates="bids")
    developer = relationship("User", foreign_keys=[developer_id])

    __table_args__ = (
        UniqueConstraint("project_id", "developer_id", name="uq_bid_project_developer"),
        Index("ix_bids_project_created", "project_id", "created_at"),
        Index("ix_bids_developer_created", "developer_id", "created_at"),
        # at most one accepted bid per project
        Index(
            "uq_bids_one_accepted_per_project",
            "project_id",
            unique=True,
            postgresql_where=text("status = 'accepted'"),
            sqlite_where=text("status = 'accepted'"),
        ),
    )
