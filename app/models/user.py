# app/models/user.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class User(Base):
    """
    Local mirror of an identity-service account.
    Only referenced and displayed here; never authenticated against.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # not carried by the token; set only for seeded or synced accounts
    email: Mapped[Optional[str]] = mapped_column(String(254), nullable=True, unique=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    # client profile
    company: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # developer profile
    skills: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    experience: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
