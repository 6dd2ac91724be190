#app/schemas/bids.py
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import BidStatus, ProjectStatus
from app.schemas.common import Pagination, UserRef


class BidPlaceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    projectId: uuid.UUID
    bidAmount: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    message: str = Field(..., min_length=10, max_length=500)
    estimatedDelivery: Optional[date] = None


class BidStatusUpdateRequest(BaseModel):
    # Kept as a plain string: the award workflow owns the accepted/rejected check
    status: str = Field(..., description="accepted | rejected")


class ProjectSummary(BaseModel):
    projectId: str
    title: str
    description: Optional[str] = None
    estimatedBudget: float
    status: ProjectStatus
    createdBy: Optional[UserRef] = None


class BidResponse(BaseModel):
    bidId: str
    projectId: str
    developerId: str
    bidAmount: float
    message: str
    status: BidStatus
    estimatedDelivery: Optional[str] = None
    createdAtIso: Optional[str] = None
    updatedAtIso: Optional[str] = None

    # populated references
    project: Optional[ProjectSummary] = None
    developer: Optional[UserRef] = None


class MyBidsResponse(BaseModel):
    bids: List[BidResponse]
    pagination: Pagination


class ProjectBidsProject(BaseModel):
    projectId: str
    title: str
    status: ProjectStatus


class ProjectBidsResponse(BaseModel):
    project: ProjectBidsProject
    bids: List[BidResponse]
    totalBids: int
