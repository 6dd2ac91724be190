#app/schemas/projects.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import ProjectStatus
from app.schemas.common import Pagination, UserRef


# -----------------------
# Request models
# -----------------------


class ProjectCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    techStack: List[str] = Field(..., min_length=1)
    estimatedBudget: Decimal = Field(..., ge=0, max_digits=14, decimal_places=2)
    deadline: Optional[date] = None

    @field_validator("techStack")
    @classmethod
    def _normalize_tech_stack(cls, v: List[str]) -> List[str]:
        seen: List[str] = []
        for item in v:
            name = item.strip()
            if not name:
                raise ValueError("techStack entries must be non-empty")
            if len(name) > 64:
                raise ValueError("techStack entries must be at most 64 characters")
            if name not in seen:
                seen.append(name)
        return seen


# -----------------------
# Response models
# -----------------------


class ProjectResponse(BaseModel):
    projectId: str
    title: str
    description: str
    techStack: List[str]
    estimatedBudget: float
    status: ProjectStatus

    createdBy: Optional[UserRef] = None
    assignedTo: Optional[UserRef] = None

    deadline: Optional[str] = None
    createdAtIso: Optional[str] = None
    updatedAtIso: Optional[str] = None


class ProjectListResponse(BaseModel):
    projects: List[ProjectResponse]
    pagination: Pagination
