# app/api/v1/projects.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.render import bid_resp, project_resp
from app.core.auth_deps import get_current_principal
from app.core.pagination import PageRequest, page_meta, page_params
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.bids import ProjectBidsResponse
from app.schemas.projects import (
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
)
from app.services.projects_service import ProjectsService

router = APIRouter(prefix="/projects")


def _split_tech(raw: Optional[List[str]]) -> List[str]:
    # accepts ?techStack=a&techStack=b as well as ?techStack=a,b
    out: List[str] = []
    for item in raw or []:
        out.extend(part.strip() for part in item.split(",") if part.strip())
    return out


@router.post("/create", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    p = ProjectsService().create(
        db,
        principal,
        title=body.title,
        description=body.description,
        tech_stack=body.techStack,
        estimated_budget=body.estimatedBudget,
        deadline=body.deadline,
    )
    return project_resp(p)


@router.get("/open", response_model=ProjectListResponse)
async def list_open_projects(
    techStack: Optional[List[str]] = Query(default=None),
    minBudget: Optional[Decimal] = Query(default=None, ge=0),
    maxBudget: Optional[Decimal] = Query(default=None, ge=0),
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows, total = ProjectsService().list_open(
        db,
        principal,
        page=page,
        tech_stack=_split_tech(techStack),
        min_budget=minBudget,
        max_budget=maxBudget,
    )
    return {
        "projects": [project_resp(p, creator_fields=("company",)) for p in rows],
        "pagination": page_meta(page, total, len(rows)),
    }


@router.get("/{projectId}/bids", response_model=ProjectBidsResponse)
async def list_project_bids(
    projectId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    p, bids = ProjectsService().list_bids(db, principal, project_id=projectId)
    return {
        "project": {"projectId": str(p.id), "title": p.title, "status": p.status},
        "bids": [bid_resp(b) for b in bids],
        "totalBids": len(bids),
    }
