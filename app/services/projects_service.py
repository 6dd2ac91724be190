# app/services/projects_service.py
from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.core.errors import Forbidden, InvalidInput, NotFound
from app.core.pagination import PageRequest
from app.models.bid import Bid
from app.models.enums import ProjectStatus
from app.models.project import Project, ProjectTechnology
from app.policies.projects_policy import can_view_project_bids
from app.policies.rbac import (
    ACTION_BROWSE_OPEN_PROJECTS,
    ACTION_CREATE_PROJECT,
    ACTION_VIEW_PROJECT_BIDS,
    Principal,
    require_action,
)
from app.services.users_service import UsersService

logger = logging.getLogger(__name__)


class ProjectsService:
    def create(
        self,
        db: Session,
        principal: Principal,
        *,
        title: str,
        description: str,
        tech_stack: Sequence[str],
        estimated_budget: Decimal,
        deadline: Optional[date] = None,
    ) -> Project:
        require_action(principal, ACTION_CREATE_PROJECT)
        if not tech_stack:
            raise InvalidInput("At least one technology is required.")
        UsersService().ensure_mirrored(db, principal)

        p = Project(
            title=title,
            description=description,
            estimated_budget=estimated_budget,
            status=ProjectStatus.open.value,
            created_by=principal.user_id,
            assigned_to=None,
            deadline=deadline,
            technologies=[
                ProjectTechnology(name=name, position=i)
                for i, name in enumerate(tech_stack)
            ],
        )
        db.add(p)
        db.commit()

        logger.info(
            "project created",
            extra={"project_id": str(p.id), "created_by": str(principal.user_id)},
        )
        return self.get(db, project_id=p.id)

    def get(self, db: Session, *, project_id: uuid.UUID) -> Optional[Project]:
        return db.execute(
            select(Project)
            .options(selectinload(Project.creator), selectinload(Project.assignee))
            .where(Project.id == project_id)
        ).scalar_one_or_none()

    def list_open(
        self,
        db: Session,
        principal: Principal,
        *,
        page: PageRequest,
        tech_stack: Optional[List[str]] = None,
        min_budget: Optional[Decimal] = None,
        max_budget: Optional[Decimal] = None,
    ) -> Tuple[List[Project], int]:
        require_action(principal, ACTION_BROWSE_OPEN_PROJECTS)

        if min_budget is not None and max_budget is not None and min_budget > max_budget:
            raise InvalidInput("minBudget must not exceed maxBudget.")

        stmt = select(Project).where(Project.status == ProjectStatus.open.value)

        names = [t.strip() for t in (tech_stack or []) if t and t.strip()]
        if names:
            # membership: any of the requested technologies
            stmt = stmt.where(Project.technologies.any(ProjectTechnology.name.in_(names)))
        if min_budget is not None:
            stmt = stmt.where(Project.estimated_budget >= min_budget)
        if max_budget is not None:
            stmt = stmt.where(Project.estimated_budget <= max_budget)

        total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        rows = (
            db.execute(
                stmt.options(selectinload(Project.creator))
                .order_by(Project.created_at.desc(), Project.id)
                .offset(page.offset)
                .limit(page.limit)
            )
            .scalars()
            .all()
        )
        return list(rows), total

    def list_bids(
        self,
        db: Session,
        principal: Principal,
        *,
        project_id: uuid.UUID,
    ) -> Tuple[Project, List[Bid]]:
        require_action(principal, ACTION_VIEW_PROJECT_BIDS)

        p = self.get(db, project_id=project_id)
        if not p:
            raise NotFound("Project not found.")

        if not can_view_project_bids(principal, p):
            raise Forbidden("Access denied. You can only view bids for your own projects.")

        bids = (
            db.execute(
                select(Bid)
                .options(selectinload(Bid.developer))
                .where(Bid.project_id == project_id)
                .order_by(Bid.created_at.desc(), Bid.id)
            )
            .scalars()
            .all()
        )
        return p, list(bids)
