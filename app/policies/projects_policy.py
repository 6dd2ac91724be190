#/app/policies/projects_policy.py
from __future__ import annotations

from app.models.enums import UserRole
from app.models.project import Project
from app.policies.rbac import Principal


def is_project_owner(principal: Principal, project: Project) -> bool:
    return project.created_by == principal.user_id


def can_view_project_bids(principal: Principal, project: Project) -> bool:
    # Clients see bids on their own projects only; developers may browse any
    if principal.role == UserRole.client:
        return is_project_owner(principal, project)
    return principal.role == UserRole.developer
