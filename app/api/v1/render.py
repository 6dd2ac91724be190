# app/api/v1/render.py
from __future__ import annotations

from typing import Any, Dict, Optional

from app.models.bid import Bid
from app.models.project import Project
from app.models.user import User


def _iso(dt):
    return dt.isoformat() if dt else None


def user_ref(u: Optional[User], *fields: str) -> Optional[Dict[str, Any]]:
    """
    Populated user reference; `fields` picks which profile attributes
    the caller gets to see beyond id and name.
    """
    if u is None:
        return None
    out: Dict[str, Any] = {"userId": str(u.id), "name": u.name}
    for f in fields:
        out[f] = getattr(u, f)
    return out


def project_resp(p: Project, *, creator_fields=("email", "company")) -> dict:
    return {
        "projectId": str(p.id),
        "title": p.title,
        "description": p.description,
        "techStack": p.tech_stack,
        "estimatedBudget": float(p.estimated_budget),
        "status": p.status,
        "createdBy": user_ref(p.creator, *creator_fields),
        "assignedTo": user_ref(p.assignee, "email", "skills"),
        "deadline": _iso(p.deadline),
        "createdAtIso": _iso(p.created_at),
        "updatedAtIso": _iso(p.updated_at),
    }


def project_summary(p: Optional[Project], *, with_description: bool = False) -> Optional[dict]:
    if p is None:
        return None
    out = {
        "projectId": str(p.id),
        "title": p.title,
        "estimatedBudget": float(p.estimated_budget),
        "status": p.status,
    }
    if with_description:
        out["description"] = p.description
        out["createdBy"] = user_ref(p.creator, "company")
    return out


def bid_resp(
    b: Bid,
    *,
    with_project: bool = False,
    with_project_description: bool = False,
    with_developer: bool = True,
) -> dict:
    return {
        "bidId": str(b.id),
        "projectId": str(b.project_id),
        "developerId": str(b.developer_id),
        "bidAmount": float(b.bid_amount),
        "message": b.message,
        "status": b.status,
        "estimatedDelivery": _iso(b.estimated_delivery),
        "createdAtIso": _iso(b.created_at),
        "updatedAtIso": _iso(b.updated_at),
        "project": (
            project_summary(b.project, with_description=with_project_description)
            if with_project
            else None
        ),
        "developer": (
            user_ref(b.developer, "skills", "experience") if with_developer else None
        ),
    }
