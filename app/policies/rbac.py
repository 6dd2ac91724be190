#app/policies/rbac.py
from __future__ import annotations
import uuid
from dataclasses import dataclass
from typing import Set

from app.core.errors import Forbidden
from app.models.enums import UserRole


@dataclass(frozen=True)
class Principal:
    user_id: uuid.UUID
    role: UserRole
    display_name: str


# --- Core action constants ---
ACTION_CREATE_PROJECT = "CREATE_PROJECT"
ACTION_BROWSE_OPEN_PROJECTS = "BROWSE_OPEN_PROJECTS"
ACTION_VIEW_PROJECT_BIDS = "VIEW_PROJECT_BIDS"
ACTION_PLACE_BID = "PLACE_BID"
ACTION_LIST_MY_BIDS = "LIST_MY_BIDS"
ACTION_DECIDE_BID = "DECIDE_BID"


def allowed_actions(role: UserRole) -> Set[str]:
    """
    Pure RBAC: which actions a role may attempt.
    Ownership checks live in the per-entity policy modules.
    """

    if role == UserRole.client:
        return {ACTION_CREATE_PROJECT, ACTION_VIEW_PROJECT_BIDS, ACTION_DECIDE_BID}

    if role == UserRole.developer:
        return {
            ACTION_BROWSE_OPEN_PROJECTS,
            ACTION_VIEW_PROJECT_BIDS,
            ACTION_PLACE_BID,
            ACTION_LIST_MY_BIDS,
        }

    return set()


def require_action(principal: Principal, action: str) -> None:
    if action not in allowed_actions(principal.role):
        raise Forbidden(
            f"Role {principal.role.value} not permitted for action {action}."
        )
