# app/policies/bid_policies.py
from __future__ import annotations

from typing import Optional

from app.core.errors import Forbidden
from app.models.project import Project
from app.policies.projects_policy import is_project_owner
from app.policies.rbac import ACTION_DECIDE_BID, Principal, require_action


def enforce_can_decide_bid(principal: Principal, project: Optional[Project]) -> None:
    """
    Only the owner of the bid's project may accept or reject it.
    A dangling bid (project gone) is treated the same as a foreign one.
    """
    require_action(principal, ACTION_DECIDE_BID)
    if project is None or not is_project_owner(principal, project):
        raise Forbidden("You can only update bids for your own projects.")
