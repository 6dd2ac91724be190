#app/services/bids_service.py
from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.errors import Conflict, InvalidInput, InvalidState, NotFound
from app.core.pagination import PageRequest
from app.models.bid import Bid
from app.models.enums import BidStatus, ProjectStatus
from app.models.project import Project
from app.policies.rbac import (
    ACTION_LIST_MY_BIDS,
    ACTION_PLACE_BID,
    Principal,
    require_action,
)
from app.services.users_service import UsersService

logger = logging.getLogger(__name__)


def _bid_exists(db: Session, project_id: uuid.UUID, developer_id: uuid.UUID) -> bool:
    return (
        db.execute(
            select(Bid.id).where(
                Bid.project_id == project_id,
                Bid.developer_id == developer_id,
            )
        ).first()
        is not None
    )


class BidsService:
    def get(self, db: Session, *, bid_id: uuid.UUID) -> Optional[Bid]:
        return db.execute(
            select(Bid)
            .options(
                selectinload(Bid.developer),
                selectinload(Bid.project).selectinload(Project.creator),
            )
            .where(Bid.id == bid_id)
        ).scalar_one_or_none()

    # -----------------------------------------------------------------
    # placement
    # -----------------------------------------------------------------

    def place(
        self,
        db: Session,
        principal: Principal,
        *,
        project_id: uuid.UUID,
        bid_amount: Decimal,
        message: str,
        estimated_delivery: Optional[date] = None,
    ) -> Bid:
        """
        Creates a pending bid on an open project.

        One bid per developer per project is enforced by the
        uq_bid_project_developer constraint, not by a prior lookup.
        """
        require_action(principal, ACTION_PLACE_BID)
        UsersService().ensure_mirrored(db, principal)

        # shared lock: an acceptance in flight on this project finishes first
        project = db.execute(
            select(Project).where(Project.id == project_id).with_for_update(read=True)
        ).scalar_one_or_none()
        if not project:
            db.rollback()
            raise NotFound("Project not found.")

        if project.status != ProjectStatus.open.value:
            db.rollback()
            raise InvalidState("Project is not open for bidding.")

        bid = Bid(
            project_id=project_id,
            developer_id=principal.user_id,
            bid_amount=bid_amount,
            message=message,
            status=BidStatus.pending.value,
            estimated_delivery=estimated_delivery,
        )
        db.add(bid)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if _bid_exists(db, project_id, principal.user_id):
                logger.warning(
                    "duplicate bid rejected",
                    extra={"project_id": str(project_id), "developer_id": str(principal.user_id)},
                )
                raise Conflict("You have already placed a bid on this project.")
            raise

        logger.info(
            "bid placed",
            extra={
                "bid_id": str(bid.id),
                "project_id": str(project_id),
                "developer_id": str(principal.user_id),
            },
        )
        return self.get(db, bid_id=bid.id)

    # -----------------------------------------------------------------
    # reads
    # -----------------------------------------------------------------

    def list_mine(
        self,
        db: Session,
        principal: Principal,
        *,
        page: PageRequest,
        status: Optional[str] = None,
    ) -> Tuple[List[Bid], int]:
        require_action(principal, ACTION_LIST_MY_BIDS)

        stmt = select(Bid).where(Bid.developer_id == principal.user_id)
        if status:
            try:
                status_enum = BidStatus(status)
            except ValueError:
                raise InvalidInput(
                    "status must be one of: "
                    + ", ".join(s.value for s in BidStatus)
                )
            stmt = stmt.where(Bid.status == status_enum.value)

        total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        rows = (
            db.execute(
                stmt.options(selectinload(Bid.project).selectinload(Project.creator))
                .order_by(Bid.created_at.desc(), Bid.id)
                .offset(page.offset)
                .limit(page.limit)
            )
            .scalars()
            .all()
        )
        return list(rows), total
