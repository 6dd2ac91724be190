# app/services/award_service.py
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.core.errors import Conflict, InvalidInput, NotFound
from app.models.bid import Bid
from app.models.enums import BidDecision, BidStatus, ProjectStatus
from app.models.project import Project
from app.policies.bid_policies import enforce_can_decide_bid
from app.policies.rbac import ACTION_DECIDE_BID, Principal, require_action
from app.services.bids_service import BidsService

logger = logging.getLogger(__name__)


class AwardService:
    """
    Moves a bid from pending to accepted/rejected.

    Invariants kept on every commit:
    - at most one accepted bid per project
    - an accepted bid implies project.status == in_progress and
      project.assigned_to == bid.developer_id
    - siblings still pending at acceptance time end up rejected

    All writes of one decision share a single transaction. The project row is
    locked (FOR UPDATE) and every write is conditional on the state it
    expects, so a concurrent acceptance that loses the race fails with
    Conflict instead of committing a second winner.
    """

    # ─────────────────────────────────────────────
    # GUARDED WRITES
    # ─────────────────────────────────────────────

    def _claim_project(self, db: Session, *, project_id: uuid.UUID, developer_id: uuid.UUID) -> None:
        res = db.execute(
            update(Project)
            .where(
                Project.id == project_id,
                Project.status == ProjectStatus.open.value,
            )
            .values(status=ProjectStatus.in_progress.value, assigned_to=developer_id)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            raise Conflict("Project is no longer open; another bid has already been accepted.")

    def _finalize_bid(self, db: Session, *, bid_id: uuid.UUID, status: BidStatus) -> None:
        res = db.execute(
            update(Bid)
            .where(Bid.id == bid_id, Bid.status == BidStatus.pending.value)
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            raise Conflict("Bid has already been decided.")

    def _reject_pending_siblings(self, db: Session, *, project_id: uuid.UUID, bid_id: uuid.UUID) -> int:
        res = db.execute(
            update(Bid)
            .where(
                Bid.project_id == project_id,
                Bid.id != bid_id,
                Bid.status == BidStatus.pending.value,
            )
            .values(status=BidStatus.rejected.value)
            .execution_options(synchronize_session=False)
        )
        return res.rowcount

    # ─────────────────────────────────────────────
    # WORKFLOW
    # ─────────────────────────────────────────────

    def decide(
        self,
        db: Session,
        principal: Principal,
        *,
        bid_id: uuid.UUID,
        decision: str,
    ) -> Bid:
        require_action(principal, ACTION_DECIDE_BID)

        try:
            decision_enum = BidDecision(decision)
        except ValueError:
            raise InvalidInput('Status must be either "accepted" or "rejected".')

        bid = db.get(Bid, bid_id)
        if bid is None:
            raise NotFound("Bid not found.")

        try:
            project = db.execute(
                select(Project).where(Project.id == bid.project_id).with_for_update()
            ).scalar_one_or_none()
            enforce_can_decide_bid(principal, project)

            # re-read under the project lock; the first read may predate a competing decision
            db.refresh(bid)
            if bid.status != BidStatus.pending.value:
                raise Conflict(f"Bid has already been {bid.status}.")

            rejected = 0
            if decision_enum == BidDecision.accept:
                self._claim_project(db, project_id=project.id, developer_id=bid.developer_id)
                self._finalize_bid(db, bid_id=bid.id, status=BidStatus.accepted)
                rejected = self._reject_pending_siblings(db, project_id=project.id, bid_id=bid.id)
            else:
                self._finalize_bid(db, bid_id=bid.id, status=BidStatus.rejected)

            db.commit()
        except Conflict:
            db.rollback()
            logger.warning(
                "bid decision conflict",
                extra={"bid_id": str(bid_id), "decision": decision_enum.value},
            )
            raise
        except Exception:
            db.rollback()
            raise

        logger.info(
            "bid decided",
            extra={
                "bid_id": str(bid_id),
                "project_id": str(bid.project_id),
                "decision": decision_enum.value,
                "siblings_rejected": rejected,
                "decided_by": str(principal.user_id),
            },
        )
        return BidsService().get(db, bid_id=bid_id)
