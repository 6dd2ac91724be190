# app/api/v1/bids.py
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.render import bid_resp
from app.core.auth_deps import get_current_principal
from app.core.pagination import PageRequest, page_meta, page_params
from app.db.session import get_db
from app.policies.rbac import Principal
from app.schemas.bids import (
    BidPlaceRequest,
    BidResponse,
    BidStatusUpdateRequest,
    MyBidsResponse,
)
from app.services.award_service import AwardService
from app.services.bids_service import BidsService

router = APIRouter(prefix="/bids")


# ---------------------------------------------------------------------
# POST /bids/place  (Developer)
# ---------------------------------------------------------------------


@router.post("/place", response_model=BidResponse, status_code=201)
async def place_bid(
    body: BidPlaceRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    bid = BidsService().place(
        db,
        principal,
        project_id=body.projectId,
        bid_amount=body.bidAmount,
        message=body.message,
        estimated_delivery=body.estimatedDelivery,
    )
    return bid_resp(bid, with_project=True)


# ---------------------------------------------------------------------
# GET /bids/my  (Developer)
# ---------------------------------------------------------------------


@router.get("/my", response_model=MyBidsResponse)
async def list_my_bids(
    status: Optional[str] = Query(default=None),
    page: PageRequest = Depends(page_params),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows, total = BidsService().list_mine(db, principal, page=page, status=status)
    return {
        "bids": [
            bid_resp(b, with_project=True, with_project_description=True, with_developer=False)
            for b in rows
        ],
        "pagination": page_meta(page, total, len(rows)),
    }


# ---------------------------------------------------------------------
# PUT /bids/{bidId}/status  (Project owner)
# ---------------------------------------------------------------------


@router.put("/{bidId}/status", response_model=BidResponse)
async def update_bid_status(
    bidId: uuid.UUID,
    body: BidStatusUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    bid = AwardService().decide(db, principal, bid_id=bidId, decision=body.status)
    return bid_resp(bid)
