#app/models/enums.py
from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    client = "client"
    developer = "developer"


class ProjectStatus(str, Enum):
    open = "open"
    in_progress = "in_progress"
    completed = "completed"


class BidStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class BidDecision(str, Enum):
    # wire values accepted by PUT /bids/{bidId}/status
    accept = "accepted"
    reject = "rejected"
