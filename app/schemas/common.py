from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class UserRef(BaseModel):
    """Display-only projection of a user; fields depend on the context."""

    userId: str
    name: str
    email: Optional[str] = None
    company: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[int] = None


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    total: int
    hasNext: bool
    hasPrev: bool
