from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Query

from app.core.config import get_settings
from app.core.errors import InvalidInput


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1),
) -> PageRequest:
    settings = get_settings()
    if limit is None:
        limit = settings.default_page_size
    if limit > settings.max_page_size:
        raise InvalidInput(f"limit must not exceed {settings.max_page_size}.")
    return PageRequest(page=page, limit=limit)


def page_meta(req: PageRequest, total: int, returned: int) -> Dict[str, Any]:
    return {
        "currentPage": req.page,
        "totalPages": math.ceil(total / req.limit) if total else 0,
        "total": total,
        "hasNext": req.offset + returned < total,
        "hasPrev": req.page > 1,
    }
