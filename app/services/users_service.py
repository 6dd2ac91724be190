# app/services/users_service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.policies.rbac import Principal

logger = logging.getLogger(__name__)


class UsersService:
    def ensure_mirrored(self, db: Session, principal: Principal) -> User:
        """
        Makes sure the local users row exists for a token-verified caller,
        creating it from the token claims (sub, role, name) on first sight
        and refreshing role/name when they changed upstream.

        Must run before any other write of the caller's transaction: on a
        concurrent first insert the session is rolled back and re-read.
        """
        u = db.get(User, principal.user_id)
        if u is None:
            u = User(
                id=principal.user_id,
                name=principal.display_name,
                role=principal.role.value,
            )
            db.add(u)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                u = db.get(User, principal.user_id)
                if u is None:
                    raise
            else:
                logger.info(
                    "user mirrored from token",
                    extra={"user_id": str(principal.user_id), "role": principal.role.value},
                )
            return u

        if u.role != principal.role.value:
            u.role = principal.role.value
        if principal.display_name != "Unknown" and u.name != principal.display_name:
            u.name = principal.display_name
        return u
