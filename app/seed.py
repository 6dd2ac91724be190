# app/seed.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import create_access_token
from app.db.session import SessionLocal
from app.models.enums import UserRole
from app.models.project import Project, ProjectTechnology
from app.models.user import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"name": "Acme Client", "email": "client@acme.test", "role": UserRole.client.value, "company": "Acme"},
    {
        "name": "Dana Dev",
        "email": "dana@devs.test",
        "role": UserRole.developer.value,
        "skills": ["python", "fastapi"],
        "experience": 5,
    },
    {
        "name": "Lee Dev",
        "email": "lee@devs.test",
        "role": UserRole.developer.value,
        "skills": ["react", "node"],
        "experience": 3,
    },
]


def _get_or_create_user(db: Session, data: Dict) -> User:
    u = db.execute(select(User).where(User.email == data["email"])).scalar_one_or_none()
    if u:
        return u
    u = User(**data)
    db.add(u)
    db.flush()
    return u


def seed(db: Optional[Session] = None) -> Dict[str, str]:
    """
    Demo data: one client, two developers, one open project.
    Idempotent on user emails. Returns a bearer token per user email.
    """
    own_session = db is None
    db = db or SessionLocal()
    try:
        users = [_get_or_create_user(db, d) for d in DEMO_USERS]
        client = users[0]

        exists = db.execute(
            select(Project.id).where(Project.created_by == client.id)
        ).first()
        if not exists:
            db.add(
                Project(
                    title="Marketplace MVP",
                    description="Build a small marketplace API with search and payments.",
                    estimated_budget=Decimal("5000"),
                    created_by=client.id,
                    technologies=[
                        ProjectTechnology(name="python", position=0),
                        ProjectTechnology(name="postgres", position=1),
                    ],
                )
            )
        db.commit()

        tokens = {
            u.email: create_access_token(
                subject=str(u.id), claims={"role": u.role, "name": u.name}
            )
            for u in users
        }
        logger.info("seed complete", extra={"users": len(users)})
        return tokens
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    for email, token in seed().items():
        print(f"{email}: {token}")
