import os

# settings are read once (lru_cache); they must be in place before any app import
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

# FORCE model registration
import app.models  # noqa: E402,F401

from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import build_engine, get_db  # noqa: E402
from app.main import create_app  # noqa: E402
from app.models.bid import Bid  # noqa: E402
from app.models.enums import BidStatus, ProjectStatus, UserRole  # noqa: E402
from app.models.project import Project, ProjectTechnology  # noqa: E402
from app.models.user import User  # noqa: E402
from app.policies.rbac import Principal  # noqa: E402

# one shared in-memory connection; FK enforcement comes from build_engine
engine = build_engine("sqlite+pysqlite://", poolclass=StaticPool)


SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    app = create_app()

    def override_get_db():
        # same session as the test so assertions see committed state
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------
# factories
# ---------------------------------------------------------------------


def make_user(db, role: UserRole, name: str = None, **profile) -> User:
    n = name or f"{role.value}-{os.urandom(3).hex()}"
    u = User(
        name=n,
        email=f"{n.lower().replace(' ', '.')}@example.test",
        role=role.value,
        skills=profile.pop("skills", []),
        **profile,
    )
    db.add(u)
    db.commit()
    return u


def make_project(
    db,
    owner: User,
    *,
    title: str = "Build an API",
    budget: str = "1000",
    tech=("python",),
    status: ProjectStatus = ProjectStatus.open,
    assigned_to: User = None,
) -> Project:
    p = Project(
        title=title,
        description="A project description long enough.",
        estimated_budget=Decimal(budget),
        status=status.value,
        created_by=owner.id,
        assigned_to=assigned_to.id if assigned_to else None,
        technologies=[ProjectTechnology(name=t, position=i) for i, t in enumerate(tech)],
    )
    db.add(p)
    db.commit()
    return p


def make_bid(
    db,
    project: Project,
    developer: User,
    *,
    amount: str = "900",
    status: BidStatus = BidStatus.pending,
) -> Bid:
    b = Bid(
        project_id=project.id,
        developer_id=developer.id,
        bid_amount=Decimal(amount),
        message="I can deliver this within a month.",
        status=status.value,
    )
    db.add(b)
    db.commit()
    return b


def principal_for(user: User) -> Principal:
    return Principal(user_id=user.id, role=UserRole(user.role), display_name=user.name)


def auth_headers(user: User) -> dict:
    token = create_access_token(
        subject=str(user.id), claims={"role": user.role, "name": user.name}
    )
    return {"Authorization": f"Bearer {token}"}


def assert_award_invariant(db, project_id) -> None:
    """At most one accepted bid; an accepted bid means in_progress + assigned."""
    db.expire_all()
    project = db.get(Project, project_id)
    accepted = (
        db.query(Bid)
        .filter(Bid.project_id == project_id, Bid.status == BidStatus.accepted.value)
        .all()
    )
    assert len(accepted) <= 1
    if accepted:
        assert project.status == ProjectStatus.in_progress.value
        assert project.assigned_to == accepted[0].developer_id
