import uuid

from app.models.enums import UserRole
from app.models.user import User
from app.policies.rbac import Principal
from app.services.users_service import UsersService

from conftest import make_user, principal_for


def test_unknown_caller_is_mirrored_from_claims(db):
    p = Principal(user_id=uuid.uuid4(), role=UserRole.developer, display_name="Token Dev")

    u = UsersService().ensure_mirrored(db, p)
    db.commit()

    assert u.id == p.user_id
    assert u.name == "Token Dev"
    assert u.role == UserRole.developer.value
    assert u.email is None
    assert u.skills == []


def test_known_caller_keeps_profile(db):
    dev = make_user(db, UserRole.developer, "Dev", skills=["go"], experience=3)

    u = UsersService().ensure_mirrored(db, principal_for(dev))

    assert u.id == dev.id
    assert u.skills == ["go"]
    assert db.query(User).count() == 1


def test_changed_claims_refresh_name_and_role(db):
    dev = make_user(db, UserRole.developer, "Old Name")
    p = Principal(user_id=dev.id, role=UserRole.client, display_name="New Name")

    UsersService().ensure_mirrored(db, p)
    db.commit()
    db.expire_all()

    u = db.get(User, dev.id)
    assert u.name == "New Name"
    assert u.role == UserRole.client.value
