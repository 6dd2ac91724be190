import uuid

from app.core.config import get_settings
from app.core.security import create_access_token
from app.models.bid import Bid
from app.models.enums import BidStatus, ProjectStatus, UserRole
from app.models.project import Project
from app.models.user import User

from conftest import auth_headers, make_bid, make_project, make_user

API = get_settings().api_prefix


def _bid_body(project_id, **overrides):
    body = {
        "projectId": str(project_id),
        "bidAmount": 1200.5,
        "message": "I have shipped three similar APIs.",
        "estimatedDelivery": "2030-05-01",
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------
# POST /bids/place
# ---------------------------------------------------------------------


def test_place_bid_returns_201_with_project_summary(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    dev = make_user(db, UserRole.developer, "Dev", skills=["python"], experience=6)
    project = make_project(db, owner, title="Realtime chat")

    r = client.post(f"{API}/bids/place", json=_bid_body(project.id), headers=auth_headers(dev))

    assert r.status_code == 201, r.text
    data = r.json()
    assert data["status"] == "pending"
    assert data["bidAmount"] == 1200.5
    assert data["estimatedDelivery"] == "2030-05-01"
    assert data["project"]["title"] == "Realtime chat"
    assert data["project"]["status"] == "open"
    assert data["developer"] == {
        "userId": str(dev.id),
        "name": "Dev",
        "email": None,
        "company": None,
        "skills": ["python"],
        "experience": 6,
    }


def test_place_bid_duplicate_is_409(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    dev = make_user(db, UserRole.developer, "Dev")
    project = make_project(db, owner)

    first = client.post(f"{API}/bids/place", json=_bid_body(project.id), headers=auth_headers(dev))
    assert first.status_code == 201

    again = client.post(
        f"{API}/bids/place", json=_bid_body(project.id, bidAmount=10), headers=auth_headers(dev)
    )
    assert again.status_code == 409
    assert db.query(Bid).count() == 1


def test_place_bid_missing_project_is_404(client, db):
    dev = make_user(db, UserRole.developer, "Dev")

    r = client.post(f"{API}/bids/place", json=_bid_body(uuid.uuid4()), headers=auth_headers(dev))
    assert r.status_code == 404
    assert r.json()["detail"] == "Project not found."


def test_place_bid_on_closed_project_is_400(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    dev = make_user(db, UserRole.developer, "Dev")
    project = make_project(db, owner, status=ProjectStatus.in_progress)

    r = client.post(f"{API}/bids/place", json=_bid_body(project.id), headers=auth_headers(dev))
    assert r.status_code == 400
    assert r.json()["detail"] == "Project is not open for bidding."


def test_place_bid_validation_failures_are_400(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    dev = make_user(db, UserRole.developer, "Dev")
    project = make_project(db, owner)
    headers = auth_headers(dev)

    for bad in (
        _bid_body(project.id, message="too short"),
        _bid_body(project.id, bidAmount=-1),
        _bid_body(project.id, projectId="not-a-uuid"),
        _bid_body(project.id, estimatedDelivery="someday"),
    ):
        r = client.post(f"{API}/bids/place", json=bad, headers=headers)
        assert r.status_code == 400, bad
        assert r.json()["detail"] == "Validation failed"

    assert db.query(Bid).count() == 0


def test_place_bid_as_client_is_403(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    project = make_project(db, owner)

    r = client.post(f"{API}/bids/place", json=_bid_body(project.id), headers=auth_headers(owner))
    assert r.status_code == 403


def test_invalid_token_is_401(client, db):
    r = client.get(f"{API}/bids/my", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


# ---------------------------------------------------------------------
# GET /bids/my
# ---------------------------------------------------------------------


def test_my_bids_lists_only_callers_bids(client, db):
    owner = make_user(db, UserRole.client, "Owner", company="Acme")
    dev = make_user(db, UserRole.developer, "Dev")
    other = make_user(db, UserRole.developer, "Other")
    p1 = make_project(db, owner, title="One")
    p2 = make_project(db, owner, title="Two")
    make_bid(db, p1, dev)
    make_bid(db, p2, dev, status=BidStatus.rejected)
    make_bid(db, p1, other)

    r = client.get(f"{API}/bids/my", headers=auth_headers(dev))
    assert r.status_code == 200
    data = r.json()
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 1,
        "total": 2,
        "hasNext": False,
        "hasPrev": False,
    }
    assert {b["project"]["title"] for b in data["bids"]} == {"One", "Two"}
    assert data["bids"][0]["project"]["createdBy"]["company"] == "Acme"

    r = client.get(f"{API}/bids/my?status=rejected&limit=1", headers=auth_headers(dev))
    data = r.json()
    assert [b["project"]["title"] for b in data["bids"]] == ["Two"]
    assert data["pagination"]["total"] == 1


def test_my_bids_bad_status_and_limit_are_400(client, db):
    dev = make_user(db, UserRole.developer, "Dev")

    assert client.get(f"{API}/bids/my?status=won", headers=auth_headers(dev)).status_code == 400
    assert client.get(f"{API}/bids/my?limit=100000", headers=auth_headers(dev)).status_code == 400
    assert client.get(f"{API}/bids/my?page=0", headers=auth_headers(dev)).status_code == 400


# ---------------------------------------------------------------------
# PUT /bids/{bidId}/status
# ---------------------------------------------------------------------


def test_accept_bid_over_http(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    winner = make_user(db, UserRole.developer, "Winner", skills=["go"])
    loser = make_user(db, UserRole.developer, "Loser")
    project = make_project(db, owner)
    b1 = make_bid(db, project, winner)
    b2 = make_bid(db, project, loser)

    r = client.put(
        f"{API}/bids/{b1.id}/status", json={"status": "accepted"}, headers=auth_headers(owner)
    )

    assert r.status_code == 200, r.text
    data = r.json()
    assert data["bidId"] == str(b1.id)
    assert data["status"] == "accepted"
    assert data["developer"]["name"] == "Winner"
    assert data["developer"]["skills"] == ["go"]

    db.expire_all()
    assert db.get(Bid, b2.id).status == BidStatus.rejected.value
    p = db.get(Project, project.id)
    assert p.status == ProjectStatus.in_progress.value
    assert p.assigned_to == winner.id


def test_reject_bid_over_http(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    dev = make_user(db, UserRole.developer, "Dev")
    project = make_project(db, owner)
    bid = make_bid(db, project, dev)

    r = client.put(
        f"{API}/bids/{bid.id}/status", json={"status": "rejected"}, headers=auth_headers(owner)
    )
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"

    db.expire_all()
    assert db.get(Project, project.id).status == ProjectStatus.open.value


def test_update_status_error_codes(client, db):
    owner = make_user(db, UserRole.client, "Owner")
    stranger = make_user(db, UserRole.client, "Stranger")
    dev = make_user(db, UserRole.developer, "Dev")
    project = make_project(db, owner)
    bid = make_bid(db, project, dev)
    url = f"{API}/bids/{bid.id}/status"

    r = client.put(url, json={"status": "maybe"}, headers=auth_headers(owner))
    assert r.status_code == 400
    assert r.json()["detail"] == 'Status must be either "accepted" or "rejected".'

    assert client.put(url, json={"status": "accepted"}, headers=auth_headers(stranger)).status_code == 403
    assert client.put(url, json={"status": "accepted"}, headers=auth_headers(dev)).status_code == 403

    missing = client.put(
        f"{API}/bids/{uuid.uuid4()}/status", json={"status": "accepted"}, headers=auth_headers(owner)
    )
    assert missing.status_code == 404

    assert client.put(url, json={"status": "accepted"}, headers=auth_headers(owner)).status_code == 200
    assert client.put(url, json={"status": "rejected"}, headers=auth_headers(owner)).status_code == 409

    db.expire_all()
    assert db.get(Bid, bid.id).status == BidStatus.accepted.value


def test_place_bid_by_developer_without_local_profile(client, db):
    # identity lives upstream; a verified token is enough to bid
    owner = make_user(db, UserRole.client, "Owner")
    project = make_project(db, owner)
    dev_id = uuid.uuid4()
    token = create_access_token(str(dev_id), {"role": "developer", "name": "Fresh Dev"})

    r = client.post(
        f"{API}/bids/place",
        json=_bid_body(project.id),
        headers={"Authorization": f"Bearer {token}"},
    )

    assert r.status_code == 201, r.text
    data = r.json()
    assert data["developerId"] == str(dev_id)
    assert data["developer"]["name"] == "Fresh Dev"
    assert data["developer"]["skills"] == []

    db.expire_all()
    mirrored = db.get(User, dev_id)
    assert mirrored.role == UserRole.developer.value
    assert mirrored.email is None

    # second request reuses the mirrored row
    again = client.post(
        f"{API}/bids/place",
        json=_bid_body(project.id),
        headers={"Authorization": f"Bearer {token}"},
    )
    assert again.status_code == 409
    assert db.query(User).filter(User.id == dev_id).count() == 1
