from datetime import datetime, timezone

import pytest

from roshdman.core.errors import NotFoundError, ValidationError
from roshdman.features.challenges.service import ChallengeService
from roshdman.features.invitations.service import create_invitation, get_invitations_for_user
from roshdman.features.users.service import UserService


@pytest.fixture
def setup(store):
    users = UserService(store)
    ali = users.register(name="Ali", email="a@x.com", password="secret123")
    sara = users.register(name="Sara", email="s@x.com", password="secret456")
    challenge = ChallengeService(store).create(
        user_id=ali.id, title="Run", duration=5, penalty=100, charity_id="charity1"
    )
    return ali, sara, challenge


def test_create_invitation_is_pending(store, setup):
    ali, sara, challenge = setup
    now = datetime(2026, 10, 16, 9, 0, tzinfo=timezone.utc)

    invitation = create_invitation(
        store, from_user_id=ali.id, to_user_id=sara.id, challenge_id=challenge.id, now=now
    )

    assert invitation.status == "pending"
    assert invitation.created_at == "2026-10-16T09:00:00.000Z"
    assert get_invitations_for_user(store, sara.id) == [invitation]
    assert get_invitations_for_user(store, ali.id) == []


def test_create_invitation_requires_fields(store):
    with pytest.raises(ValidationError):
        create_invitation(store, from_user_id="a", to_user_id=None, challenge_id="c")


@pytest.mark.parametrize("broken", ["from", "to", "challenge"])
def test_create_invitation_requires_existing_entities(store, setup, broken):
    ali, sara, challenge = setup
    ids = {"from": ali.id, "to": sara.id, "challenge": challenge.id}
    ids[broken] = "ghost"

    with pytest.raises(NotFoundError):
        create_invitation(store, from_user_id=ids["from"], to_user_id=ids["to"], challenge_id=ids["challenge"])

    assert store.load().invitations == []


def test_invitations_over_http(client, register):
    ali = register(name="Ali", email="a@x.com")
    sara = register(name="Sara", email="s@x.com")
    challenge = client.post(
        "/challenges",
        json={"userId": ali["id"], "title": "Run", "duration": 5, "penalty": 100, "charityId": "charity1"},
    ).json()["challenge"]

    resp = client.post(
        "/invitations",
        json={"fromUserId": ali["id"], "toUserId": sara["id"], "challengeId": challenge["id"]},
    )
    assert resp.status_code == 200
    invitation = resp.json()["invitation"]
    assert invitation["status"] == "pending"
    assert set(invitation) == {"id", "fromUserId", "toUserId", "challengeId", "status", "createdAt"}

    assert client.get(f"/invitations/{sara['id']}").json() == [invitation]

    assert client.post("/invitations", json={"fromUserId": ali["id"]}).status_code == 400
    assert (
        client.post(
            "/invitations",
            json={"fromUserId": ali["id"], "toUserId": "ghost", "challengeId": challenge["id"]},
        ).status_code
        == 404
    )
