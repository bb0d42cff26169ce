"""Group endpoint tests."""

import pytest

from pocketbook.models.group import Group, GroupMember


@pytest.fixture
def family(db, regular_user, make_user):
    """Group holding `tester` and `partner`."""
    partner = make_user("partner")
    group = Group(name="family")
    group.members.append(GroupMember(user_id=regular_user.id, email=regular_user.email))
    group.members.append(GroupMember(user_id=partner.id, email=partner.email))
    db.add(group)
    db.commit()
    return group


def member_emails(data) -> list[str]:
    return [member["email"] for member in data["members"]]


def test_create_group(client, db, regular_user, make_user, login_as, family):
    make_user("friend")
    login_as(make_user("organizer"))

    response = client.post(
        "/api/groups",
        json={
            "name": "friends",
            "member_emails": [
                "organizer@example.com",
                "friend@example.com",
                "tester@example.com",
                "ghost@example.com",
            ],
        },
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["group"]["name"] == "friends"
    assert member_emails(data["group"]) == ["organizer@example.com", "friend@example.com"]
    assert data["already_in_group"] == ["tester@example.com"]
    assert data["members_not_found"] == ["ghost@example.com"]

    assert db.query(Group).filter(Group.name == "friends").one() is not None


def test_create_group_requires_session(client, regular_user):
    response = client.post(
        "/api/groups", json={"name": "friends", "member_emails": ["tester@example.com"]}
    )
    assert response.status_code == 401


def test_create_group_name_taken(client, make_user, login_as, family):
    make_user("friend")
    login_as(make_user("organizer"))

    response = client.post(
        "/api/groups", json={"name": "family", "member_emails": ["friend@example.com"]}
    )
    assert response.status_code == 400


def test_create_group_without_eligible_members(client, db, login_as, make_user, family):
    login_as(make_user("organizer"))

    response = client.post(
        "/api/groups",
        json={"name": "friends", "member_emails": ["tester@example.com", "ghost@example.com"]},
    )
    assert response.status_code == 400
    assert db.query(Group).count() == 1


def test_create_group_invalid_email(client, regular_user, login_as):
    login_as(regular_user)

    response = client.post("/api/groups", json={"name": "friends", "member_emails": ["nope"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid email format"


def test_get_group_as_member(client, regular_user, login_as, family):
    login_as(regular_user)

    response = client.get("/api/groups/family")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "family"
    assert member_emails(data) == ["tester@example.com", "partner@example.com"]


def test_get_group_as_outsider(client, make_user, login_as, family):
    login_as(make_user("stranger"))

    response = client.get("/api/groups/family")
    assert response.status_code == 401
    assert response.json()["detail"] == "Group: user not in group"


def test_get_group_as_admin(client, admin_user, login_as, family):
    login_as(admin_user)

    response = client.get("/api/groups/family")
    assert response.status_code == 200


def test_get_unknown_group(client, admin_user, login_as):
    login_as(admin_user)

    response = client.get("/api/groups/nobody")
    assert response.status_code == 404


def test_get_groups_as_admin(client, admin_user, login_as, family):
    login_as(admin_user)

    response = client.get("/api/groups")
    assert response.status_code == 200
    assert [group["name"] for group in response.json()["data"]] == ["family"]


def test_get_groups_as_regular_user(client, regular_user, login_as, family):
    login_as(regular_user)

    response = client.get("/api/groups")
    assert response.status_code == 401


def test_add_members(client, regular_user, make_user, login_as, family):
    make_user("cousin")
    login_as(regular_user)

    response = client.patch(
        "/api/groups/family/add",
        json={"member_emails": ["cousin@example.com", "partner@example.com"]},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert member_emails(data["group"]) == [
        "tester@example.com",
        "partner@example.com",
        "cousin@example.com",
    ]
    assert data["already_in_group"] == ["partner@example.com"]
    assert data["members_not_found"] == []


def test_add_members_to_unknown_group(client, admin_user, make_user, login_as):
    make_user("cousin")
    login_as(admin_user)

    response = client.patch(
        "/api/groups/nobody/add", json={"member_emails": ["cousin@example.com"]}
    )
    assert response.status_code == 404


def test_add_members_none_eligible(client, regular_user, login_as, family):
    login_as(regular_user)

    response = client.patch(
        "/api/groups/family/add", json={"member_emails": ["ghost@example.com"]}
    )
    assert response.status_code == 400


def test_delete_group_as_member(client, db, regular_user, login_as, family):
    login_as(regular_user)

    response = client.request("DELETE", "/api/groups", json={"name": "family"})
    assert response.status_code == 200
    assert db.query(Group).count() == 0
    assert db.query(GroupMember).count() == 0


def test_delete_group_as_outsider(client, db, make_user, login_as, family):
    login_as(make_user("stranger"))

    response = client.request("DELETE", "/api/groups", json={"name": "family"})
    assert response.status_code == 401
    assert db.query(Group).count() == 1


def test_delete_unknown_group(client, admin_user, login_as):
    login_as(admin_user)

    response = client.request("DELETE", "/api/groups", json={"name": "nobody"})
    assert response.status_code == 404
