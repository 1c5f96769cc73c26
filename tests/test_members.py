from household_hub.models.household_member import HouseholdMember
from household_hub.models.role import HouseholdRole
from tests.conftest import headers_for, make_household, make_profile, make_user, BOB


def member_url(family, profile_id: str | None = None) -> str:
    url = f"/api/households/{family.household.id}/members"
    return f"{url}/{profile_id}" if profile_id else url


class TestAddMember:
    """Tests for POST /api/households/{id}/members"""

    def test_admin_adds_existing_profile(self, client, db_session, family, dana_headers):
        newcomer = make_profile(db_session, "Grandma")

        response = client.post(
            member_url(family),
            headers=dana_headers,
            json={"profile_id": newcomer.id, "role": "member"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == newcomer.id
        assert data["role"] == "member"
        assert data["has_user"] is False

    def test_role_defaults_to_member(self, client, db_session, family, alice_headers):
        newcomer = make_profile(db_session, "Uncle")

        response = client.post(
            member_url(family), headers=alice_headers, json={"profile_id": newcomer.id}
        )

        assert response.status_code == 201
        assert response.json()["role"] == "member"

    def test_profile_from_another_household_can_join(self, client, family, alice_headers):
        response = client.post(
            member_url(family),
            headers=alice_headers,
            json={"profile_id": family.carol.id, "role": "admin"},
        )

        assert response.status_code == 201
        assert response.json()["role"] == "admin"

    def test_member_cannot_add(self, client, db_session, family, bob_headers):
        newcomer = make_profile(db_session, "Cousin")

        response = client.post(
            member_url(family), headers=bob_headers, json={"profile_id": newcomer.id}
        )
        assert response.status_code == 403

    def test_owner_role_is_never_assignable(self, client, family, alice_headers):
        response = client.post(
            member_url(family),
            headers=alice_headers,
            json={"profile_id": family.carol.id, "role": "owner"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data"

    def test_unknown_profile(self, client, family, alice_headers):
        response = client.post(
            member_url(family), headers=alice_headers, json={"profile_id": "does-not-exist"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Profile not found"

    def test_existing_member_rejected(self, client, family, alice_headers):
        response = client.post(
            member_url(family), headers=alice_headers, json={"profile_id": family.bob.id}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Profile is already a member"


class TestUpdateMemberRole:
    """Tests for PUT /api/households/{id}/members/{profile_id}"""

    def test_owner_promotes_member(self, client, db_session, family, alice_headers):
        response = client.put(
            member_url(family, family.bob.id), headers=alice_headers, json={"role": "admin"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": family.bob.id, "name": "Bob", "role": "admin"}

    def test_admin_demotes_admin(self, client, db_session, family, dana_headers):
        response = client.put(
            member_url(family, family.dana.id), headers=dana_headers, json={"role": "member"}
        )

        assert response.status_code == 200
        assert response.json()["role"] == "member"

    def test_member_cannot_change_roles(self, client, family, bob_headers):
        response = client.put(
            member_url(family, family.kid.id), headers=bob_headers, json={"role": "admin"}
        )
        assert response.status_code == 403

    def test_cannot_change_owner_role(self, client, family, dana_headers):
        response = client.put(
            member_url(family, family.alice.id), headers=dana_headers, json={"role": "member"}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot change owner role"

    def test_cannot_promote_to_owner(self, client, family, alice_headers):
        response = client.put(
            member_url(family, family.bob.id), headers=alice_headers, json={"role": "owner"}
        )
        assert response.status_code == 400

    def test_unknown_member(self, client, family, alice_headers):
        response = client.put(
            member_url(family, family.carol.id), headers=alice_headers, json={"role": "admin"}
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Member not found"


class TestRemoveMember:
    """Tests for DELETE /api/households/{id}/members/{profile_id}"""

    def test_admin_removes_member(self, client, db_session, family, dana_headers):
        response = client.delete(member_url(family, family.kid.id), headers=dana_headers)

        assert response.status_code == 200
        assert response.json() == {
            "message": "Member removed successfully",
            "removed_profile_id": family.kid.id,
        }
        assert (
            db_session.query(HouseholdMember)
            .filter_by(household_id=family.household.id, profile_id=family.kid.id)
            .first()
            is None
        )

    def test_member_cannot_remove(self, client, family, bob_headers):
        response = client.delete(member_url(family, family.kid.id), headers=bob_headers)
        assert response.status_code == 403

    def test_outsider_cannot_remove(self, client, family, carol_headers):
        response = client.delete(member_url(family, family.kid.id), headers=carol_headers)
        assert response.status_code == 403

    def test_cannot_remove_owner(self, client, family, dana_headers):
        response = client.delete(member_url(family, family.alice.id), headers=dana_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot remove household owner"

    def test_removed_member_loses_access(self, client, db_session, family, dana_headers):
        make_household(db_session, "Bob Solo", [(family.bob, HouseholdRole.OWNER)])
        client.delete(member_url(family, family.bob.id), headers=dana_headers)

        response = client.get(
            f"/api/households/{family.household.id}", headers=headers_for(BOB)
        )
        assert response.status_code == 403


class TestOwnerProtectionScenario:
    """Household with an owner and a plain member, driven through the API"""

    def test_member_cannot_touch_owner_and_owner_cannot_grant_ownership(
        self, client, db_session, family, alice_headers, bob_headers
    ):
        outsider = make_profile(db_session, "Charlie", make_user(db_session, "charlie@example.com"))

        remove = client.delete(member_url(family, family.alice.id), headers=bob_headers)
        assert remove.status_code == 400
        assert remove.json()["detail"] == "Cannot remove household owner"

        demote = client.put(
            member_url(family, family.alice.id), headers=bob_headers, json={"role": "member"}
        )
        assert demote.status_code == 400
        assert demote.json()["detail"] == "Cannot change owner role"

        grant = client.post(
            member_url(family),
            headers=alice_headers,
            json={"profile_id": outsider.id, "role": "owner"},
        )
        assert grant.status_code == 400
        assert grant.json()["detail"] == "Invalid data"

        owner = (
            db_session.query(HouseholdMember)
            .filter_by(household_id=family.household.id, role=HouseholdRole.OWNER)
            .all()
        )
        assert [m.profile_id for m in owner] == [family.alice.id]
