from household_hub.models.household_member import HouseholdMember
from household_hub.models.profile import Profile
from household_hub.models.stock import StockAccount, StockAccountOwner


class TestListAndGetProfiles:
    """Tests for GET /api/profiles"""

    def test_list_active_household_profiles(self, client, family, bob_headers):
        response = client.get("/api/profiles", headers=bob_headers)

        assert response.status_code == 200
        names = {p["name"]: p["role"] for p in response.json()}
        assert names == {"Alice": "owner", "Bob": "member", "Dana": "admin", "Kid": "member"}

    def test_get_profile_in_household(self, client, family, bob_headers):
        response = client.get(f"/api/profiles/{family.kid.id}", headers=bob_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Kid"
        assert data["has_user"] is False
        assert "created_at" in data

    def test_get_profile_outside_household(self, client, family, bob_headers):
        response = client.get(f"/api/profiles/{family.carol.id}", headers=bob_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Profile not found"


class TestCreateProfile:
    """Tests for POST /api/profiles"""

    def test_admin_creates_profile_as_member(self, client, db_session, family, dana_headers):
        response = client.post(
            "/api/profiles", headers=dana_headers, json={"name": "Baby", "color": "#ff00aa"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Baby"
        assert data["role"] == "member"
        assert data["has_user"] is False

        membership = (
            db_session.query(HouseholdMember)
            .filter_by(household_id=family.household.id, profile_id=data["id"])
            .one()
        )
        assert membership.role.value == "member"

    def test_default_color(self, client, family, alice_headers):
        response = client.post("/api/profiles", headers=alice_headers, json={"name": "Pet"})

        assert response.status_code == 201
        assert response.json()["color"].startswith("#")

    def test_member_cannot_create(self, client, db_session, family, bob_headers):
        response = client.post("/api/profiles", headers=bob_headers, json={"name": "Ghost"})

        assert response.status_code == 403
        assert db_session.query(Profile).filter_by(name="Ghost").first() is None

    def test_invalid_color(self, client, family, alice_headers):
        response = client.post(
            "/api/profiles", headers=alice_headers, json={"name": "Pet", "color": "red"}
        )
        assert response.status_code == 400


class TestUpdateProfile:
    """Tests for PUT /api/profiles/{id}"""

    def test_update_own_profile(self, client, family, bob_headers):
        response = client.put(
            f"/api/profiles/{family.bob.id}",
            headers=bob_headers,
            json={"name": "Robert", "image": "https://example.com/bob.png"},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Robert"
        assert response.json()["image"] == "https://example.com/bob.png"

    def test_admin_updates_profile_without_login(self, client, family, dana_headers):
        response = client.put(
            f"/api/profiles/{family.kid.id}", headers=dana_headers, json={"color": "#000000"}
        )

        assert response.status_code == 200
        assert response.json()["color"] == "#000000"

    def test_admin_cannot_update_other_login_profile(self, client, family, dana_headers):
        response = client.put(
            f"/api/profiles/{family.bob.id}", headers=dana_headers, json={"name": "Bobby"}
        )
        assert response.status_code == 403

    def test_member_cannot_update_profile_without_login(self, client, family, bob_headers):
        response = client.put(
            f"/api/profiles/{family.kid.id}", headers=bob_headers, json={"name": "Kiddo"}
        )
        assert response.status_code == 403

    def test_image_must_be_https(self, client, family, bob_headers):
        response = client.put(
            f"/api/profiles/{family.bob.id}",
            headers=bob_headers,
            json={"image": "http://example.com/bob.png"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data"


class TestDeleteProfile:
    """Tests for DELETE /api/profiles/{id}"""

    def test_admin_deletes_profile_without_login(self, client, db_session, family, dana_headers):
        account = StockAccount(name="Kid savings")
        db_session.add(account)
        db_session.flush()
        db_session.add(StockAccountOwner(account_id=account.id, profile_id=family.kid.id))
        db_session.commit()
        kid_id = family.kid.id

        response = client.delete(f"/api/profiles/{kid_id}", headers=dana_headers)

        assert response.status_code == 204
        db_session.expire_all()
        assert db_session.get(Profile, kid_id) is None
        assert db_session.query(HouseholdMember).filter_by(profile_id=kid_id).count() == 0
        assert db_session.query(StockAccountOwner).filter_by(profile_id=kid_id).count() == 0

    def test_cannot_delete_own_profile(self, client, family, alice_headers):
        response = client.delete(f"/api/profiles/{family.alice.id}", headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete your own profile"

    def test_member_cannot_delete(self, client, family, bob_headers):
        response = client.delete(f"/api/profiles/{family.kid.id}", headers=bob_headers)
        assert response.status_code == 403

    def test_cannot_delete_profile_outside_household(self, client, family, alice_headers):
        response = client.delete(f"/api/profiles/{family.carol.id}", headers=alice_headers)
        assert response.status_code == 404

    def test_cannot_delete_login_profile(self, client, family, alice_headers):
        response = client.delete(f"/api/profiles/{family.bob.id}", headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete a profile linked to a user"
