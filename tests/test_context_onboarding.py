from household_hub.models.household_member import HouseholdMember
from household_hub.models.misc_asset import MiscAsset, MiscAssetOwner, MiscAssetType
from household_hub.models.profile import Profile
from household_hub.models.role import HouseholdRole
from household_hub.models.stock import StockAccount, StockAccountOwner
from tests.conftest import (
    headers_for,
    make_household,
    make_user,
    ALICE,
)


class TestContext:
    """Tests for GET /api/context"""

    def test_context_defaults_to_first_household(self, client, family, alice_headers):
        response = client.get("/api/context", headers=alice_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["profile"]["id"] == family.alice.id
        assert data["active_household"]["id"] == family.household.id
        assert data["active_household"]["role"] == "owner"
        assert {p["id"] for p in data["household_profiles"]} == {
            family.alice.id,
            family.bob.id,
            family.dana.id,
            family.kid.id,
        }
        kid = next(p for p in data["household_profiles"] if p["id"] == family.kid.id)
        assert kid["has_user"] is False

    def test_context_selects_household_from_header(self, client, db_session, family):
        second = make_household(db_session, "Alice Solo", [(family.alice, HouseholdRole.OWNER)])

        response = client.get("/api/context", headers=headers_for(ALICE, second.id))

        assert response.status_code == 200
        data = response.json()
        assert data["active_household"]["id"] == second.id
        assert len(data["households"]) == 2
        assert [p["id"] for p in data["household_profiles"]] == [family.alice.id]

    def test_context_selects_household_from_query(self, client, db_session, family, alice_headers):
        second = make_household(db_session, "Alice Solo", [(family.alice, HouseholdRole.OWNER)])

        response = client.get(f"/api/context?householdId={second.id}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["active_household"]["id"] == second.id

    def test_unknown_household_falls_back_to_first(self, client, family):
        """Selecting a household the caller is not in is ignored"""
        headers = headers_for(ALICE, family.other_household.id)

        response = client.get("/api/context", headers=headers)

        assert response.status_code == 200
        assert response.json()["active_household"]["id"] == family.household.id

    def test_context_without_profile_needs_onboarding(self, client):
        response = client.get("/api/context", headers=headers_for("fresh@example.com"))

        assert response.status_code == 404
        assert response.json()["needs_onboarding"] is True

    def test_context_requires_auth(self, client):
        response = client.get("/api/context")
        assert response.status_code == 401


class TestOnboarding:
    """Tests for POST /api/onboarding"""

    def test_onboarding_creates_profile_household_and_family(self, client, db_session):
        headers = headers_for("new@example.com")

        response = client.post(
            "/api/onboarding",
            headers=headers,
            json={
                "profile_name": "Noa",
                "profile_color": "#112233",
                "household_name": "Levi Family",
                "family_members": [
                    {"name": "Tom", "color": "#445566"},
                    {"name": "Maya", "color": "#778899"},
                ],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["profile"]["name"] == "Noa"
        assert data["profile"]["user_id"] is not None
        assert data["household"]["name"] == "Levi Family"
        assert data["household"]["role"] == "owner"
        assert [p["name"] for p in data["family_profiles"]] == ["Tom", "Maya"]
        assert all(p["user_id"] is None for p in data["family_profiles"])

        members = (
            db_session.query(HouseholdMember)
            .filter_by(household_id=data["household"]["id"])
            .all()
        )
        roles = {m.profile_id: m.role for m in members}
        assert roles[data["profile"]["id"]] == HouseholdRole.OWNER
        assert sorted(roles.values()) == sorted(
            [HouseholdRole.OWNER, HouseholdRole.MEMBER, HouseholdRole.MEMBER]
        )

        # Context resolves right after onboarding
        context = client.get("/api/context", headers=headers)
        assert context.status_code == 200
        assert len(context.json()["household_profiles"]) == 3

    def test_onboarding_rejected_when_profile_exists(self, client, family, alice_headers):
        response = client.post(
            "/api/onboarding",
            headers=alice_headers,
            json={
                "profile_name": "Alice again",
                "profile_color": "#112233",
                "household_name": "Another",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "User already has a profile"

    def test_onboarding_migrates_ownerless_resources(self, client, db_session):
        user = make_user(db_session, "legacy@example.com")
        account = StockAccount(name="Old Broker", user_id=user.id)
        loan = MiscAsset(
            type=MiscAssetType.LOAN,
            name="Car loan",
            current_value=-20000,
            interest_rate=4.5,
            monthly_payment=800,
            user_id=user.id,
        )
        db_session.add_all([account, loan])
        db_session.commit()

        response = client.post(
            "/api/onboarding",
            headers=headers_for("legacy@example.com"),
            json={
                "profile_name": "Legacy",
                "profile_color": "#abcdef",
                "household_name": "Legacy Home",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["migrated_resources"] == {
            "stock_accounts": 1,
            "pension_accounts": 0,
            "misc_assets": 1,
        }
        profile_id = data["profile"]["id"]
        assert db_session.query(StockAccountOwner).filter_by(account_id=account.id).one().profile_id == profile_id
        assert db_session.query(MiscAssetOwner).filter_by(asset_id=loan.id).one().profile_id == profile_id

    def test_onboarding_validation(self, client):
        response = client.post(
            "/api/onboarding",
            headers=headers_for("new@example.com"),
            json={
                "profile_name": "",
                "profile_color": "blue",
                "household_name": "Home",
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid data"

    def test_onboarding_limits_family_members(self, client, db_session):
        response = client.post(
            "/api/onboarding",
            headers=headers_for("big@example.com"),
            json={
                "profile_name": "Parent",
                "profile_color": "#000000",
                "household_name": "Big Family",
                "family_members": [{"name": f"Child {i}", "color": "#111111"} for i in range(11)],
            },
        )

        assert response.status_code == 400
        assert db_session.query(Profile).count() == 0
