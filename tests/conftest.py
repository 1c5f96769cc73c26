import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-household-hub")

import pytest
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from household_hub.database import get_db
from household_hub.models.base import Base
from household_hub.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from household_hub.models.user import User
from household_hub.models.profile import Profile
from household_hub.models.household import Household
from household_hub.models.household_member import HouseholdMember
from household_hub.models.role import HouseholdRole
from household_hub.models.stock import StockAccount, StockAccountOwner, StockHolding, StockPriceHistory
from household_hub.models.pension import PensionAccount, PensionAccountOwner, PensionDeposit
from household_hub.models.misc_asset import MiscAsset, MiscAssetOwner
from household_hub.models.net_worth import NetWorthSnapshot
from household_hub.models.budget import BudgetCategoryGroup, BudgetCategory, BudgetTransaction
# Import FastAPI app AFTER model imports
from household_hub.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(
    sub: str = "test-user@example.com",
    email: str | None = None,
    name: str | None = None,
    expired: bool = False,
) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        sub: Subject claim; used as the email when no email claim is given
        email: Optional 'email' claim
        name: Optional 'name' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": sub, "exp": exp, "iat": datetime.now(UTC)}
    if email is not None:
        payload["email"] = email
    if name is not None:
        payload["name"] = name

    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")


def headers_for(email: str, household_id: str | None = None) -> dict:
    """Authorization headers for a caller, optionally selecting a household"""
    headers = {"Authorization": f"Bearer {create_test_token(sub=email)}"}
    if household_id:
        headers["X-Household-Id"] = household_id
    return headers


def make_user(db, email: str, name: str | None = None) -> User:
    user = User(email=email, name=name)
    db.add(user)
    db.commit()
    return user


def make_profile(db, name: str, user: User | None = None, color: str = "#3b82f6") -> Profile:
    profile = Profile(name=name, color=color, user_id=user.id if user else None)
    db.add(profile)
    db.commit()
    return profile


def make_household(db, name: str, members: list[tuple[Profile, HouseholdRole]]) -> Household:
    household = Household(name=name)
    db.add(household)
    db.flush()
    for profile, role in members:
        db.add(HouseholdMember(household_id=household.id, profile_id=profile.id, role=role))
    db.commit()
    return household


@dataclass
class Family:
    """
    Two households sharing no profiles.

    "Cohen Family": alice (owner), bob (member), dana (admin), kid (no login, member)
    "Carol Home": carol (owner)
    """

    household: Household
    other_household: Household
    alice: Profile
    bob: Profile
    dana: Profile
    kid: Profile
    carol: Profile


ALICE = "alice@example.com"
BOB = "bob@example.com"
DANA = "dana@example.com"
CAROL = "carol@example.com"


@pytest.fixture
def family(db_session) -> Family:
    alice = make_profile(db_session, "Alice", make_user(db_session, ALICE, "Alice"))
    bob = make_profile(db_session, "Bob", make_user(db_session, BOB, "Bob"))
    dana = make_profile(db_session, "Dana", make_user(db_session, DANA, "Dana"))
    kid = make_profile(db_session, "Kid")
    carol = make_profile(db_session, "Carol", make_user(db_session, CAROL, "Carol"))

    household = make_household(
        db_session,
        "Cohen Family",
        [
            (alice, HouseholdRole.OWNER),
            (bob, HouseholdRole.MEMBER),
            (dana, HouseholdRole.ADMIN),
            (kid, HouseholdRole.MEMBER),
        ],
    )
    other_household = make_household(db_session, "Carol Home", [(carol, HouseholdRole.OWNER)])

    return Family(
        household=household,
        other_household=other_household,
        alice=alice,
        bob=bob,
        dana=dana,
        kid=kid,
        carol=carol,
    )


@pytest.fixture
def alice_headers(family):
    return headers_for(ALICE)


@pytest.fixture
def bob_headers(family):
    return headers_for(BOB)


@pytest.fixture
def dana_headers(family):
    return headers_for(DANA)


@pytest.fixture
def carol_headers(family):
    return headers_for(CAROL)
