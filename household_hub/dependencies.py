from fastapi import Depends, Header, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from household_hub.core.security import extract_identity, is_email_allowed
from household_hub.core.exceptions import UnauthorizedException
from household_hub.database import get_db
from household_hub.models.context import CurrentContext
from household_hub.models.user import User
from household_hub.repositories.user_repository import UserRepository
from household_hub.services.context_service import ContextService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """
    FastAPI dependency to validate JWT and get/create user.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Extract email (or 'sub') and display name
    4. Reject emails outside the ALLOWED_EMAILS allowlist
    5. Upsert the User record and return it

    Raises:
        UnauthorizedException: If token missing, invalid, expired or not allowed
    """
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    email, name = extract_identity(credentials.credentials)
    if not is_email_allowed(email):
        raise UnauthorizedException("Unauthorized")

    return UserRepository(db).upsert_by_email(email, name)


def _resolve_context(db: Session, user: User, household_id: str | None) -> CurrentContext:
    context = ContextService(db).resolve(user, household_id)
    if context is None:
        raise UnauthorizedException("Unauthorized")
    return context


async def get_current_context(
    x_household_id: str | None = Header(default=None),
    household_id_query: str | None = Query(default=None, alias="householdId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CurrentContext:
    """
    FastAPI dependency resolving the caller's context.

    The active household comes from the X-Household-Id header or the
    householdId query parameter, defaulting to the caller's first household.
    """
    return _resolve_context(db, user, x_household_id or household_id_query)


async def get_household_context(
    household_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CurrentContext:
    """Context scoped to the household in the request path"""
    return _resolve_context(db, user, household_id)
