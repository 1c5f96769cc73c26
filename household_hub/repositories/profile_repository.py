"""Repository for Profile model operations."""

from sqlalchemy.orm import Session
from household_hub.models.profile import Profile


class ProfileRepository:
    """Repository for Profile model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, profile_id: str) -> Profile | None:
        return self.db.query(Profile).filter(Profile.id == profile_id).first()

    def get_by_user_id(self, user_id: str) -> Profile | None:
        """Get the login-linked profile of a user (at most one exists)"""
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def create_no_commit(self, profile: Profile) -> Profile:
        """Add profile and flush so its id is available; caller commits"""
        self.db.add(profile)
        self.db.flush()
        return profile

    def update(self, profile: Profile) -> Profile:
        self.db.commit()
        self.db.refresh(profile)
        return profile

    def delete(self, profile: Profile) -> None:
        """Delete profile (memberships and ownership rows cascade)"""
        self.db.delete(profile)
        self.db.commit()
