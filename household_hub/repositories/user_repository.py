from sqlalchemy.orm import Session
from household_hub.models.user import User


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def upsert_by_email(self, email: str, name: str | None = None) -> User:
        """
        Get user by email or create if doesn't exist.

        Called on every authenticated request; the display name from the
        token is refreshed when it changes.

        Args:
            email: Normalized (lowercase) email from the token
            name: Display name from the token, if any

        Returns:
            User object (either existing or newly created)
        """
        user = self.get_by_email(email)

        if not user:
            user = User(email=email, name=name)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        elif name is not None and user.name != name:
            user.name = name
            self.db.commit()
            self.db.refresh(user)

        return user

    def get_by_email(self, email: str) -> User | None:
        """Get user by email"""
        return self.db.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: str) -> User | None:
        """Get user by internal ID"""
        return self.db.query(User).filter(User.id == user_id).first()
