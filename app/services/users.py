"""Credential store: persistence of user records over a SQLAlchemy session."""

from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import User


class DuplicateUserError(Exception):
    """Raised when a username or email unique index rejects a write."""

    def __init__(self, field: str) -> None:
        self.field = field
        self.message = f"A user with this {field} already exists."
        super().__init__(self.message)


class UserStore:
    """Lookups, existence checks and writes for User rows. One instance per session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username_or_email(self, identifier: str) -> User | None:
        """Match identifier against username first, then email."""
        matches = (
            self.db.query(User)
            .filter(or_(User.username == identifier, User.email == identifier))
            .all()
        )
        for user in matches:
            if user.username == identifier:
                return user
        return matches[0] if matches else None

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at, User.username).all()

    def save(self, user: User) -> User:
        """
        Insert or update a user and commit.

        Raises DuplicateUserError when the unique index on username or email
        rejects the row (e.g. a concurrent registration won the race).
        """
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUserError(self._conflicting_field(user)) from e
        self.db.refresh(user)
        return user

    def update_last_login(self, user: User) -> None:
        user.last_login_at = datetime.now(UTC)
        self.db.commit()

    def update_profile(
        self,
        user: User,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        """Update the editable profile fields; email keeps its uniqueness."""
        if email is not None and email != user.email:
            if self.exists_by_email(email):
                raise DuplicateUserError("email")
            user.email = email
        user.first_name = first_name
        user.last_name = last_name
        return self.save(user)

    def _conflicting_field(self, user: User) -> str:
        existing = self.get_by_username(user.username)
        if existing is not None and existing is not user:
            return "username"
        return "email"
