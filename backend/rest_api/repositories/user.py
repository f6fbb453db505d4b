"""
User Repository - Account lookup.
"""

from sqlalchemy import Select, select

from rest_api.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User entities."""

    @property
    def model(self) -> type[User]:
        return User

    def _base_query(self) -> Select:
        return select(User).order_by(User.id)

    def find_by_email(self, email: str) -> User | None:
        """Emails are stored lower-cased."""
        return self._db.scalar(select(User).where(User.email == email.strip().lower()))
