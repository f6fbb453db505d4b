"""
User Domain Service.

Registration, credential checks and admin account provisioning.
Shared by the auth router, the CLI and startup seeding.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User
from rest_api.repositories import UserRepository
from shared.config.constants import Roles
from shared.config.logging import auth_logger as logger, mask_email
from shared.infrastructure.db import safe_commit
from shared.security.password import hash_password, verify_password
from shared.utils.exceptions import DuplicateEntityError, NotFoundError


class UserService:
    def __init__(self, db: Session):
        self._db = db
        self._repo = UserRepository(db)

    def register(
        self,
        email: str,
        password: str,
        name: str,
        phone: str | None = None,
        role: str = Roles.CUSTOMER,
    ) -> User:
        """
        Create an account. Emails are unique, compared lower-cased.

        Raises:
            DuplicateEntityError: email already registered
        """
        email = email.strip().lower()
        if self._repo.find_by_email(email):
            raise DuplicateEntityError("User", mask_email(email))

        user = User(
            email=email,
            password=hash_password(password),
            name=name.strip(),
            phone=phone,
            role=role,
        )
        try:
            self._repo.save(user)
            safe_commit(self._db)
        except IntegrityError:
            self._db.rollback()
            raise DuplicateEntityError("User", mask_email(email))
        self._db.refresh(user)

        logger.info("User registered", user_id=user.id, email=mask_email(email), role=role)
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        """The user when the credentials match, None otherwise."""
        user = self._repo.find_by_email(email)
        if not user:
            logger.warning("LOGIN_FAILED: User not found", email=mask_email(email))
            return None
        if not verify_password(password, user.password):
            logger.warning("LOGIN_FAILED: Invalid password", email=mask_email(email), user_id=user.id)
            return None

        logger.info("LOGIN_SUCCESS", email=mask_email(user.email), user_id=user.id, role=user.role)
        return user

    def get_user(self, user_id: int) -> User:
        user = self._repo.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user

    def ensure_admin(self, email: str, password: str, name: str = "Administrator") -> tuple[User, bool]:
        """
        Make sure an admin account exists for email.

        Returns (user, created). An existing non-admin account is promoted;
        its password is left alone.
        """
        user = self._repo.find_by_email(email)
        if user is None:
            return self.register(email, password, name, role=Roles.ADMIN), True

        if user.role != Roles.ADMIN:
            user.role = Roles.ADMIN
            safe_commit(self._db)
            logger.info("User promoted to admin", user_id=user.id, email=mask_email(user.email))
        return user, False
