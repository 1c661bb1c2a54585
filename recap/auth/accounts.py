"""
Account operations: registration, login, current user and theme.
"""
from dataclasses import dataclass
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recap.auth.credentials import CredentialService, hash_password, verify_password
from recap.database import crud
from recap.database.models import User, Theme
from recap.errors import Conflict, Unauthenticated, ValidationFailed
from recap.utils.logger import get_logger
from recap.utils.text import is_valid_email

logger = get_logger(__name__)


@dataclass
class AuthSession:
    """The authenticated caller of one request."""
    user: User
    token: str

    @property
    def user_id(self) -> str:
        return self.user.id


class AccountManager:
    """Registers users and turns credentials into tokens."""

    def __init__(self, db_session: Session, credentials: CredentialService):
        self.db = db_session
        self.credentials = credentials

    def register(self, email: str, password: str, full_name: str) -> Tuple[User, str]:
        email = (email or "").strip().lower()
        if not is_valid_email(email):
            raise ValidationFailed("Invalid email address")
        if not password:
            raise ValidationFailed("Password is required")
        if not full_name or not full_name.strip():
            raise ValidationFailed("Full name is required")

        if crud.get_user_by_email(self.db, email):
            raise Conflict("User already exists")

        try:
            user = crud.create_user(self.db, email, hash_password(password), full_name.strip())
        except IntegrityError:
            # Concurrent registration of the same email
            self.db.rollback()
            raise Conflict("User already exists")
        logger.info(f"Registered user {user.id}")
        return user, self.credentials.generate_token(user.id)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        email = (email or "").strip().lower()
        user = crud.get_user_by_email(self.db, email)
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login attempt")
            raise Unauthenticated("Invalid credentials")
        return user, self.credentials.generate_token(user.id)

    def authenticate(self, token: str) -> AuthSession:
        """Resolve a bearer token into the session of an existing user."""
        user_id = self.credentials.verify_token(token)
        user = crud.get_user(self.db, user_id)
        if user is None:
            raise Unauthenticated("User not found")
        return AuthSession(user=user, token=token)

    def set_theme(self, user_id: str, theme: str) -> User:
        if theme not in (Theme.LIGHT.value, Theme.DARK.value):
            raise ValidationFailed("Invalid theme value")
        user = crud.update_user_theme(self.db, user_id, theme)
        if user is None:
            raise Unauthenticated("User not found")
        return user
