"""
Password hashing and bearer token handling.
"""
import datetime
from typing import Optional

import jwt
from werkzeug.security import generate_password_hash, check_password_hash

from recap.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_DAYS
from recap.errors import Unauthenticated


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


class CredentialService:
    """Issues and verifies signed bearer tokens."""

    def __init__(self, secret: Optional[str] = None, algorithm: str = JWT_ALGORITHM,
                 expiry_days: int = JWT_EXPIRY_DAYS):
        self.secret = secret or JWT_SECRET
        self.algorithm = algorithm
        self.expiry = datetime.timedelta(days=expiry_days)

    def generate_token(self, user_id: str) -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.expiry,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> str:
        """
        Verify a token and return the user ID it was issued for.

        Raises:
            Unauthenticated: if the token is missing, expired or tampered with
        """
        if not token:
            raise Unauthenticated("Access token required")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token expired")
        except jwt.InvalidTokenError:
            raise Unauthenticated("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            raise Unauthenticated("Invalid token")
        return user_id
