"""
Identity: registration and login.

There is no session layer. Login returns the public user fields and the
caller keeps sending the user id on later requests.
"""

from typing import Optional
from uuid import uuid4

import bcrypt

from roshdman.core.config import settings
from roshdman.core.errors import AuthError, ConflictError, ValidationError
from roshdman.core.logging import log_event
from roshdman.core.store import JsonRecordStore
from roshdman.core.validation import require
from roshdman.models.user import PublicUser, User

INVALID_CREDENTIALS = "Invalid email or password"
BCRYPT_MAX_BYTES = 72


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class UserService:
    def __init__(self, store: JsonRecordStore, bcrypt_rounds: Optional[int] = None):
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, *, name: Optional[str], email: Optional[str], password: Optional[str]) -> PublicUser:
        require(
            {"name": name, "email": email, "password": password},
            "Name, email and password are required",
        )
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        with self.store.transaction() as doc:
            if any(u.email == email for u in doc.users):
                log_event("warning", "user.register_conflict", event_type="user.register", extra={"email": email})
                raise ConflictError("Email is already registered")

            user = User(
                id=str(uuid4()),
                name=name,
                email=email,
                password=hash_password(password, self.bcrypt_rounds),
            )
            doc.users.append(user)

        log_event("info", "user.registered", user_id=user.id, event_type="user.register")
        return user.public()

    def login(self, *, email: Optional[str], password: Optional[str]) -> PublicUser:
        require({"email": email, "password": password}, "Email and password are required")

        doc = self.store.snapshot()
        user = next((u for u in doc.users if u.email == email), None)
        if user is None:
            log_event("warning", "user.login_unknown_email", event_type="user.login")
            raise AuthError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password):
            log_event("warning", "user.login_bad_password", user_id=user.id, event_type="user.login")
            raise AuthError(INVALID_CREDENTIALS)

        log_event("info", "user.logged_in", user_id=user.id, event_type="user.login")
        return user.public()
