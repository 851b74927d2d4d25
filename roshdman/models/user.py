from typing import Optional

from roshdman.models.base import CamelModel, RecordModel


class User(RecordModel):
    id: str
    name: str
    email: str
    password: str  # bcrypt hash

    def public(self) -> "PublicUser":
        return PublicUser(id=self.id, name=self.name, email=self.email)


class PublicUser(CamelModel):
    """User fields safe to return to any client."""

    id: str
    name: str
    email: str


class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None
