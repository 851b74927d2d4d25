"""
Witness invitations: one user asks another to watch a challenge.
"""

from enum import Enum
from typing import Optional

from roshdman.models.base import CamelModel, RecordModel


class InviteStatus(str, Enum):
    """Only PENDING is ever written; nothing accepts or declines invitations."""

    PENDING = "pending"


class Invitation(RecordModel):
    id: str
    from_user_id: str
    to_user_id: str
    challenge_id: str
    status: str = InviteStatus.PENDING.value
    created_at: Optional[str] = None


class CreateInvitationRequest(CamelModel):
    from_user_id: Optional[str] = None
    to_user_id: Optional[str] = None
    challenge_id: Optional[str] = None
