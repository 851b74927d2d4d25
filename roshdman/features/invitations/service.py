"""
roshdman/features/invitations/service.py
Witness invitations. Created as pending; nothing in the system moves them on.
"""

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from roshdman.core.errors import NotFoundError
from roshdman.core.logging import log_event
from roshdman.core.store import JsonRecordStore
from roshdman.core.validation import require
from roshdman.models.base import to_timestamp
from roshdman.models.invite import Invitation, InviteStatus


def create_invitation(
    store: JsonRecordStore,
    *,
    from_user_id: Optional[str],
    to_user_id: Optional[str],
    challenge_id: Optional[str],
    now: Optional[datetime] = None,
) -> Invitation:
    """
    Invite a user to a challenge.

    Raises:
        ValidationError: a field is missing
        NotFoundError: either user or the challenge does not exist
    """
    require(
        {"fromUserId": from_user_id, "toUserId": to_user_id, "challengeId": challenge_id},
        "All fields are required",
    )

    with store.transaction() as doc:
        user_ids = {u.id for u in doc.users}
        challenge_exists = any(c.id == challenge_id for c in doc.challenges)
        if from_user_id not in user_ids or to_user_id not in user_ids or not challenge_exists:
            raise NotFoundError("User or challenge not found")

        invitation = Invitation(
            id=str(uuid4()),
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            challenge_id=challenge_id,
            status=InviteStatus.PENDING.value,
            created_at=to_timestamp(now),
        )
        doc.invitations.append(invitation)

    log_event(
        "info",
        "invitation.created",
        user_id=from_user_id,
        challenge_id=challenge_id,
        event_type="invitation.create",
        extra={"to_user_id": to_user_id},
    )
    return invitation


def get_invitations_for_user(store: JsonRecordStore, user_id: str) -> List[Invitation]:
    """Invitations addressed to the user."""
    return [i for i in store.snapshot().invitations if i.to_user_id == user_id]
