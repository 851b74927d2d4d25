"""
roshdman/api/invitations.py
FastAPI routes for witness invitations.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.features.invitations.service import (
    create_invitation as service_create_invitation,
    get_invitations_for_user,
)
from roshdman.models.invite import CreateInvitationRequest

router = APIRouter()


@router.post("/invitations")
def create_invitation(
    req: Optional[CreateInvitationRequest] = None,
    store: JsonRecordStore = Depends(get_store),
):
    """
    Invite a user to a challenge.

    Request body:
        fromUserId: inviting user
        toUserId: invited user
        challengeId: challenge the invite is about

    Returns:
        The pending invitation
    """
    req = req or CreateInvitationRequest()
    invitation = service_create_invitation(
        store,
        from_user_id=req.from_user_id,
        to_user_id=req.to_user_id,
        challenge_id=req.challenge_id,
    )
    return {"invitation": invitation.to_json_dict(), "message": "Invitation sent"}


@router.get("/invitations/{user_id}")
def list_invitations(user_id: str, store: JsonRecordStore = Depends(get_store)):
    """Invitations addressed to the user."""
    return [i.to_json_dict() for i in get_invitations_for_user(store, user_id)]
