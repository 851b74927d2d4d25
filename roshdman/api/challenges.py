from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.features.challenges.service import ChallengeService
from roshdman.models.challenge import (
    AddWitnessRequest,
    ConfirmPaymentRequest,
    CreateChallengeRequest,
    RecordPenaltyRequest,
)

router = APIRouter()


def get_challenge_service(store: JsonRecordStore = Depends(get_store)) -> ChallengeService:
    return ChallengeService(store)


@router.post("/challenges")
def create_challenge(
    req: Optional[CreateChallengeRequest] = None,
    service: ChallengeService = Depends(get_challenge_service),
):
    req = req or CreateChallengeRequest()
    challenge = service.create(
        user_id=req.user_id,
        title=req.title,
        description=req.description,
        duration=req.duration,
        penalty=req.penalty,
        charity_id=req.charity_id,
    )
    return {"challenge": challenge.to_json_dict(), "message": "Challenge created"}


@router.post("/challenges/{challenge_id}/penalties")
def record_penalty(
    challenge_id: str,
    req: Optional[RecordPenaltyRequest] = None,
    service: ChallengeService = Depends(get_challenge_service),
):
    """Record a missed day. Caller must be the owner or a witness."""
    req = req or RecordPenaltyRequest()
    challenge, penalty = service.record_penalty(challenge_id=challenge_id, recorded_by=req.recorded_by)
    return {
        "challenge": challenge.to_json_dict(),
        "penalty": penalty.to_json_dict(),
        "message": "Penalty recorded",
    }


@router.post("/challenges/{challenge_id}/confirm-payment")
def confirm_payment(
    challenge_id: str,
    req: Optional[ConfirmPaymentRequest] = None,
    service: ChallengeService = Depends(get_challenge_service),
):
    """Owner-only. Zeroes totalPenalty and progress, drops the penalty history."""
    req = req or ConfirmPaymentRequest()
    challenge = service.confirm_payment(challenge_id=challenge_id, user_id=req.user_id)
    return {"challenge": challenge.to_json_dict(), "message": "Payment confirmed and penalties reset"}


@router.post("/challenges/{challenge_id}/witnesses")
def add_witness(
    challenge_id: str,
    req: Optional[AddWitnessRequest] = None,
    service: ChallengeService = Depends(get_challenge_service),
):
    req = req or AddWitnessRequest()
    challenge = service.add_witness(challenge_id=challenge_id, witness_id=req.witness_id)
    return {"challenge": challenge.to_json_dict(), "message": "Witness added"}


@router.get("/challenges/{user_id}")
def list_challenges(user_id: str, service: ChallengeService = Depends(get_challenge_service)):
    """Challenges the user owns or witnesses."""
    return [c.to_json_dict() for c in service.list_for_user(user_id)]


@router.get("/challenges/{challenge_id}/penalties")
def list_penalties(challenge_id: str, service: ChallengeService = Depends(get_challenge_service)):
    return [p.to_json_dict() for p in service.list_penalties(challenge_id)]
