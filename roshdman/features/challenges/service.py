from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import uuid4

from roshdman.core.errors import AuthorizationError, NotFoundError
from roshdman.core.logging import log_event
from roshdman.core.store import JsonRecordStore
from roshdman.core.validation import parse_positive_int, require
from roshdman.models.base import to_timestamp
from roshdman.models.challenge import Challenge, NumericInput, PenaltyEvent
from roshdman.models.document import Document


class ChallengeService:
    """Challenge lifecycle: create, witnesses, penalties, payment confirmation."""

    def __init__(self, store: JsonRecordStore):
        self.store = store

    def create(
        self,
        *,
        user_id: Optional[str],
        title: Optional[str],
        duration: Optional[NumericInput],
        penalty: Optional[NumericInput],
        charity_id: Optional[str],
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Challenge:
        require(
            {
                "userId": user_id,
                "title": title,
                "duration": duration,
                "penalty": penalty,
                "charityId": charity_id,
            },
            "All fields are required",
        )

        challenge = Challenge(
            id=str(uuid4()),
            user_id=user_id,
            title=title,
            description=description or "",
            duration=parse_positive_int(duration, "duration"),
            penalty=parse_positive_int(penalty, "penalty"),
            charity_id=charity_id,
            progress=0,
            total_penalty=0,
            witnesses=[],
            created_at=to_timestamp(now),
        )

        with self.store.transaction() as doc:
            doc.challenges.append(challenge)

        log_event(
            "info",
            "challenge.created",
            user_id=user_id,
            challenge_id=challenge.id,
            event_type="challenge.create",
            extra={"duration": challenge.duration, "penalty": challenge.penalty},
        )
        return challenge

    def add_witness(self, *, challenge_id: str, witness_id: Optional[str]) -> Challenge:
        """Add a witness (idempotent)."""
        with self.store.transaction() as doc:
            challenge = self._find(doc, challenge_id)
            if not any(u.id == witness_id for u in doc.users):
                raise NotFoundError("Witness user not found")
            if witness_id not in challenge.witnesses:
                challenge.witnesses.append(witness_id)

        log_event(
            "info",
            "challenge.witness_added",
            user_id=witness_id,
            challenge_id=challenge_id,
            event_type="challenge.witness",
        )
        return challenge

    def record_penalty(
        self,
        *,
        challenge_id: str,
        recorded_by: Optional[str],
        now: Optional[datetime] = None,
    ) -> Tuple[Challenge, PenaltyEvent]:
        """Record a missed day; owner or witness only."""
        with self.store.transaction() as doc:
            challenge = self._find(doc, challenge_id)
            if not challenge.can_record_penalty(recorded_by):
                raise AuthorizationError("Only the challenge owner or a witness can record a penalty")

            amount = challenge.penalty or 0
            progress = challenge.progress + 1
            if challenge.duration is not None:
                progress = min(progress, challenge.duration)
            challenge.progress = progress
            challenge.total_penalty += amount
            event = PenaltyEvent(
                id=str(uuid4()),
                challenge_id=challenge_id,
                date=to_timestamp(now),
                amount=amount,
                recorded_by=recorded_by or challenge.user_id,
            )
            doc.penalties.append(event)

        log_event(
            "info",
            "challenge.penalty_recorded",
            user_id=event.recorded_by,
            challenge_id=challenge_id,
            event_type="challenge.penalty",
            extra={"amount": event.amount, "progress": challenge.progress},
        )
        return challenge, event

    def confirm_payment(self, *, challenge_id: str, user_id: Optional[str]) -> Challenge:
        """Owner confirms the donation: penalty, history and progress go back to zero."""
        with self.store.transaction() as doc:
            challenge = next(
                (c for c in doc.challenges if c.id == challenge_id and c.user_id == user_id),
                None,
            )
            if challenge is None:
                raise NotFoundError("Challenge not found or access denied")

            challenge.total_penalty = 0
            challenge.progress = 0
            doc.penalties = [p for p in doc.penalties if p.challenge_id != challenge_id]

        log_event(
            "info",
            "challenge.payment_confirmed",
            user_id=user_id,
            challenge_id=challenge_id,
            event_type="challenge.payment",
        )
        return challenge

    def list_for_user(self, user_id: str) -> List[Challenge]:
        """Challenges the user owns or witnesses."""
        doc = self.store.snapshot()
        return [c for c in doc.challenges if c.user_id == user_id or user_id in c.witnesses]

    def list_penalties(self, challenge_id: str) -> List[PenaltyEvent]:
        doc = self.store.snapshot()
        return [p for p in doc.penalties if p.challenge_id == challenge_id]

    # Internal helpers -------------------------------------------------
    @staticmethod
    def _find(doc: Document, challenge_id: str) -> Challenge:
        challenge = next((c for c in doc.challenges if c.id == challenge_id), None)
        if challenge is None:
            raise NotFoundError("Challenge not found")
        return challenge
