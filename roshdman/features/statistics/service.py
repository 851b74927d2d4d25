"""
Per-user aggregates over the user's own challenges (witnessed ones excluded).

- profile: challenge counts and accrued penalty
- weekly: penalty events in the trailing 7 days plus a per-day breakdown
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from roshdman.core.store import JsonRecordStore
from roshdman.models.base import CamelModel, parse_timestamp, utc_now
from roshdman.models.challenge import Challenge, PenaltyEvent
from roshdman.models.document import Document

WINDOW_DAYS = 7


class ProfileStats(CamelModel):
    total_challenges: int
    active_challenges: int
    completed_challenges: int
    total_penalties: int


class DailyPenalties(CamelModel):
    date: str  # YYYY-MM-DD (UTC)
    count: int
    amount: int


class WeeklyStats(CamelModel):
    weekly_count: int
    weekly_total_penalty: int
    daily_breakdown: List[DailyPenalties]


class StatisticsService:
    def __init__(self, store: JsonRecordStore):
        self.store = store

    def profile(self, user_id: str) -> ProfileStats:
        challenges = self._own_challenges(self.store.snapshot(), user_id)
        completed = sum(1 for c in challenges if c.is_completed())
        return ProfileStats(
            total_challenges=len(challenges),
            active_challenges=len(challenges) - completed,
            completed_challenges=completed,
            total_penalties=sum(c.total_penalty for c in challenges),
        )

    def weekly(self, user_id: str, *, now: Optional[datetime] = None) -> WeeklyStats:
        now = (now or utc_now()).astimezone(timezone.utc)
        cutoff = now - timedelta(days=WINDOW_DAYS)

        doc = self.store.snapshot()
        own_ids = {c.id for c in self._own_challenges(doc, user_id)}
        dated = [
            (p, parse_timestamp(p.date))
            for p in doc.penalties
            if p.challenge_id in own_ids
        ]
        dated = [(p, moment) for p, moment in dated if moment is not None]

        in_window = [p for p, moment in dated if moment >= cutoff]

        today = now.date()
        days = [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]
        breakdown = [self._day_totals(day, dated) for day in days]

        return WeeklyStats(
            weekly_count=len(in_window),
            weekly_total_penalty=sum(p.amount or 0 for p in in_window),
            daily_breakdown=breakdown,
        )

    @staticmethod
    def _own_challenges(doc: Document, user_id: str) -> List[Challenge]:
        return [c for c in doc.challenges if c.user_id == user_id]

    @staticmethod
    def _day_totals(day: date, dated: List[tuple[PenaltyEvent, datetime]]) -> DailyPenalties:
        matching = [p for p, moment in dated if moment.date() == day]
        return DailyPenalties(
            date=day.isoformat(),
            count=len(matching),
            amount=sum(p.amount or 0 for p in matching),
        )
