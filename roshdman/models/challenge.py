from typing import List, Optional, Union

from pydantic import Field, StrictBool, field_validator

from roshdman.models.base import CamelModel, RecordModel


class Challenge(RecordModel):
    """A self-commitment: `duration` check-ins, `penalty` charged per miss.

    Older files can hold `null` for the numeric fields; an unknown duration
    never caps progress and an unknown penalty charges nothing.
    """

    id: str
    user_id: str
    title: str
    description: Optional[str] = ""
    duration: Optional[int] = None
    penalty: Optional[int] = None
    charity_id: Optional[str] = None
    progress: int = 0
    total_penalty: int = 0
    witnesses: List[str] = Field(default_factory=list)
    created_at: Optional[str] = None

    @field_validator("progress", "total_penalty", mode="before")
    @classmethod
    def _null_counter_is_zero(cls, value):
        return 0 if value is None else value

    @field_validator("witnesses", mode="before")
    @classmethod
    def _null_witnesses_is_empty(cls, value):
        return [] if value is None else value

    def is_completed(self) -> bool:
        return self.duration is not None and self.progress >= self.duration

    def can_record_penalty(self, user_id: Optional[str]) -> bool:
        return user_id == self.user_id or user_id in self.witnesses


class PenaltyEvent(RecordModel):
    id: str
    challenge_id: str
    date: Optional[str] = None
    amount: Optional[int] = None
    recorded_by: Optional[str] = None


# StrictBool first so JSON booleans reach the numeric check as bools
NumericInput = Union[StrictBool, int, float, str]


class CreateChallengeRequest(CamelModel):
    user_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[NumericInput] = None
    penalty: Optional[NumericInput] = None
    charity_id: Optional[str] = None


class RecordPenaltyRequest(CamelModel):
    recorded_by: Optional[str] = None


class ConfirmPaymentRequest(CamelModel):
    user_id: Optional[str] = None


class AddWitnessRequest(CamelModel):
    witness_id: Optional[str] = None
