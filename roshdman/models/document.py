from typing import Any, Dict, List

from pydantic import Field, PrivateAttr
from pydantic import ValidationError as SchemaError

from roshdman.models.base import RecordModel
from roshdman.models.challenge import Challenge, PenaltyEvent
from roshdman.models.invite import Invitation
from roshdman.models.user import User


class Charity(RecordModel):
    id: str
    name: str
    link: str


DEFAULT_CHARITIES = (
    {"id": "charity1", "name": "محک", "link": "https://mahak-charity.org/online-payment/"},
    {"id": "charity2", "name": "کهریزک", "link": "https://kahrizakcharity.com/"},
)


class Document(RecordModel):
    """The whole store: five collections, each in insertion order."""

    users: List[User] = Field(default_factory=list)
    challenges: List[Challenge] = Field(default_factory=list)
    invitations: List[Invitation] = Field(default_factory=list)
    penalties: List[PenaltyEvent] = Field(default_factory=list)
    charities: List[Charity] = Field(default_factory=list)

    # Raw records that did not fit their model, written back untouched on save
    _unreadable: Dict[str, List[Any]] = PrivateAttr(default_factory=dict)

    @classmethod
    def default(cls) -> "Document":
        return cls(charities=[Charity(**c) for c in DEFAULT_CHARITIES])

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "Document":
        """
        Build a document from parsed JSON one record at a time.

        A record that does not validate is set aside instead of failing the
        whole load. A collection that is missing, null or not a list reads
        as empty.
        """
        readable: Dict[str, Any] = dict(raw)
        unreadable: Dict[str, List[Any]] = {}
        for name, model in RECORD_TYPES.items():
            records = raw.get(name)
            if not isinstance(records, list):
                readable[name] = []
                continue
            kept = []
            for record in records:
                try:
                    kept.append(model.model_validate(record))
                except SchemaError:
                    unreadable.setdefault(name, []).append(record)
            readable[name] = kept

        doc = cls.model_validate(readable)
        doc._unreadable = unreadable
        return doc

    def unreadable_count(self) -> int:
        return sum(len(records) for records in self._unreadable.values())

    def to_json_dict(self) -> dict:
        data = super().to_json_dict()
        for name, records in self._unreadable.items():
            data[name].extend(records)
        return data


RECORD_TYPES = {
    "users": User,
    "challenges": Challenge,
    "invitations": Invitation,
    "penalties": PenaltyEvent,
    "charities": Charity,
}
