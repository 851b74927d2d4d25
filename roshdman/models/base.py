"""Shared pydantic base for stored records and request bodies.

Python attributes are snake_case; the JSON document and the HTTP API use
camelCase.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RecordModel(CamelModel):
    """A record inside the JSON document. Unknown keys survive a round trip."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_timestamp(moment: Optional[datetime] = None) -> str:
    """Render ``2026-10-16T08:30:00.123Z`` (UTC, millisecond precision)."""
    moment = (moment or utc_now()).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp; None when it is absent or malformed."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
