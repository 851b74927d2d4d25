from typing import List

from roshdman.core.store import JsonRecordStore
from roshdman.models.document import Charity


def list_charities(store: JsonRecordStore) -> List[Charity]:
    return store.snapshot().charities
