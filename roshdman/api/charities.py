from fastapi import APIRouter, Depends

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.features.charities.service import list_charities

router = APIRouter()


@router.get("/charities")
def get_charities(store: JsonRecordStore = Depends(get_store)):
    return [c.to_json_dict() for c in list_charities(store)]
