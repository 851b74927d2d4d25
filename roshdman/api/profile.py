"""
Profile and weekly statistics API

GET /profile/{user_id}     challenge counts and accrued penalty
GET /statistics/{user_id}  penalty activity over the trailing 7 days

Both only look at challenges the user owns.
"""

from fastapi import APIRouter, Depends

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.features.statistics.service import StatisticsService

router = APIRouter(tags=["profile"])


@router.get("/profile/{user_id}")
def get_profile(user_id: str, store: JsonRecordStore = Depends(get_store)):
    stats = StatisticsService(store).profile(user_id)
    return {"stats": stats.to_json_dict(), "message": "Profile statistics"}


@router.get("/statistics/{user_id}")
def get_weekly_statistics(user_id: str, store: JsonRecordStore = Depends(get_store)):
    stats = StatisticsService(store).weekly(user_id)
    return {"stats": stats.to_json_dict(), "message": "Weekly statistics"}
