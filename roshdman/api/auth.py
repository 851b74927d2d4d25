from typing import Optional

from fastapi import APIRouter, Depends

from roshdman.core.store import JsonRecordStore, get_store
from roshdman.features.users.service import UserService
from roshdman.models.user import LoginRequest, RegisterRequest

router = APIRouter()


@router.post("/register")
def register(req: Optional[RegisterRequest] = None, store: JsonRecordStore = Depends(get_store)):
    req = req or RegisterRequest()
    user = UserService(store).register(name=req.name, email=req.email, password=req.password)
    return {"user": user.to_json_dict(), "message": "Registration successful"}


@router.post("/login")
def login(req: Optional[LoginRequest] = None, store: JsonRecordStore = Depends(get_store)):
    """Check credentials. No token is issued; clients keep the returned user id."""
    req = req or LoginRequest()
    user = UserService(store).login(email=req.email, password=req.password)
    return {"user": user.to_json_dict(), "message": "Login successful"}
