import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.database import Database

from auth import admin_only, hash_password, staff_only, staff_token, verify_password
from database import (
    create_document,
    delete_document,
    get_db,
    get_documents,
    replace_document,
    require_document,
    serialize,
    to_utc,
)
from schemas import LoginRequest, Staff, StaffOut, StaffRegistration, StaffReport, StaffUpdate, TokenResponse
from services import get_weekly_working_hours

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/staff", tags=["staff"])


def _ensure_login_free(db: Database, login: str, staff_id: Optional[str] = None):
    taken = db["staff"].find_one({"login": login})
    if taken is not None and str(taken["_id"]) != staff_id:
        raise HTTPException(status_code=400, detail="Staff with such login already exists")


@router.get("", response_model=List[StaffOut], dependencies=[Depends(admin_only)])
def list_staff(db: Database = Depends(get_db)):
    return get_documents(db, "staff")


@router.get("/weekly-working-hours", response_model=List[StaffReport], dependencies=[Depends(admin_only)])
def weekly_working_hours(date: datetime = Query(..., description="First day of the week"), db: Database = Depends(get_db)):
    return get_weekly_working_hours(db, to_utc(date))


@router.post("/register", response_model=TokenResponse, dependencies=[Depends(admin_only)])
def register(payload: StaffRegistration, db: Database = Depends(get_db)):
    _ensure_login_free(db, payload.login)
    staff = Staff(**payload.model_dump(exclude={"password"}), password=hash_password(payload.password))
    staff_id = create_document(db, "staff", staff)
    logger.info("Registered staff member %s as %s", staff_id, staff.position)
    return TokenResponse(token=staff_token({"id": staff_id, **staff.model_dump()}))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    staff = serialize(db["staff"].find_one({"login": payload.login}))
    if staff is None:
        raise HTTPException(status_code=400, detail="Staff with such login does not exist")
    if not verify_password(payload.password, staff.get("password")):
        raise HTTPException(status_code=400, detail="Invalid login or password")
    return TokenResponse(token=staff_token(staff))


@router.get("/{staff_id}", response_model=StaffOut, dependencies=[Depends(staff_only)])
def get_staff(staff_id: str, db: Database = Depends(get_db)):
    return require_document(db, "staff", staff_id, "Staff")


@router.put("/{staff_id}", dependencies=[Depends(staff_only)])
def update_staff(staff_id: str, payload: StaffUpdate, db: Database = Depends(get_db)):
    existing = require_document(db, "staff", staff_id, "Staff")
    _ensure_login_free(db, payload.login, staff_id)

    password = hash_password(payload.password) if payload.password else existing.get("password")
    staff = Staff(**payload.model_dump(exclude={"password"}), password=password)
    replace_document(db, "staff", staff_id, staff)
    return {"updated": True}


@router.delete("/{staff_id}", dependencies=[Depends(admin_only)])
def delete_staff(staff_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "staff", staff_id):
        raise HTTPException(status_code=404, detail="Staff not found")
    logger.info("Deleted staff member %s", staff_id)
    return {"deleted": True}
