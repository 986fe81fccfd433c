import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.database import Database

from auth import admin_only, guest_only, guest_or_admin, guest_token, hash_password, verify_password
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document, serialize
from schemas import Coupon, Guest, GuestOut, GuestRegistration, GuestUpdate, LoginRequest, TokenResponse
from services import calculate_coupon

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/guest", tags=["guest"])


@router.get("", response_model=List[GuestOut], dependencies=[Depends(admin_only)])
def list_guests(db: Database = Depends(get_db)):
    return get_documents(db, "guest")


@router.get("/sorted-by-name-and-bonus", response_model=List[GuestOut], dependencies=[Depends(admin_only)])
def list_guests_sorted(db: Database = Depends(get_db)):
    return get_documents(db, "guest", sort=[("bonus", 1), ("name", 1)])


@router.post("/make-coupon", response_model=Coupon, dependencies=[Depends(guest_only)])
def make_coupon(bonus: int = Query(..., ge=0, description="Bonus points to redeem")):
    # Stateless: the stored balance is neither checked nor debited here
    discount, remaining = calculate_coupon(bonus)
    return Coupon(discount=discount, bonus=remaining)


@router.post("/register", response_model=TokenResponse)
def register(payload: GuestRegistration, db: Database = Depends(get_db)):
    if db["guest"].find_one({"email": payload.email}):
        raise HTTPException(status_code=400, detail="Guest with such email already exists")
    if db["guest"].find_one({"login": payload.login}):
        raise HTTPException(status_code=400, detail="Guest with such login already exists")

    guest = Guest(
        name=payload.name,
        phone=payload.phone,
        email=payload.email,
        login=payload.login,
        password=hash_password(payload.password),
        bonus=0,
    )
    guest_id = create_document(db, "guest", guest)
    logger.info("Registered guest %s", guest_id)
    return TokenResponse(token=guest_token({"id": guest_id, **guest.model_dump()}))


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    guest = serialize(db["guest"].find_one({"login": payload.login}))
    if guest is None:
        raise HTTPException(status_code=400, detail="Guest with such login does not exist")
    if not verify_password(payload.password, guest.get("password")):
        raise HTTPException(status_code=400, detail="Invalid login or password")
    return TokenResponse(token=guest_token(guest))


@router.get("/{guest_id}", response_model=GuestOut, dependencies=[Depends(guest_or_admin)])
def get_guest(guest_id: str, db: Database = Depends(get_db)):
    return require_document(db, "guest", guest_id, "Guest")


@router.put("/{guest_id}", dependencies=[Depends(guest_or_admin)])
def update_guest(guest_id: str, payload: GuestUpdate, db: Database = Depends(get_db)):
    existing = require_document(db, "guest", guest_id, "Guest")
    taken = db["guest"].find_one({"login": payload.login})
    if taken is not None and str(taken["_id"]) != guest_id:
        raise HTTPException(status_code=400, detail="Guest with such login already exists")

    data = payload.model_dump(exclude={"password"})
    data["password"] = hash_password(payload.password) if payload.password else existing.get("password")
    replace_document(db, "guest", guest_id, Guest(**data))
    return {"updated": True}


@router.delete("/{guest_id}", dependencies=[Depends(admin_only)])
def delete_guest(guest_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "guest", guest_id):
        raise HTTPException(status_code=404, detail="Guest not found")
    logger.info("Deleted guest %s", guest_id)
    return {"deleted": True}
