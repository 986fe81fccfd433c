from datetime import datetime, timedelta
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.database import Database

from auth import anyone, staff_only
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document, serialize, to_utc
from schemas import Booking, BookingOut

router = APIRouter(prefix="/api/booking", tags=["booking"])


@router.get("", response_model=List[BookingOut], dependencies=[Depends(staff_only)])
def list_bookings(db: Database = Depends(get_db)):
    return get_documents(db, "booking")


@router.get("/guest-bookings/{guest_id}", response_model=List[BookingOut], dependencies=[Depends(anyone)])
def guest_bookings(guest_id: str, db: Database = Depends(get_db)):
    return get_documents(db, "booking", {"guest_id": guest_id})


@router.get("/bookings-by-date", response_model=BookingOut, dependencies=[Depends(anyone)])
def booking_by_date(date: datetime = Query(..., description="Exact booking date and time"), db: Database = Depends(get_db)):
    booking = serialize(db["booking"].find_one({"date_time": to_utc(date)}))
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.get("/sorted-bookings-by-date", response_model=List[BookingOut], dependencies=[Depends(staff_only)])
def bookings_of_day(date: datetime = Query(..., description="Any moment of the day"), db: Database = Depends(get_db)):
    day = to_utc(date)
    start = datetime(day.year, day.month, day.day)
    end = start + timedelta(days=1)
    return get_documents(
        db,
        "booking",
        {"date_time": {"$gte": start, "$lt": end}},
        sort=[("date_time", -1)],
    )


@router.get("/{booking_id}", response_model=BookingOut, dependencies=[Depends(anyone)])
def get_booking(booking_id: str, db: Database = Depends(get_db)):
    return require_document(db, "booking", booking_id, "Booking")


@router.post("", response_model=BookingOut, status_code=201, dependencies=[Depends(anyone)])
def create_booking(booking: Booking, db: Database = Depends(get_db)):
    booking_id = create_document(db, "booking", booking)
    return BookingOut(id=booking_id, **booking.model_dump())


@router.put("/{booking_id}", dependencies=[Depends(anyone)])
def update_booking(booking_id: str, booking: Booking, db: Database = Depends(get_db)):
    if not replace_document(db, "booking", booking_id, booking):
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"updated": True}


@router.delete("/{booking_id}", dependencies=[Depends(anyone)])
def delete_booking(booking_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "booking", booking_id):
        raise HTTPException(status_code=404, detail="Booking not found")
    return {"deleted": True}
