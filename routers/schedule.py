from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import admin_only, staff_only
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document
from schemas import Schedule, ScheduleOut

router = APIRouter(prefix="/api/schedule", tags=["schedule"], dependencies=[Depends(staff_only)])


@router.get("", response_model=List[ScheduleOut])
def list_schedules(db: Database = Depends(get_db)):
    return get_documents(db, "schedule", sort=[("start_date_time", 1)])


@router.get("/staff/{staff_id}", response_model=List[ScheduleOut])
def staff_schedule(staff_id: str, db: Database = Depends(get_db)):
    return get_documents(db, "schedule", {"staff_id": staff_id}, sort=[("start_date_time", 1)])


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(schedule_id: str, db: Database = Depends(get_db)):
    return require_document(db, "schedule", schedule_id, "Schedule")


@router.post("", response_model=ScheduleOut, status_code=201)
def create_schedule(schedule: Schedule, db: Database = Depends(get_db)):
    schedule_id = create_document(db, "schedule", schedule)
    return ScheduleOut(id=schedule_id, **schedule.model_dump())


@router.put("/{schedule_id}")
def update_schedule(schedule_id: str, schedule: Schedule, db: Database = Depends(get_db)):
    if not replace_document(db, "schedule", schedule_id, schedule):
        raise HTTPException(status_code=404, detail="Schedule not found")
    return {"updated": True}


@router.delete("/{schedule_id}", dependencies=[Depends(admin_only)])
def delete_schedule(schedule_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "schedule", schedule_id):
        raise HTTPException(status_code=404, detail="Schedule not found")
    return {"deleted": True}
