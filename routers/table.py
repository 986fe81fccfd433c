from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import admin_only, staff_only
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document
from schemas import Table, TableOut

router = APIRouter(prefix="/api/table", tags=["table"])


@router.get("", response_model=List[TableOut], dependencies=[Depends(staff_only)])
def list_tables(db: Database = Depends(get_db)):
    return get_documents(db, "table", sort=[("number", 1)])


@router.get("/{table_id}", response_model=TableOut, dependencies=[Depends(staff_only)])
def get_table(table_id: str, db: Database = Depends(get_db)):
    return require_document(db, "table", table_id, "Table")


@router.post("", response_model=TableOut, status_code=201, dependencies=[Depends(admin_only)])
def create_table(table: Table, db: Database = Depends(get_db)):
    if db["table"].find_one({"number": table.number}):
        raise HTTPException(status_code=400, detail=f"Table {table.number} already exists")
    table_id = create_document(db, "table", table)
    return TableOut(id=table_id, **table.model_dump())


@router.put("/{table_id}", dependencies=[Depends(staff_only)])
def update_table(table_id: str, table: Table, db: Database = Depends(get_db)):
    if not replace_document(db, "table", table_id, table):
        raise HTTPException(status_code=404, detail="Table not found")
    return {"updated": True}


@router.delete("/{table_id}", dependencies=[Depends(admin_only)])
def delete_table(table_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "table", table_id):
        raise HTTPException(status_code=404, detail="Table not found")
    return {"deleted": True}
