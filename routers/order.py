import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import anyone, staff_only
from database import (
    create_document,
    delete_document,
    get_db,
    get_documents,
    object_id,
    replace_document,
    require_document,
)
from schemas import Order, Orderitem, OrderitemCreate, OrderitemOut, OrderOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/order", tags=["order"])


@router.get("", response_model=List[OrderOut], dependencies=[Depends(staff_only)])
def list_orders(db: Database = Depends(get_db)):
    return get_documents(db, "order", sort=[("date_time", -1)])


@router.post("", response_model=OrderOut, status_code=201, dependencies=[Depends(anyone)])
def create_order(order: Order, db: Database = Depends(get_db)):
    order_id = create_document(db, "order", order)
    return OrderOut(id=order_id, **order.model_dump())


@router.delete("/items/{item_id}", dependencies=[Depends(staff_only)])
def delete_order_item(item_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "orderitem", item_id):
        raise HTTPException(status_code=404, detail="Order item not found")
    return {"deleted": True}


@router.get("/{order_id}", response_model=OrderOut, dependencies=[Depends(anyone)])
def get_order(order_id: str, db: Database = Depends(get_db)):
    return require_document(db, "order", order_id, "Order")


@router.put("/{order_id}", dependencies=[Depends(staff_only)])
def update_order(order_id: str, order: Order, db: Database = Depends(get_db)):
    if not replace_document(db, "order", order_id, order):
        raise HTTPException(status_code=404, detail="Order not found")
    return {"updated": True}


@router.delete("/{order_id}", dependencies=[Depends(staff_only)])
def delete_order(order_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "order", order_id):
        raise HTTPException(status_code=404, detail="Order not found")
    removed = db["orderitem"].delete_many({"order_id": order_id}).deleted_count
    logger.info("Deleted order %s with %d items", order_id, removed)
    return {"deleted": True}


# Line items

@router.get("/{order_id}/items", response_model=List[OrderitemOut], dependencies=[Depends(anyone)])
def list_order_items(order_id: str, db: Database = Depends(get_db)):
    require_document(db, "order", order_id, "Order")
    return get_documents(db, "orderitem", {"order_id": order_id})


@router.post("/{order_id}/items", response_model=OrderitemOut, status_code=201, dependencies=[Depends(anyone)])
def add_order_item(order_id: str, payload: OrderitemCreate, db: Database = Depends(get_db)):
    require_document(db, "order", order_id, "Order")
    menu_item = db["menuitem"].find_one({"_id": object_id(payload.menu_id)})
    if not menu_item:
        raise HTTPException(status_code=400, detail=f"Menu item {payload.menu_id} not found")

    item = Orderitem(order_id=order_id, **payload.model_dump())
    item_id = create_document(db, "orderitem", item)
    return OrderitemOut(id=item_id, **item.model_dump())
