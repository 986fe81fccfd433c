import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import admin_only
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document
from schemas import Restaurant, RestaurantOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/restaurant", tags=["restaurant"], dependencies=[Depends(admin_only)])


@router.get("", response_model=List[RestaurantOut])
def list_restaurants(db: Database = Depends(get_db)):
    return get_documents(db, "restaurant")


@router.get("/{restaurant_id}", response_model=RestaurantOut)
def get_restaurant(restaurant_id: str, db: Database = Depends(get_db)):
    return require_document(db, "restaurant", restaurant_id, "Restaurant")


@router.post("", response_model=RestaurantOut, status_code=201)
def create_restaurant(restaurant: Restaurant, db: Database = Depends(get_db)):
    restaurant_id = create_document(db, "restaurant", restaurant)
    logger.info("Created restaurant %s", restaurant_id)
    return RestaurantOut(id=restaurant_id, **restaurant.model_dump())


@router.put("/{restaurant_id}")
def update_restaurant(restaurant_id: str, restaurant: Restaurant, db: Database = Depends(get_db)):
    if not replace_document(db, "restaurant", restaurant_id, restaurant):
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return {"updated": True}


@router.delete("/{restaurant_id}")
def delete_restaurant(restaurant_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "restaurant", restaurant_id):
        raise HTTPException(status_code=404, detail="Restaurant not found")
    logger.info("Deleted restaurant %s", restaurant_id)
    return {"deleted": True}
