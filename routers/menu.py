import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import admin_only, anyone
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document
from schemas import MENU_DRINK, MENU_FIRST_DISHES, MENU_SECOND_DISHES, DishPopularity, Menuitem, MenuitemOut
from services import get_most_popular_dishes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/menu", tags=["menu"])


def _restaurant_menu(db: Database, restaurant_id: str, dish_type: Optional[str] = None):
    query = {"restaurant_id": restaurant_id}
    if dish_type is not None:
        query["type"] = dish_type
    return get_documents(db, "menuitem", query)


@router.get("", response_model=List[MenuitemOut], dependencies=[Depends(anyone)])
def list_menu(db: Database = Depends(get_db)):
    return get_documents(db, "menuitem")


@router.get("/restaurant/{restaurant_id}/menu", response_model=List[MenuitemOut], dependencies=[Depends(anyone)])
def restaurant_menu(restaurant_id: str, db: Database = Depends(get_db)):
    return _restaurant_menu(db, restaurant_id)


@router.get("/restaurant/{restaurant_id}/first-dishes", response_model=List[MenuitemOut], dependencies=[Depends(anyone)])
def first_dishes(restaurant_id: str, db: Database = Depends(get_db)):
    return _restaurant_menu(db, restaurant_id, MENU_FIRST_DISHES)


@router.get("/restaurant/{restaurant_id}/second-dishes", response_model=List[MenuitemOut], dependencies=[Depends(anyone)])
def second_dishes(restaurant_id: str, db: Database = Depends(get_db)):
    return _restaurant_menu(db, restaurant_id, MENU_SECOND_DISHES)


@router.get("/restaurant/{restaurant_id}/drinks", response_model=List[MenuitemOut], dependencies=[Depends(anyone)])
def drinks(restaurant_id: str, db: Database = Depends(get_db)):
    return _restaurant_menu(db, restaurant_id, MENU_DRINK)


@router.get("/restaurant/{restaurant_id}/dishes-rating", response_model=List[DishPopularity], dependencies=[Depends(admin_only)])
def dishes_rating(restaurant_id: str, db: Database = Depends(get_db)):
    return get_most_popular_dishes(db, restaurant_id)


@router.get("/{menu_id}", response_model=MenuitemOut, dependencies=[Depends(anyone)])
def get_menu_item(menu_id: str, db: Database = Depends(get_db)):
    return require_document(db, "menuitem", menu_id, "Menu item")


@router.post("", response_model=MenuitemOut, status_code=201, dependencies=[Depends(admin_only)])
def add_menu_item(item: Menuitem, db: Database = Depends(get_db)):
    inserted_id = create_document(db, "menuitem", item)
    return MenuitemOut(id=inserted_id, **item.model_dump())


@router.put("/{menu_id}", dependencies=[Depends(admin_only)])
def update_menu_item(menu_id: str, item: Menuitem, db: Database = Depends(get_db)):
    if not replace_document(db, "menuitem", menu_id, item):
        raise HTTPException(status_code=404, detail="Menu item not found")
    return {"updated": True}


@router.delete("/{menu_id}", dependencies=[Depends(admin_only)])
def delete_menu_item(menu_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "menuitem", menu_id):
        raise HTTPException(status_code=404, detail="Menu item not found")
    logger.info("Deleted menu item %s", menu_id)
    return {"deleted": True}
