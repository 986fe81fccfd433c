from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database

from auth import admin_only, staff_only
from database import create_document, delete_document, get_db, get_documents, replace_document, require_document
from schemas import Product, ProductOut

router = APIRouter(prefix="/api/product", tags=["product"])


@router.get("", response_model=List[ProductOut], dependencies=[Depends(staff_only)])
def list_products(db: Database = Depends(get_db)):
    return get_documents(db, "product", sort=[("name", 1)])


@router.get("/{product_id}", response_model=ProductOut, dependencies=[Depends(staff_only)])
def get_product(product_id: str, db: Database = Depends(get_db)):
    return require_document(db, "product", product_id, "Product")


@router.post("", response_model=ProductOut, status_code=201, dependencies=[Depends(admin_only)])
def create_product(product: Product, db: Database = Depends(get_db)):
    product_id = create_document(db, "product", product)
    return ProductOut(id=product_id, **product.model_dump())


@router.put("/{product_id}", dependencies=[Depends(admin_only)])
def update_product(product_id: str, product: Product, db: Database = Depends(get_db)):
    if not replace_document(db, "product", product_id, product):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"updated": True}


@router.delete("/{product_id}", dependencies=[Depends(admin_only)])
def delete_product(product_id: str, db: Database = Depends(get_db)):
    if not delete_document(db, "product", product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return {"deleted": True}
