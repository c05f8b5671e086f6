from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from expenso.database import get_db
from expenso.schemas import Message, RowIdPath
from expenso.users.auth import get_current_user
from expenso.users.schemas import CurrentUserSchema
from . import schemas, service

router = APIRouter()


# ================= LIST =================
@router.get("", response_model=List[schemas.CategoryOut])
def list_categories(
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.list_categories(db, current_user.id)


# ================= CREATE =================
@router.post(
    "",
    response_model=schemas.CategoryCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    category: schemas.CategoryCreate,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    db_category = service.create_category(db, current_user.id, category)
    return {"message": "Category created successfully", "id": db_category.id}


# ================= UPDATE =================
@router.put("/{category_id}", response_model=Message)
def update_category(
    category_id: RowIdPath,
    category: schemas.CategoryUpdate,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.update_category(db, current_user.id, category_id, category)
    return {"message": "Category updated successfully"}


# ================= DELETE =================
@router.delete("/{category_id}", response_model=Message)
def delete_category(
    category_id: RowIdPath,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.delete_category(db, current_user.id, category_id)
    return {"message": "Category deleted successfully"}
