from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from expenso.database import get_db
from expenso.schemas import MAX_ROW_ID, Message, RowIdPath
from expenso.users.auth import get_current_user
from expenso.users.schemas import CurrentUserSchema
from . import schemas, service

router = APIRouter()


@router.get("", response_model=List[schemas.ExpenseOut])
def list_expenses(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[int] = Query(None, ge=1, le=MAX_ROW_ID),
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.list_expenses(
        db,
        current_user.id,
        start_date=start_date,
        end_date=end_date,
        category_id=category_id,
    )


@router.post(
    "",
    response_model=schemas.ExpenseCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_expense(
    expense: schemas.ExpenseCreate,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    new_expense = service.create_expense(db, current_user.id, expense)
    return {"message": "Expense created successfully", "id": new_expense.id}


@router.get("/{expense_id}", response_model=schemas.ExpenseOut)
def get_expense(
    expense_id: RowIdPath,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return service.get_expense_by_id(db, current_user.id, expense_id)


@router.put("/{expense_id}", response_model=Message)
def update_expense(
    expense_id: RowIdPath,
    expense: schemas.ExpenseUpdate,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.update_expense(db, current_user.id, expense_id, expense)
    return {"message": "Expense updated successfully"}


@router.delete("/{expense_id}", response_model=Message)
def delete_expense(
    expense_id: RowIdPath,
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service.delete_expense(db, current_user.id, expense_id)
    return {"message": "Expense deleted successfully"}
