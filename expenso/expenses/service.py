from datetime import date
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session, joinedload

from expenso.categories import service as category_service
from expenso.errors import InvalidReference, NotFound
from . import models, schemas


# =========================
# Helper: category ownership
# =========================
def ensure_category_owned(db: Session, user_id: int, category_id: int):
    category = category_service.get_owned_category(db, user_id, category_id)
    if not category:
        logger.warning(
            f"User {user_id} referenced category {category_id} they do not own"
        )
        raise InvalidReference()
    return category


# =========================
# Helper: serialize expense
# =========================
def serialize_expense(expense: models.Expense):
    return {
        "id": expense.id,
        "amount": float(expense.amount),
        "description": expense.description,
        "category_id": expense.category_id,
        "category_name": expense.category.name if expense.category else None,
        "user_id": expense.user_id,
        "date": expense.date,
        "created_at": expense.created_at,
        "updated_at": expense.updated_at,
    }


def scoped_query(db: Session, user_id: int):
    return db.query(models.Expense).filter(models.Expense.user_id == user_id)


# =========================
# Create Expense
# =========================
def create_expense(db: Session, user_id: int, expense: schemas.ExpenseCreate):
    ensure_category_owned(db, user_id, expense.category_id)

    new_expense = models.Expense(
        amount=expense.amount,
        description=expense.description,
        category_id=expense.category_id,
        user_id=user_id,
        date=expense.date,
    )
    db.add(new_expense)
    db.commit()
    db.refresh(new_expense)
    return new_expense


# =========================
# List Expenses
# =========================
def list_expenses(
    db: Session,
    user_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    category_id: Optional[int] = None,
):
    query = scoped_query(db, user_id).options(joinedload(models.Expense.category))

    if start_date:
        query = query.filter(models.Expense.date >= start_date)

    if end_date:
        query = query.filter(models.Expense.date <= end_date)

    if category_id is not None:
        query = query.filter(models.Expense.category_id == category_id)

    expenses = query.order_by(
        models.Expense.date.desc(),
        models.Expense.created_at.desc(),
        models.Expense.id.desc(),
    ).all()

    return [serialize_expense(exp) for exp in expenses]


# =========================
# Get Expense by ID
# =========================
def get_expense_by_id(db: Session, user_id: int, expense_id: int):
    expense = (
        scoped_query(db, user_id)
        .options(joinedload(models.Expense.category))
        .filter(models.Expense.id == expense_id)
        .first()
    )
    if not expense:
        raise NotFound("Expense not found")
    return serialize_expense(expense)


# =========================
# Update Expense
# =========================
def update_expense(
    db: Session,
    user_id: int,
    expense_id: int,
    expense_data: schemas.ExpenseUpdate,
) -> int:
    """Rewrite an expense; an id outside the caller's scope updates nothing."""
    ensure_category_owned(db, user_id, expense_data.category_id)

    updated = (
        scoped_query(db, user_id)
        .filter(models.Expense.id == expense_id)
        .update(
            {
                models.Expense.amount: expense_data.amount,
                models.Expense.description: expense_data.description,
                models.Expense.category_id: expense_data.category_id,
                models.Expense.date: expense_data.date,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return updated


# =========================
# Delete Expense
# =========================
def delete_expense(db: Session, user_id: int, expense_id: int) -> int:
    deleted = (
        scoped_query(db, user_id)
        .filter(models.Expense.id == expense_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
