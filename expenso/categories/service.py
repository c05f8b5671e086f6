from sqlalchemy import and_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from loguru import logger

from expenso.expenses.models import Expense
from . import models, schemas

DEFAULT_CATEGORIES = [
    ("Food & Dining", "Restaurant meals, groceries, and food delivery"),
    ("Transportation", "Gas, public transport, rideshare, and vehicle maintenance"),
    ("Shopping", "Clothing, electronics, and general purchases"),
    ("Entertainment", "Movies, games, subscriptions, and leisure activities"),
    ("Bills & Utilities", "Rent, electricity, water, internet, and phone bills"),
    ("Healthcare", "Medical expenses, pharmacy, and health insurance"),
]


# ================= SEED =================
def seed_default_categories(db: Session, user_id: int) -> int:
    """Give a freshly registered user the default category set.

    Best-effort: the user row is already committed. The six inserts share one
    commit, so a failure leaves the user with none of them rather than a
    partial set. Returns how many categories were created.
    """
    try:
        for name, description in DEFAULT_CATEGORIES:
            db.add(models.Category(name=name, description=description, user_id=user_id))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(f"Could not seed default categories for user {user_id}")
        return 0
    return len(DEFAULT_CATEGORIES)


# ================= HELPERS =================
def scoped_query(db: Session, user_id: int):
    return db.query(models.Category).filter(models.Category.user_id == user_id)


def get_owned_category(db: Session, user_id: int, category_id: int):
    return scoped_query(db, user_id).filter(models.Category.id == category_id).first()


def serialize_category(category: models.Category, expense_count: int = 0, total_amount=0):
    return {
        "id": category.id,
        "name": category.name,
        "description": category.description,
        "user_id": category.user_id,
        "expense_count": int(expense_count or 0),
        "total_amount": float(total_amount or 0),
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


# ================= CREATE =================
def create_category(db: Session, user_id: int, category: schemas.CategoryCreate):
    db_category = models.Category(
        name=category.name,
        description=category.description or None,
        user_id=user_id,
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)
    return db_category


# ================= LIST =================
def list_categories(db: Session, user_id: int):
    rows = (
        db.query(
            models.Category,
            func.count(Expense.id).label("expense_count"),
            func.coalesce(func.sum(Expense.amount), 0).label("total_amount"),
        )
        .outerjoin(
            Expense,
            and_(
                Expense.category_id == models.Category.id,
                Expense.user_id == user_id,
            ),
        )
        .filter(models.Category.user_id == user_id)
        .group_by(models.Category.id)
        .order_by(models.Category.name)
        .all()
    )
    return [serialize_category(c, count, total) for c, count, total in rows]


# ================= UPDATE =================
def update_category(
    db: Session,
    user_id: int,
    category_id: int,
    category: schemas.CategoryUpdate,
) -> int:
    """Apply the provided fields; a category outside the caller's scope is a no-op."""
    data = category.model_dump(exclude_unset=True)
    values = {}

    if data.get("name"):
        values[models.Category.name] = data["name"]

    if "description" in data:
        values[models.Category.description] = data["description"] or None

    if not values:
        return 0

    updated = (
        scoped_query(db, user_id)
        .filter(models.Category.id == category_id)
        .update(values, synchronize_session=False)
    )
    db.commit()
    return updated


# ================= DELETE =================
def delete_category(db: Session, user_id: int, category_id: int) -> int:
    # Expenses filed under the category go with it (ON DELETE CASCADE)
    deleted = (
        scoped_query(db, user_id)
        .filter(models.Category.id == category_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted
