import calendar
from datetime import date, datetime

import pytz
from sqlalchemy import and_, extract, func
from sqlalchemy.orm import Session

from expenso.categories.models import Category
from expenso.expenses.models import Expense


def today_in(timezone_name: str) -> date:
    return datetime.now(pytz.timezone(timezone_name)).date()


def months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the month's length."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_bounds(day: date):
    start = day.replace(day=1)
    if start.month == 12:
        end = date(start.year + 1, 1, 1)
    else:
        end = date(start.year, start.month + 1, 1)
    return start, end


# -------------------------
# Dashboard summary
# -------------------------
def get_dashboard_stats(db: Session, user_id: int, today: date):
    total = (
        db.query(func.coalesce(func.sum(Expense.amount), 0))
        .filter(Expense.user_id == user_id)
        .scalar()
    )

    month_start, next_month = month_bounds(today)
    monthly = (
        db.query(func.coalesce(func.sum(Expense.amount), 0))
        .filter(
            Expense.user_id == user_id,
            Expense.date >= month_start,
            Expense.date < next_month,
        )
        .scalar()
    )

    category_count = (
        db.query(func.count(Category.id))
        .filter(Category.user_id == user_id)
        .scalar()
    )

    recent = (
        db.query(
            Expense.id,
            Expense.amount,
            Expense.description,
            Expense.date,
            Category.name.label("category"),
        )
        .join(Category, Category.id == Expense.category_id)
        .filter(Expense.user_id == user_id)
        .order_by(Expense.created_at.desc(), Expense.id.desc())
        .limit(5)
        .all()
    )

    return {
        "totalExpenses": float(total or 0),
        "monthlyExpenses": float(monthly or 0),
        "totalCategories": int(category_count or 0),
        "recentExpenses": [
            {
                "id": row.id,
                "amount": float(row.amount or 0),
                "description": row.description,
                "category": row.category,
                "date": row.date,
            }
            for row in recent
        ],
    }


# -------------------------
# Spending per category
# -------------------------
def get_category_stats(db: Session, user_id: int):
    amount = func.coalesce(func.sum(Expense.amount), 0)

    rows = (
        db.query(
            Category.name.label("category"),
            amount.label("amount"),
            func.count(Expense.id).label("count"),
        )
        .outerjoin(
            Expense,
            and_(
                Expense.category_id == Category.id,
                Expense.user_id == user_id,
            ),
        )
        .filter(Category.user_id == user_id)
        .group_by(Category.id, Category.name)
        .having(amount > 0)
        .order_by(amount.desc())
        .all()
    )

    return [
        {
            "category": row.category,
            "amount": float(row.amount or 0),
            "count": int(row.count or 0),
        }
        for row in rows
    ]


# -------------------------
# Spending per month
# -------------------------
def get_monthly_stats(db: Session, user_id: int, today: date, months: int = 6):
    since = months_before(today, months)

    year_col = extract("year", Expense.date)
    month_col = extract("month", Expense.date)

    rows = (
        db.query(
            year_col.label("year"),
            month_col.label("month"),
            func.sum(Expense.amount).label("amount"),
        )
        .filter(Expense.user_id == user_id, Expense.date >= since)
        .group_by(year_col, month_col)
        .order_by(year_col, month_col)
        .all()
    )

    return [
        {
            "month": f"{int(row.year):04d}-{int(row.month):02d}",
            "amount": float(row.amount or 0),
        }
        for row in rows
    ]
