from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from expenso.schemas import RowId


# =========================
# Base
# =========================
class ExpenseBase(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    description: str = Field(..., min_length=1)
    category_id: RowId
    date: date


# =========================
# Create
# =========================
class ExpenseCreate(ExpenseBase):
    pass


# =========================
# Update
# =========================
class ExpenseUpdate(ExpenseBase):
    pass


# =========================
# Output
# =========================
class ExpenseOut(BaseModel):
    id: int
    amount: float
    description: str
    category_id: int
    category_name: Optional[str] = None
    user_id: int
    date: date
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExpenseCreated(BaseModel):
    message: str
    id: int
