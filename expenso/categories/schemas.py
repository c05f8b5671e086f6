from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from expenso.schemas import strip_required_name


# ================= CREATE =================
class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return strip_required_name(v)


# ================= UPDATE =================
class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        return strip_required_name(v)


# ================= RESPONSE =================
class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str]
    user_id: int
    expense_count: int = 0
    total_amount: float = 0.0
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryCreated(BaseModel):
    message: str
    id: int
