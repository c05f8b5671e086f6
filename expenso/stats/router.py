from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expenso.config import Settings
from expenso.database import get_db
from expenso.users.auth import get_app_settings, get_current_user
from expenso.users.schemas import CurrentUserSchema
from . import service

router = APIRouter()


@router.get("/categories", response_model=List[Dict[str, Any]])
def category_stats(
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Amount and count per category, only categories with spending."""
    return service.get_category_stats(db, current_user.id)


@router.get("/monthly", response_model=List[Dict[str, Any]])
def monthly_stats(
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Spending per month for the last six months."""
    return service.get_monthly_stats(
        db, current_user.id, service.today_in(settings.TIMEZONE)
    )
