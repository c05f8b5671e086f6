from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expenso.config import Settings
from expenso.database import get_db
from expenso.stats import service as stats_service
from expenso.users.auth import get_app_settings, get_current_user
from expenso.users.schemas import CurrentUserSchema

router = APIRouter()


@router.get("/stats", response_model=Dict[str, Any])
def dashboard_stats(
    current_user: CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Totals for the dashboard cards plus the five most recently added expenses.
    "Monthly" is the current calendar month in the configured timezone.
    """
    today = stats_service.today_in(settings.TIMEZONE)
    return stats_service.get_dashboard_stats(db, current_user.id, today)
