from fastapi import APIRouter, Depends, status
from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expenso.categories import service as category_service
from expenso.config import Settings
from expenso.database import get_db
from expenso.errors import DuplicateResource, InvalidLogin, NotFound
from expenso.users import crud as user_crud, schemas
from expenso.users.auth import create_access_token, get_app_settings, get_current_user

router = APIRouter()


@router.post(
    "/register",
    response_model=schemas.AuthResponseSchema,
    status_code=status.HTTP_201_CREATED,
)
def register(
    user: schemas.RegisterSchema,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    if user_crud.get_user_by_email(db, user.email):
        logger.warning(f"Registration refused, email already in use: {user.email}")
        raise DuplicateResource()

    try:
        new_user = user_crud.create_user(db, user)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateResource()

    category_service.seed_default_categories(db, new_user.id)

    token = create_access_token(settings, new_user.id, new_user.email)
    logger.info(f"User registered: {new_user.email} (id={new_user.id})")

    return {
        "message": "User created successfully",
        "token": token,
        "user": new_user,
    }


@router.post("/login", response_model=schemas.AuthResponseSchema)
def login(
    credentials: schemas.LoginSchema,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = user_crud.authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.warning(f"Authentication denied for email: {credentials.email}")
        raise InvalidLogin()

    token = create_access_token(settings, user.id, user.email)
    logger.info(f"User authenticated: {user.email}")

    return {
        "message": "Login successful",
        "token": token,
        "user": user,
    }


@router.get("/me", response_model=schemas.UserDisplaySchema)
def get_current_user_info(
    current_user: schemas.CurrentUserSchema = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = user_crud.get_user_by_id(db, current_user.id)
    if not user:
        raise NotFound("User not found")
    return user
