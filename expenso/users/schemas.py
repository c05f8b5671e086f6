from pydantic import BaseModel, Field, field_validator


# -------- USERS --------
class RegisterSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        # Emails are stored lowercased so lookups are case-insensitive
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email is not valid")
        return v


class LoginSchema(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserDisplaySchema(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthResponseSchema(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserDisplaySchema


class CurrentUserSchema(BaseModel):
    """Identity attached to a request once its bearer token verified."""

    id: int
    email: str
