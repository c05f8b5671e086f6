from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

# Primary keys are INTEGER columns; larger ids can never match a row
MAX_ROW_ID = 2**31 - 1

RowId = Annotated[int, Field(ge=1, le=MAX_ROW_ID)]
RowIdPath = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


class Message(BaseModel):
    message: str


def strip_required_name(v):
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v
