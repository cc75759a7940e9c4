"""
User API Routes
Create, list, fetch and rename users. Bodies are parsed by hand so that
malformed JSON is reported with the same bare-string errors as the rest of
the API instead of FastAPI's 422 payload.
"""

import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError, field_validator
from sqlmodel import Session

from shop_api.database import get_session
from shop_api.errors import ApiError, ErrorKind, describe_validation_error
from shop_api.models.user import User
from shop_api.services.user_service import create_user, list_users, rename_user, require_user

router = APIRouter()

ID_NOT_INTEGER = "please ensure that :id is an integer"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


# ============================================================================
# Request/Response Models
# ============================================================================


class UserNameFields(BaseModel):
    first_name: str = ""
    last_name: str = ""

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v


class UserCreateRequest(UserNameFields):
    """Any id in the body is ignored; the database assigns one"""


class UserUpdateRequest(UserNameFields):
    pass


class UserResponse(BaseModel):
    id: int
    first_name: str
    last_name: str

    @field_validator("first_name", "last_name", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        # Rows from an older database file may hold NULL names
        return "" if v is None else v


def create_response_user(user: User) -> UserResponse:
    return UserResponse(id=user.id, first_name=user.first_name, last_name=user.last_name)


# ============================================================================
# Request helpers
# ============================================================================


async def read_body(request: Request) -> bytes:
    return await request.body()


def parse_user_id(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise ApiError(ErrorKind.BAD_REQUEST, ID_NOT_INTEGER)
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ApiError(ErrorKind.BAD_REQUEST, ID_NOT_INTEGER)
    return value


def parse_body(model, body: bytes, status_code: Optional[int] = None):
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise ApiError(ErrorKind.DESERIALIZATION, describe_validation_error(e), status_code=status_code)


# ============================================================================
# User Endpoints
# ============================================================================


@router.post("/users", response_model=UserResponse)
def create_user_endpoint(body: bytes = Depends(read_body), session: Session = Depends(get_session)):
    """Create a user. Empty names are accepted."""
    payload = parse_body(UserCreateRequest, body)
    user = create_user(session, payload.first_name, payload.last_name)
    return create_response_user(user)


@router.get("/users", response_model=List[UserResponse])
def get_users(session: Session = Depends(get_session)):
    """List all users in creation order"""
    return [create_response_user(user) for user in list_users(session)]


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, session: Session = Depends(get_session)):
    user = require_user(session, parse_user_id(user_id))
    return create_response_user(user)


@router.put("/users/{user_id}", response_model=UserResponse)
def update_user(user_id: str, body: bytes = Depends(read_body), session: Session = Depends(get_session)):
    """
    Replace a user's first and last name.

    The user must exist before the body is looked at. A body that can't be
    parsed is reported as a server error (500), unlike create.
    """
    user = require_user(session, parse_user_id(user_id))
    payload = parse_body(UserUpdateRequest, body, status_code=500)
    user = rename_user(session, user, payload.first_name, payload.last_name)
    return create_response_user(user)
