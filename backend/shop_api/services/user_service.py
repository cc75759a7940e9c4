"""
User persistence operations: create, list, lookup by id and rename.
Routes map results to UserResponse; nothing here knows about HTTP.
"""
import logging
from typing import List, Optional

from sqlmodel import Session, select

from shop_api.errors import ApiError, ErrorKind
from shop_api.models.user import User

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "user does not exist"


def create_user(session: Session, first_name: str, last_name: str) -> User:
    """Insert a user; the database assigns the id"""
    user = User(first_name=first_name, last_name=last_name)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Created user %d", user.id)
    return user


def list_users(session: Session) -> List[User]:
    """All users in insertion order"""
    return list(session.exec(select(User).order_by(User.id)).all())


def find_user(session: Session, user_id: int) -> Optional[User]:
    return session.get(User, user_id)


def require_user(session: Session, user_id: int) -> User:
    user = find_user(session, user_id)
    if user is None:
        raise ApiError(ErrorKind.NOT_FOUND, USER_NOT_FOUND)
    return user


def rename_user(session: Session, user: User, first_name: str, last_name: str) -> User:
    """Overwrite both name fields and save. Nothing else on the record changes."""
    user.first_name = first_name
    user.last_name = last_name
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Updated user %d", user.id)
    return user
