"""Create and list endpoints for users."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from taskboard.database import get_session
from taskboard.errors import ConflictError, ValidationError
from taskboard.models import User, UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(
    email: Optional[str] = None, session: Session = Depends(get_session)
) -> list[UserRead]:
    """List users newest first, or the single user matching *email*.

    The email lookup still returns a list so both shapes are the same.
    """
    if email:
        statement = select(User).where(User.email == email).limit(1)
    else:
        statement = select(User).order_by(User.created_at.desc(), User.id.desc())
    return list(session.exec(statement).all())


@router.post("", status_code=201)
def create_user(
    body: Optional[UserCreate] = None, session: Session = Depends(get_session)
) -> UserRead:
    if body is None:
        body = UserCreate()
    name = (body.name or "").strip()
    email = (body.email or "").strip()
    if not name or not email:
        raise ValidationError("name and email are required")

    user = User(name=name, email=email)
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("Email already registered") from exc
    session.refresh(user)
    logger.info("Created user %s", user.id)
    return user
