"""
FastAPI dependencies.
"""

from typing import Generator, Optional
from fastapi import Request
from sqlalchemy.orm import Session
from app.config import settings
from app.database import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database sessions.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_owner(request: Request) -> str:
    """
    Resolve the id of the calling user.

    Authentication happens in front of this service; the authenticated id is
    forwarded in a header. Requests without it act as the default owner.
    """
    owner: Optional[str] = request.headers.get(settings.owner_header)
    if owner and owner.strip():
        return owner.strip()
    return settings.default_owner
