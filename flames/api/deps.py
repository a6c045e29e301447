"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Header, HTTPException

from flames.generators.roster_generator import get_roster
from flames.models.roster import Roster


def get_catalog() -> Roster:
    return get_roster()


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Opaque user id supplied by the auth provider in front of this API"""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()
