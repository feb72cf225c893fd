"""Caller identity for user-scoped routes."""
from typing import Optional

from fastapi import Header, HTTPException


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Resolve the authenticated user's id from the ``X-User-Id`` header.

    Session handling lives in front of this API; by the time a request
    arrives the gateway has already put the user id in the header.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()
