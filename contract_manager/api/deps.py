"""Shared request dependencies"""

from typing import Optional

from fastapi import Header, HTTPException


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Authenticated user id, forwarded by the auth proxy as X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id
