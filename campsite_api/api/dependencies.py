"""Request-level dependencies shared by the routers."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from campsite_api.settings import get_settings
from campsite_api.utils.identifiers import normalize_object_id


def get_current_user_id(request: Request) -> str:
    """Return the authenticated user id forwarded by the identity layer.

    Authentication happens upstream; this dependency only reads the header
    the gateway sets and rejects requests that arrive without a usable id.
    """

    header = get_settings().user_id_header
    raw_user_id = (request.headers.get(header) or "").strip()
    if not raw_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not authenticated",
        )
    user_id = normalize_object_id(raw_user_id)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Malformed {header} header",
        )
    return user_id
