from __future__ import annotations

import hashlib

from fastapi import Header, HTTPException, Request, status

from ..services.storage import StorageService

USER_HEADER = "X-Mindbloom-User"
MAX_EXTERNAL_ID_LENGTH = 255


def _hash_identifier(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:12]


async def resolve_authenticated_user(
    request: Request,
    external_id: str | None = Header(default=None, alias=USER_HEADER),
) -> int:
    """Map the identity provider's opaque user id to a local user row."""

    external_id = (external_id or "").strip()
    if not external_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="authentication required",
        )
    if len(external_id) > MAX_EXTERNAL_ID_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid user id",
        )

    storage: StorageService = request.app.state.storage_service
    user = await storage.ensure_user(external_id)

    request.state.telemetry_user = _hash_identifier(external_id)
    request.state.current_user_id = user.id
    return user.id


__all__ = ["USER_HEADER", "resolve_authenticated_user"]
