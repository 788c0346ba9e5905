"""Shared API dependencies."""

from fastapi import Depends, Header, HTTPException, status

from trade_journal.config import Settings, get_settings


def get_current_user_id(
    x_user_id: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Identify the caller from the X-User-Id header or the configured default."""
    user_id = (x_user_id or "").strip() or settings.default_user_id
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
