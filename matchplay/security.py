"""API key guard for the HTTP surface."""

from __future__ import annotations

from fastapi import Header, HTTPException, status

from matchplay.config import get_settings


def require_api_key(
    x_api_key: str | None = Header(default=None, alias="x-api-key"),
) -> str | None:
    """Reject requests without the configured key; open when ``API_KEY`` is unset."""

    required = get_settings().api_key
    if required and x_api_key != required:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid api key",
        )
    return x_api_key


__all__ = ["require_api_key"]
