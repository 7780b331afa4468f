# src/interfaces/api/security.py
"""X-API-Key check and per-client rate limiting for the operator API."""

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from slowapi import Limiter
from slowapi.util import get_remote_address

from src.config import get_settings

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

limiter = Limiter(key_func=get_remote_address)

AUTH_DISABLED = "auth_disabled"


def verify_api_key(
    request: Request, api_key: Annotated[str | None, Depends(api_key_header)]
) -> str:
    """Compare the X-API-Key header with API_AUTH_KEY.

    With no API_AUTH_KEY configured every request is accepted. The key is
    read from the settings the running services were built with.

    Raises:
        HTTPException: 401 without a header, 403 with the wrong key.
    """
    configured = request.app.state.services.settings.api_auth_key
    if not configured:
        return AUTH_DISABLED

    if api_key is None or api_key == "":
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED, "Missing API key. Send the X-API-Key header."
        )
    if not secrets.compare_digest(api_key, configured):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid API key.")
    return api_key


def get_rate_limit_string() -> str:
    """slowapi limit for every endpoint, e.g. "60/minute"."""
    return f"{get_settings().api_rate_limit}/minute"
