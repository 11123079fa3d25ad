"""Optional API key guard for endpoints that change configuration."""

import hmac
from typing import Optional

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

from ccdash.config import settings

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_api_key(x_api_key: Optional[str] = Security(api_key_header)):
    """Reject writes without the configured key; open when no key is set."""
    if not settings.api_key:
        return

    if not x_api_key:
        raise HTTPException(401, "Missing X-API-Key header")
    if not hmac.compare_digest(x_api_key, settings.api_key):
        raise HTTPException(403, "Invalid API key")
