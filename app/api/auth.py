from __future__ import annotations

from fastapi import Header, HTTPException


def require_bearer_token(authorization: str = Header(...)) -> str:
    """Token presence check; identity is resolved upstream by the gateway."""
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = token.strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")
    return token
