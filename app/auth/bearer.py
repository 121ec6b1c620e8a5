# app/auth/bearer.py
"""Bearer credential extraction. Signature checks happen later, at identity resolution."""

from fastapi import Request

from app.exceptions import AuthenticationError

BEARER_PREFIX = "Bearer "


def require_bearer(request: Request) -> str:
    header = request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX):
        raise AuthenticationError("Missing Bearer token")

    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise AuthenticationError("Missing Bearer token")

    request.state.jwt = token
    return token
