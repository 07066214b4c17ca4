"""Security: JWT bearer tokens identifying the acting user."""

from docroute.infrastructure.security.jwt import create_access_token, verify_token

__all__ = [
    "create_access_token",
    "verify_token",
]
