"""Infrastructure implementations of application service interfaces."""

from docroute.infrastructure.services.permission_resolver import PermissionResolver

__all__ = [
    "PermissionResolver",
]
