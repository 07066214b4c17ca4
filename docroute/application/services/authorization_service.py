"""Authorization service: permission checks over IPermissionResolver (implements IPermissionOracle)."""

from __future__ import annotations

from docroute.application.interfaces.services import IPermissionResolver


def _matches(permissions: set[str], permission_key: str) -> bool:
    """Return True if permissions grant permission_key directly or through resource:* / *:*."""
    if permission_key in permissions or "*:*" in permissions:
        return True
    resource, _, _ = permission_key.partition(":")
    return f"{resource}:*" in permissions


class AuthorizationService:
    """Centralized permission checking. Permission codes are 'resource:action'."""

    def __init__(self, permission_resolver: IPermissionResolver) -> None:
        self.permission_resolver = permission_resolver

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return set of permission codes (e.g. general_register:resolve_any)."""
        return await self.permission_resolver.get_user_permissions(user_id)

    async def has_permission(self, user_id: str, permission_key: str) -> bool:
        """Return True if user has permission_key, resource:* or *:*."""
        permissions = await self.get_user_permissions(user_id)
        return _matches(permissions, permission_key)
