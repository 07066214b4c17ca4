"""Service interfaces (ports) for the application layer.

Protocols for collaborators that the workflow consumes but does not own.
"""

from __future__ import annotations

from typing import Protocol


class IPermissionResolver(Protocol):
    """Protocol for resolving a user's permission codes from the RBAC tables."""

    async def get_user_permissions(self, user_id: str) -> set[str]:
        """Return permission codes (resource:action) granted to the user."""


class IPermissionOracle(Protocol):
    """Yes/no permission check consumed by the workflow (e.g. resolve-any override)."""

    async def has_permission(self, user_id: str, permission_key: str) -> bool:
        """Return True if the user holds permission_key."""
