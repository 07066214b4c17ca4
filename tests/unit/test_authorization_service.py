"""Unit tests for AuthorizationService (wildcard permission matching)."""

import pytest

from docroute.application.services.authorization_service import AuthorizationService


class _StaticResolver:
    """IPermissionResolver returning fixed permission codes per user."""

    def __init__(self, grants: dict[str, set[str]]) -> None:
        self.grants = grants
        self.calls: list[str] = []

    async def get_user_permissions(self, user_id: str) -> set[str]:
        self.calls.append(user_id)
        return self.grants.get(user_id, set())


@pytest.fixture
def auth_svc() -> AuthorizationService:
    return AuthorizationService(
        _StaticResolver(
            {
                "auditor": {"general_register:resolve_any"},
                "registry_admin": {"general_register:*"},
                "superuser": {"*:*"},
                "clerk": {"general_register:read"},
            }
        )
    )


async def test_exact_permission_matches(auth_svc: AuthorizationService) -> None:
    assert await auth_svc.has_permission("auditor", "general_register:resolve_any")


async def test_resource_wildcard_matches(auth_svc: AuthorizationService) -> None:
    assert await auth_svc.has_permission("registry_admin", "general_register:resolve_any")
    assert not await auth_svc.has_permission("registry_admin", "user:delete")


async def test_global_wildcard_matches(auth_svc: AuthorizationService) -> None:
    assert await auth_svc.has_permission("superuser", "general_register:resolve_any")


async def test_other_action_does_not_match(auth_svc: AuthorizationService) -> None:
    assert not await auth_svc.has_permission("clerk", "general_register:resolve_any")


async def test_unknown_user_has_no_permissions(auth_svc: AuthorizationService) -> None:
    assert await auth_svc.get_user_permissions("nobody") == set()
    assert not await auth_svc.has_permission("nobody", "general_register:read")
