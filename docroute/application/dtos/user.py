"""DTOs for users (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model (acting user and route target lookups)."""

    id: str
    username: str
    email: str
    is_active: bool
