"""Domain enumerations for the document routing workflow.

Enums represent fixed sets of domain values (document lifecycle status,
workflow step status, routing action, resolution outcome).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class DocumentStatus(_ValuesMixin, str, Enum):
    """Document lifecycle status.

    Once a document has any workflow step, the status is derived from the
    step set (see derive_status) and written only by the workflow service.
    ARCHIVED is set externally and never derived.
    """

    DRAFT = "draft"
    REGISTERED = "registered"
    IN_WORK = "in_work"
    DISTRIBUTED = "distributed"
    RESOLVED = "resolved"
    ARCHIVED = "archived"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Return whether no further routing may happen in this status."""
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = frozenset(
    {DocumentStatus.RESOLVED, DocumentStatus.ARCHIVED, DocumentStatus.CANCELLED}
)


class StepStatus(_ValuesMixin, str, Enum):
    """Workflow step status. A step moves pending -> completed exactly once."""

    PENDING = "pending"
    COMPLETED = "completed"


class StepAction(_ValuesMixin, str, Enum):
    """Routing action recorded on a workflow step."""

    SENT = "sent"
    FORWARDED = "forwarded"
    RETURNED = "returned"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_routing(self) -> bool:
        """Return whether the action hands the document to another user (route entry point)."""
        return self in _ROUTING_ACTIONS


_ROUTING_ACTIONS = frozenset(
    {StepAction.SENT, StepAction.FORWARDED, StepAction.RETURNED}
)


class ResolutionStatus(_ValuesMixin, str, Enum):
    """Outcome recorded on a step when it is resolved."""

    APPROVED = "approved"
    REJECTED = "rejected"

    def to_action(self) -> StepAction:
        """Return the step action matching this resolution."""
        return StepAction(self.value)
