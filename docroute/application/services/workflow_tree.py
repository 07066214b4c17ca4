"""Builds the routing forest of a document from its flat workflow steps."""

from __future__ import annotations

from collections.abc import Iterable

from docroute.application.dtos.workflow_step import (
    WorkflowStepNode,
    WorkflowStepResult,
    WorkflowTree,
)


def build_tree(steps: Iterable[WorkflowStepResult]) -> WorkflowTree:
    """Link steps into a forest by parent_step_id.

    Input order is not assumed sorted; children keep input order. A step whose
    parent is missing from the input is treated as a root. No cycle detection:
    a parent always exists before its child, and parent ids are never mutated.

    Args:
        steps: All workflow steps of one document.

    Returns:
        WorkflowTree with the original steps and the root nodes.
    """
    step_list = list(steps)
    nodes: dict[str, WorkflowStepNode] = {
        step.id: WorkflowStepNode(step=step) for step in step_list
    }
    roots: list[WorkflowStepNode] = []
    for step in step_list:
        node = nodes[step.id]
        parent = nodes.get(step.parent_step_id) if step.parent_step_id else None
        if parent is not None and parent is not node:
            parent.children.append(node)
        else:
            roots.append(node)
    return WorkflowTree(steps=step_list, tree=roots)


def find_node(tree: WorkflowTree, step_id: str) -> WorkflowStepNode | None:
    """Return the node for step_id anywhere in the forest, or None."""
    for root in tree.tree:
        for node in root.iter_subtree():
            if node.step.id == step_id:
                return node
    return None
