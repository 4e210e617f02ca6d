"""
Decision tree nodes and the prediction walk.

Every node, internal or leaf, carries its own output/confidence summary.
The walk descends while some child's predicate holds and answers with the
summary of the node where it stops, so incomplete input still yields a
best-effort prediction.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from ..core.errors import ParseError
from ..core.models import PredictionResult
from ..core.types import DEFAULT_POLICY, MissingBranchPolicy
from .catalog import FieldCatalog
from .predicate import Predicate, evaluate, parse_predicate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeNode:
    """
    One node of the tree.

    The root's predicate is None (the `true` sentinel). A leaf is a node
    with no children.
    """

    predicate: Optional[Predicate]
    output: Any
    confidence: float
    count: Optional[int] = None
    children: tuple["TreeNode", ...] = field(default=())

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def matches(self, record: Mapping[str, Any], policy: MissingBranchPolicy = DEFAULT_POLICY) -> bool:
        """Whether the path into this node may be taken for `record`."""
        if self.predicate is None:
            return True
        return evaluate(self.predicate, record.get(self.predicate.field), policy)

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def node_count(self) -> int:
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children)
        return count


@dataclass
class _PendingNode:
    raw: Mapping[str, Any]
    predicate: Optional[Predicate]
    children: list[TreeNode] = field(default_factory=list)
    expanded: bool = False


def parse_node(
    raw: Any,
    catalog: FieldCatalog,
    policy: MissingBranchPolicy = DEFAULT_POLICY,
) -> TreeNode:
    """
    Build the tree rooted at `raw`.

    Works with an explicit stack so trees deeper than the interpreter's
    recursion limit still load.

    Args:
        raw: Root node mapping from the model document
        catalog: Field catalog used to type the predicates
        policy: Missing-branch rules

    Returns:
        The root TreeNode

    Raises:
        ParseError: If a node is malformed
        ConfigurationError: If a predicate does not fit the catalog
    """
    root_predicate = parse_predicate(_node_mapping(raw).get("predicate", True), catalog, policy)
    stack = [_PendingNode(raw=raw, predicate=root_predicate)]
    root: TreeNode | None = None

    while stack:
        pending = stack[-1]
        if not pending.expanded:
            pending.expanded = True
            raw_children = pending.raw.get("children") or []
            if not isinstance(raw_children, list):
                raise ParseError("Node children must be a list")
            # Reversed so the first declared child is finished first
            for raw_child in reversed(raw_children):
                child = _node_mapping(raw_child)
                if "predicate" not in child:
                    raise ParseError("Non-root node is missing its predicate")
                stack.append(
                    _PendingNode(raw=child, predicate=parse_predicate(child["predicate"], catalog, policy))
                )
            continue

        stack.pop()
        node = _build_node(pending)
        if stack:
            _parent_of(stack).children.append(node)
        else:
            root = node

    assert root is not None
    return root


def _parent_of(stack: list[_PendingNode]) -> _PendingNode:
    # Siblings still waiting sit above the parent; the parent is the
    # nearest expanded entry below them.
    for pending in reversed(stack):
        if pending.expanded:
            return pending
    raise ParseError("Malformed tree: node without parent")


def _node_mapping(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ParseError(f"Tree node must be a mapping, got {type(raw).__name__}")
    return raw


def _build_node(pending: _PendingNode) -> TreeNode:
    raw = pending.raw
    if "output" not in raw:
        raise ParseError("Tree node is missing 'output'")
    if "confidence" not in raw:
        raise ParseError("Tree node is missing 'confidence'")

    confidence = raw["confidence"]
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise ParseError(f"Node confidence must be a number, got {confidence!r}")
    if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
        raise ParseError(f"Node confidence {confidence} is outside [0, 1]")

    count = raw.get("count")
    if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
        raise ParseError(f"Node count must be an integer, got {count!r}")

    return TreeNode(
        predicate=pending.predicate,
        output=raw["output"],
        confidence=float(confidence),
        count=count,
        children=tuple(pending.children),
    )


def predict(
    node: TreeNode,
    record: Mapping[str, Any],
    policy: MissingBranchPolicy = DEFAULT_POLICY,
    catalog: FieldCatalog | None = None,
) -> PredictionResult:
    """
    Walk the tree from `node` for an id-keyed input record.

    At each node the children are scanned in declared order and the walk
    descends into the first whose predicate holds. When none holds, or the
    node is a leaf, that node's own output and confidence are returned.

    Args:
        node: Node to start from, usually the root
        record: Input values keyed by field id; absent fields are missing
        policy: Missing-branch rules
        catalog: Used only to name fields in the returned path

    Returns:
        PredictionResult of the node where the walk stopped
    """
    path: list[str] = []
    current = node
    while True:
        chosen = next((child for child in current.children if child.matches(record, policy)), None)
        if chosen is None:
            break
        path.append(chosen.predicate.to_rule(catalog) if chosen.predicate else "true")
        current = chosen

    if not current.is_leaf:
        logger.debug("No branch matched after %d steps; answering with node summary", len(path))

    return PredictionResult(
        value=current.output,
        confidence=current.confidence,
        count=current.count,
        path=path,
    )
