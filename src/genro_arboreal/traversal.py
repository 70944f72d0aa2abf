# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Traversal engines for TreeNode hierarchies.

Three walks are provided, all synchronous and single-threaded:

    - **traverse_down**: pre-order depth-first descent, with an optional
      callback fired on each child once its subtree is done
    - **traverse_up**: ascent to the root, visiting at each level the
      current node and its direct children
    - **bubble_up**: strict ancestor chain, starting node included

Callback contract:
    Every callback receives the visited node as its only argument.
    Returning ``Visit.STOP`` (or ``False``) aborts the whole traversal
    immediately. Any other return value, ``None`` included, lets it continue.

Each call keeps its own visited set keyed by ``TreeNode.uid``, so a node
reachable twice is only visited once. Callbacks may freely rewrite
``id`` or ``data`` without affecting that bookkeeping.

Example:
    >>> def until_deep(node):
    ...     if node.depth > 1:
    ...         return Visit.STOP
    >>> traverse_down(tree, until_deep)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode

logger = logging.getLogger(__name__)


class Visit(Enum):
    """Result a traversal callback may return."""

    CONTINUE = 'continue'
    STOP = 'stop'


NodeCallback = Callable[['TreeNode'], Any]


class _Visitor:
    """Wrap a callback with per-traversal dedup and abort state."""

    __slots__ = ('_iterator', '_seen', 'stopped')

    def __init__(self, iterator: NodeCallback) -> None:
        self._iterator = iterator
        self._seen: set[int] = set()
        self.stopped = False

    def seen(self, node: TreeNode) -> bool:
        return node.uid in self._seen

    def __call__(self, node: TreeNode) -> bool:
        """Visit node once. Return False when the traversal must stop."""
        if self.stopped:
            return False
        if node.uid in self._seen:
            return True
        self._seen.add(node.uid)
        result = self._iterator(node)
        if result is Visit.STOP or result is False:
            logger.debug("Traversal stopped at node %r", node.id)
            self.stopped = True
            return False
        return True


def traverse_down(
    start: TreeNode,
    iterator: NodeCallback,
    post_iterator: NodeCallback | None = None,
) -> None:
    """Walk the subtree of start in pre-order.

    Args:
        start: The node the walk begins from (visited first).
        iterator: Called on every node before its children.
        post_iterator: Optional, called on each child after its own
            subtree has been fully descended. Its return value is ignored.
    """
    visit = _Visitor(iterator)

    def _walk(node: TreeNode) -> None:
        if not visit(node):
            return
        for child in node.children:
            if visit.seen(child):
                continue
            _walk(child)
            if visit.stopped:
                return
            if post_iterator is not None:
                post_iterator(child)

    _walk(start)


def traverse_up(start: TreeNode, iterator: NodeCallback) -> None:
    """Ascend from start to the root, visiting each level's children too.

    At every level the current node is visited first, then each of its
    direct children in order. Nodes already seen are skipped.
    """
    visit = _Visitor(iterator)
    current: TreeNode | None = start
    while current is not None:
        if not visit(current):
            return
        for child in current.children:
            if not visit(child):
                return
        current = current.parent


def bubble_up(start: TreeNode, iterator: NodeCallback) -> None:
    """Visit start and then each of its ancestors up to the root."""
    visit = _Visitor(iterator)
    current: TreeNode | None = start
    while current is not None:
        if not visit(current):
            return
        current = current.parent
