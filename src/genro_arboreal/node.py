# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeNode - A mutable, ordered multi-way tree.

A TreeNode is at the same time a data holder and the handle of the subtree
rooted at it. A parentless node is the handle of a whole tree.

Identifiers:
    Unless given explicitly, a node id is derived from its parent id and
    the index it takes among the parent's children::

        0           root
        0/0         first child
        0/0/1       second child of the first child

    Ids are assigned once. Removing a sibling does not renumber the others,
    so after mutations ids may no longer match positions.

Paths:
    ``path()`` addresses nodes by child indexes relative to the receiver,
    not by id: ``tree.path('0/1')`` is the second child of the first child.

Ownership:
    A parent owns its children through the ``children`` list. The
    ``parent`` back-reference lets any node reach its ancestors; detaching a
    node clears it.

Example:
    >>> tree = TreeNode()
    >>> tree.append_child({'name': 'a'}).append_child({'name': 'b'})
    >>> tree.find('0/1').data
    {'name': 'b'}
    >>> print(tree)
    0
     |- 0/0
     |- 0/1
"""

from __future__ import annotations

import itertools
import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator

from .config import TreeConfig
from .exceptions import InvalidArgumentError, NoParentError
from .loading import dump_to_dict, load_from_dict
from .traversal import NodeCallback, Visit, bubble_up, traverse_down, traverse_up

logger = logging.getLogger(__name__)

OUTLINE_MARKER = '|- '

_uids = itertools.count()


def make_id(parent: TreeNode | None, separator: str = '/') -> str:
    """Return the id a new child of parent would get.

    The root id is ``'0'``. A child id is the parent id joined to the
    number of children the parent currently has, i.e. the index the new
    child is going to occupy.
    """
    if parent is None:
        return '0'
    return f"{parent.id}{separator}{len(parent.children)}"


class TreeNode:
    """A node in a mutable ordered tree.

    Attributes:
        depth: Distance from the root at construction time.
        data: Arbitrary payload dictionary.
        parent: The owning node, or None for a root.
        id: String identifier, auto-derived unless given.
        config: Resolved TreeConfig (separator) for this node.
        children: Ordered list of child nodes.
        uid: Process-unique handle, used by traversals for dedup.

    Example:
        >>> root = TreeNode(data={'title': 'Menu'})
        >>> root.append_child({'title': 'File'}).append_child({'title': 'Edit'})
        >>> [child.id for child in root]
        ['0/0', '0/1']
    """

    __slots__ = ('depth', 'data', 'id', 'config', 'children', 'uid', 'parent')

    def __init__(
        self,
        parent: TreeNode | None = None,
        data: dict[str, Any] | None = None,
        node_id: str | None = None,
        separator: str | None = None,
    ) -> None:
        """Initialize a TreeNode.

        The node is not appended to ``parent.children``: use
        ``append_child`` for that, or append it yourself.

        Args:
            parent: Optional parent node.
            data: Optional payload dictionary (defaults to a new empty dict).
            node_id: Optional id, overrides the auto-assigned one.
            separator: Optional single character, overrides the separator
                inherited from the parent (default ``'/'``).
        """
        self.config = TreeConfig.resolve(separator, parent)
        self.depth = parent.depth + 1 if parent is not None else 0
        self.data = data if data is not None else {}
        self.parent = parent
        self.id = node_id if node_id is not None else make_id(parent, self.config.separator)
        self.children: list[TreeNode] = []
        self.uid = next(_uids)

    # ==================== Construction ====================

    @classmethod
    def parse(
        cls,
        source: Mapping[str, Any],
        children_key: str,
        parent: TreeNode | None = None,
        separator: str | None = None,
    ) -> TreeNode:
        """Build a tree from nested mappings.

        Args:
            source: Nested data, each level a mapping.
            children_key: Name of the field holding child levels.
            parent: Optional existing node to graft the parsed subtree on.
            separator: Separator of the new root (ignored with parent).

        Returns:
            The new root, or parent when one was given.

        Example:
            >>> tree = TreeNode.parse(
            ...     {'a': 1, 'children': [{'a': 2}, {'a': 3}]}, 'children')
            >>> len(tree)
            3
        """
        return load_from_dict(source, children_key, parent, separator)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"TreeNode({self.id!r}, children={len(self.children)})"

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        """Return the number of nodes in this subtree, self included."""
        return len(self.to_array())

    def __iter__(self) -> Iterator[TreeNode]:
        """Iterate over direct children in order."""
        return iter(self.children)

    # ==================== Navigation ====================

    @property
    def separator(self) -> str:
        return self.config.separator

    @property
    def length(self) -> int:
        """Number of nodes in this subtree, self included."""
        return len(self)

    def root(self) -> TreeNode:
        """Return the topmost ancestor (self for a root)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self.parent is None

    # ==================== Mutation ====================

    def append_child(
        self,
        data: dict[str, Any] | None = None,
        node_id: str | None = None,
    ) -> TreeNode:
        """Create a child at the end of children.

        Args:
            data: Optional payload of the child.
            node_id: Optional id, overrides the auto-assigned one.

        Returns:
            self, for chaining.

        Example:
            >>> tree.append_child().append_child({'x': 1}, 'custom')
        """
        self.children.append(TreeNode(self, data, node_id))
        return self

    def append_children(self, source: Mapping[str, Any], children_key: str) -> TreeNode:
        """Graft a subtree parsed from nested mappings under this node.

        Returns:
            self, with the new subtree as its last child.
        """
        return load_from_dict(source, children_key, self)

    def remove_child(self, target: int | TreeNode) -> TreeNode | None:
        """Detach a child, by position or by reference.

        The detached node becomes parentless. Its id and depth are kept, as
        are the ids of the remaining siblings.

        Args:
            target: Index of the child, or the child node itself.

        Returns:
            The removed node, or None if target is a node that is not
            among this node's children.

        Raises:
            InvalidArgumentError: If target is neither a valid index nor
                a TreeNode.
        """
        if isinstance(target, TreeNode):
            for index, child in enumerate(self.children):
                if child is target:
                    return self._pop_child(index)
            return None
        if (
            isinstance(target, int)
            and not isinstance(target, bool)
            and 0 <= target < len(self.children)
        ):
            return self._pop_child(target)
        raise InvalidArgumentError(f"Invalid argument {target!r}")

    def _pop_child(self, index: int) -> TreeNode:
        child = self.children.pop(index)
        child.parent = None
        logger.debug("Removed child %r at position %d from %r", child.id, index, self.id)
        return child

    def remove(self) -> TreeNode | None:
        """Detach this node from its parent.

        Returns:
            self, as returned by the parent's remove_child.

        Raises:
            NoParentError: If this node has no parent.
        """
        parent = self.parent
        if parent is None:
            raise NoParentError(f"Node {self.id!r} has no parent")
        return parent.remove_child(self)

    # ==================== Traversal ====================

    def traverse_down(
        self,
        iterator: NodeCallback,
        post_iterator: NodeCallback | None = None,
    ) -> None:
        """Walk this subtree in pre-order.

        Return ``Visit.STOP`` (or ``False``) from iterator to abort the whole walk.
        post_iterator, if given, runs on each child once its subtree is done.
        """
        traverse_down(self, iterator, post_iterator)

    def traverse_up(self, iterator: NodeCallback) -> None:
        """Walk up to the root, visiting each level's node and its children."""
        traverse_up(self, iterator)

    def bubble_up(self, iterator: NodeCallback) -> None:
        """Walk the ancestor chain, self included."""
        bubble_up(self, iterator)

    # ==================== Query ====================

    def find(self, finder: Callable[[TreeNode], Any] | str) -> TreeNode | None:
        """Return the first node of this subtree matching finder.

        Args:
            finder: A predicate receiving each node in pre-order, or an id
                to compare against ``node.id``.

        Returns:
            The first match, or None.

        Example:
            >>> tree.find('0/3')
            >>> tree.find(lambda node: node.depth == 2)
        """
        predicate = finder if callable(finder) else (lambda node: node.id == finder)
        match: list[TreeNode] = []

        def _check(node: TreeNode) -> Visit:
            if predicate(node):
                match.append(node)
                return Visit.STOP
            return Visit.CONTINUE

        self.traverse_down(_check)
        return match[0] if match else None

    def path(self, path: str, separator: str | None = None) -> TreeNode | None:
        """Return the node at a path of child indexes relative to self.

        Args:
            path: Indexes joined by separator, e.g. ``'0/1'``. A leading
                separator is ignored.
            separator: Defaults to this node's separator.

        Returns:
            The addressed node, or None if any index is out of range or
            not an integer.

        Example:
            >>> tree.path('/3')       # fourth child
            >>> tree.path('0/1')      # second child of the first child
        """
        separator = separator or self.separator
        if path.startswith(separator):
            path = path[len(separator):]

        context: TreeNode | None = self
        for token in path.split(separator):
            if context is None:
                break
            try:
                index = int(token)
            except ValueError:
                return None
            if 0 <= index < len(context.children):
                context = context.children[index]
            else:
                context = None
        return context

    def to_array(self) -> list[TreeNode]:
        """Return self and all descendants in pre-order."""
        nodes: list[TreeNode] = []
        self.traverse_down(nodes.append)
        return nodes

    # ==================== Conversion ====================

    def to_string(self, include_data: bool = False) -> str:
        """Render this subtree as an indented outline.

        Args:
            include_data: If True, append each node's data as JSON.

        Example:
            >>> print(tree.to_string())
            0
             |- 0/0
              |- 0/0/0
             |- 0/1
        """
        lines: list[str] = []

        def _line(node: TreeNode) -> None:
            line = node.id
            if node.depth:
                line = ' ' * node.depth + OUTLINE_MARKER + line
            if include_data:
                line = f"{line} {json.dumps(node.data, default=str)}"
            lines.append(line)

        self.traverse_down(_line)
        return '\n'.join(lines)

    def as_dict(self, children_key: str = 'children') -> dict[str, Any]:
        """Convert this subtree to nested dicts, the shape parse() reads."""
        return dump_to_dict(self, children_key)
