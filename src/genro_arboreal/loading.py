# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Conversion between nested mappings and TreeNode hierarchies.

The accepted shape is a mapping of arbitrary fields plus one field, named
by the caller, holding a sequence of same-shaped child mappings::

    {
        'category': 'JavaScript',
        'subcategories': [
            {'category': 'Ajax'},
            {'category': 'Engines', 'subcategories': [{'category': 'V8'}]},
        ],
    }
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode

logger = logging.getLogger(__name__)


def _node_data(source: Mapping[str, Any], children_key: str) -> dict[str, Any]:
    """Shallow copy of a level, minus its children field."""
    return {key: value for key, value in source.items() if key != children_key}


def load_from_dict(
    source: Mapping[str, Any],
    children_key: str,
    parent: TreeNode | None = None,
    separator: str | None = None,
) -> TreeNode:
    """Build a subtree from a nested mapping.

    Levels are processed depth-first, children in sequence order.

    Args:
        source: Top level of the nested data.
        children_key: Field holding the child levels.
        parent: Optional existing node the new subtree is appended to.
        separator: Separator for a new root. Ignored when parent is given,
            the subtree then inherits the parent's config.

    Returns:
        The new root node, or parent itself when one was given.

    Raises:
        TypeError: If a level is not a mapping.
    """
    from .node import TreeNode

    def _walk(level: Any, owner: TreeNode | None) -> TreeNode:
        if not isinstance(level, Mapping):
            raise TypeError(
                f"tree levels must be mappings, not {type(level).__name__}"
            )
        if owner is None:
            node = TreeNode(data=_node_data(level, children_key), separator=separator)
        else:
            node = TreeNode(owner, _node_data(level, children_key))
            owner.children.append(node)
        for child_level in level.get(children_key) or ():
            _walk(child_level, node)
        return node

    root = _walk(source, parent)
    logger.debug(
        "Loaded subtree %r under %r",
        root.id,
        parent.id if parent is not None else None,
    )
    return parent if parent is not None else root


def dump_to_dict(node: TreeNode, children_key: str = 'children') -> dict[str, Any]:
    """Convert a subtree back to the nested mapping shape.

    Each node becomes a shallow copy of its data. Children are listed
    under children_key, which is omitted for leaves.
    """
    result = dict(node.data)
    if node.children:
        result[children_key] = [
            dump_to_dict(child, children_key) for child in node.children
        ]
    return result
