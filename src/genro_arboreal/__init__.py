# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-Arboreal - A mutable, ordered multi-way tree.

A lightweight, zero-dependency library for hierarchical data (category
trees, nested menus) addressable by positional ids and by index paths.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, TreeConfig
from .exceptions import ArborealError, InvalidArgumentError, NoParentError
from .loading import dump_to_dict, load_from_dict
from .node import TreeNode, make_id
from .traversal import Visit, bubble_up, traverse_down, traverse_up

__all__ = [
    # Core classes
    "TreeNode",
    "make_id",
    # Configuration
    "TreeConfig",
    "DEFAULT_CONFIG",
    # Traversal
    "Visit",
    "traverse_down",
    "traverse_up",
    "bubble_up",
    # Loading
    "load_from_dict",
    "dump_to_dict",
    # Exceptions
    "ArborealError",
    "InvalidArgumentError",
    "NoParentError",
]
