# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Per-tree settings resolved once at node construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import TreeNode

DEFAULT_SEPARATOR = '/'


@dataclass(frozen=True)
class TreeConfig:
    """Settings shared by a node and the children created under it.

    Attributes:
        separator: Single character joining id segments and splitting
            path strings.
    """

    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str) or len(self.separator) != 1:
            raise ValueError(
                f"separator must be a single character, not {self.separator!r}"
            )

    @classmethod
    def resolve(
        cls,
        separator: str | None = None,
        parent: TreeNode | None = None,
    ) -> TreeConfig:
        """Return the effective config for a new node.

        An explicit separator wins, then the parent's config, then the
        module default.
        """
        if separator is not None:
            if parent is not None and parent.config.separator == separator:
                return parent.config
            return cls(separator)
        if parent is not None:
            return parent.config
        return DEFAULT_CONFIG


DEFAULT_CONFIG = TreeConfig()
