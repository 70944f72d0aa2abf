# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Arboreal exceptions."""

from __future__ import annotations


class ArborealError(Exception):
    """Base exception for Arboreal errors."""

    pass


class InvalidArgumentError(ArborealError):
    """Raised when remove_child gets neither a valid index nor a node."""

    pass


class NoParentError(ArborealError):
    """Raised when a parentless node is asked to detach itself."""

    pass
