"""Identity-keyed cache of compiled check lists."""

from __future__ import annotations

import logging
from typing import Any

from .execution import Check

logger = logging.getLogger(__name__)


class CompiledCache:
    """Associates schema nodes with their compiled check lists.

    Nodes are keyed by identity, so two equal but distinct dicts get their
    own entries and nothing is ever written into the schema itself. Each
    entry keeps a reference to its node, which stops the identity from being
    reused while the entry exists.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, list[Check]]] = {}

    def get(self, node: Any) -> list[Check] | None:
        """Get the cached checks for a node, or None if it was never compiled."""
        entry = self._entries.get(id(node))
        if entry is None or entry[0] is not node:
            return None
        return entry[1]

    def set(self, node: Any, checks: list[Check]) -> None:
        self._entries[id(node)] = (node, checks)

    def invalidate(self, node: Any) -> bool:
        """Drop the entry for a node.

        Returns:
            True if an entry was removed
        """
        entry = self._entries.get(id(node))
        if entry is None or entry[0] is not node:
            return False
        del self._entries[id(node)]
        logger.debug(f"Invalidated compiled checks for node {id(node):#x}")
        return True

    def clear(self) -> None:
        self._entries.clear()

    def nodes(self) -> list[Any]:
        """Get every node that currently has cached checks."""
        return [node for node, _ in self._entries.values()]

    def __contains__(self, node: Any) -> bool:
        return self.get(node) is not None

    def __len__(self) -> int:
        return len(self._entries)
