from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from ._content import AppendOnlyContent
from ._exceptions import (
    MNSAlreadyExistsError,
    MNSDestroyedError,
    MNSNodeLimitExceededError,
    MNSNotADirectoryError,
    MNSNotALeafError,
)
from ._names import DELIMITER, validate_name

logger = logging.getLogger(__name__)

ROOT_ID = 0

# ---------------------------------------------------------------------------
#  Node records
# ---------------------------------------------------------------------------


class DirNode:
    __slots__ = ("node_id", "name", "parent_id", "children")

    def __init__(self, node_id: int, name: str, parent_id: int | None) -> None:
        self.node_id: int = node_id
        self.name: str = name
        self.parent_id: int | None = parent_id
        self.children: dict[str, int] = {}


class LeafNode:
    __slots__ = ("node_id", "name", "parent_id", "content")

    def __init__(self, node_id: int, name: str, parent_id: int) -> None:
        self.node_id: int = node_id
        self.name: str = name
        self.parent_id: int | None = parent_id
        self.content: AppendOnlyContent = AppendOnlyContent()


class Tombstone:
    """Terminal state of a deleted node: no name, no parent, no content."""

    __slots__ = ("node_id", "was_dir")

    def __init__(self, node_id: int, was_dir: bool) -> None:
        self.node_id: int = node_id
        self.was_dir: bool = was_dir


LiveNode = DirNode | LeafNode
Node = DirNode | LeafNode | Tombstone


# ---------------------------------------------------------------------------
#  NodeTree
# ---------------------------------------------------------------------------


class NodeTree:
    """Arena of nodes addressed by integer id, rooted at ``ROOT_ID``.

    Children are owned through ``DirNode.children``; ``parent_id`` is only a
    navigation link.  All structural mutation must happen while holding
    :meth:`locked`.
    """

    def __init__(self, max_nodes: int | None = None) -> None:
        if max_nodes is not None and max_nodes < 1:
            raise ValueError(f"max_nodes must be >= 1, got {max_nodes!r}")
        self._lock = threading.RLock()
        self._max_nodes: int | None = max_nodes
        self._nodes: dict[int, Node] = {}
        self._live_count: int = 0
        self._next_node_id: int = ROOT_ID
        root = self._alloc(is_dir=True, name="", parent_id=None)
        assert root.node_id == ROOT_ID

    # -- locking --

    @contextmanager
    def locked(self, timeout: float | None = None) -> Iterator[None]:
        if timeout is None:
            acquired = self._lock.acquire()
        else:
            acquired = self._lock.acquire(timeout=timeout)
        if not acquired:
            raise BlockingIOError("Could not acquire namespace lock within timeout.")
        try:
            yield
        finally:
            self._lock.release()

    # -- allocation --

    def _alloc(self, is_dir: bool, name: str, parent_id: int | None) -> LiveNode:
        if self._max_nodes is not None and self._live_count >= self._max_nodes:
            raise MNSNodeLimitExceededError(self._live_count, self._max_nodes)
        nid = self._next_node_id
        self._next_node_id += 1
        node: LiveNode
        if is_dir:
            node = DirNode(nid, name, parent_id)
        else:
            assert parent_id is not None
            node = LeafNode(nid, name, parent_id)
        self._nodes[nid] = node
        self._live_count += 1
        return node

    def tombstone(self, node: LiveNode) -> None:
        self._nodes[node.node_id] = Tombstone(node.node_id, isinstance(node, DirNode))
        self._live_count -= 1

    # -- accessors --

    @property
    def root_id(self) -> int:
        return ROOT_ID

    @property
    def max_nodes(self) -> int | None:
        return self._max_nodes

    def node_count(self) -> int:
        return self._live_count

    def get(self, node_id: int) -> LiveNode:
        node = self._nodes.get(node_id)
        if node is None or isinstance(node, Tombstone):
            raise MNSDestroyedError(node_id)
        return node

    def get_dir(self, node_id: int) -> DirNode:
        node = self.get(node_id)
        if not isinstance(node, DirNode):
            raise MNSNotADirectoryError(
                f"Not a directory: '{self.full_path(node_id)}'",
                self.full_path(node_id),
            )
        return node

    def get_leaf(self, node_id: int) -> LeafNode:
        node = self.get(node_id)
        if not isinstance(node, LeafNode):
            raise MNSNotALeafError(
                f"Is a directory: '{self.full_path(node_id)}'",
                self.full_path(node_id),
            )
        return node

    def is_live(self, node_id: int) -> bool:
        return isinstance(self._nodes.get(node_id), (DirNode, LeafNode))

    def is_tombstone(self, node_id: int) -> bool:
        return isinstance(self._nodes.get(node_id), Tombstone)

    def is_dir(self, node_id: int) -> bool:
        return isinstance(self.get(node_id), DirNode)

    def is_root(self, node_id: int) -> bool:
        self.get(node_id)
        return node_id == ROOT_ID

    def name(self, node_id: int) -> str:
        return self.get(node_id).name

    def parent(self, node_id: int) -> int | None:
        return self.get(node_id).parent_id

    def children(self, node_id: int) -> dict[str, int]:
        return self.get_dir(node_id).children

    def iter_nodes(self) -> Iterator[LiveNode]:
        for node in self._nodes.values():
            if not isinstance(node, Tombstone):
                yield node

    def full_path(self, node_id: int) -> str:
        node = self.get(node_id)
        if node_id == ROOT_ID:
            return DELIMITER
        parts: list[str] = []
        cur: LiveNode = node
        while cur.parent_id is not None:
            parts.append(cur.name)
            cur = self.get(cur.parent_id)
        path = DELIMITER + DELIMITER.join(reversed(parts))
        if isinstance(node, DirNode):
            path += DELIMITER
        return path

    # -- structure --

    def create_child(self, parent_id: int, name: str, is_dir: bool) -> int:
        validate_name(name)
        with self._lock:
            parent = self.get_dir(parent_id)
            if name in parent.children:
                raise MNSAlreadyExistsError(
                    f"A subdirectory or file '{name}' already exists in "
                    f"'{self.full_path(parent_id)}'.",
                    name,
                )
            node = self._alloc(is_dir=is_dir, name=name, parent_id=parent_id)
            parent.children[name] = node.node_id
        logger.debug(
            "created %s %r under node %d",
            "directory" if is_dir else "leaf",
            name,
            parent_id,
        )
        return node.node_id
