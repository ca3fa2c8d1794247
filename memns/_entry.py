from __future__ import annotations

from ._node import NodeTree


class Entry:
    """Handle to one node of a namespace.

    Entries are cheap values; equality means "same node of the same tree".
    Once the node is deleted every attribute except ``node_id`` and
    ``is_live`` raises ``MNSDestroyedError``.  Lock waits are bounded by the
    *lock_timeout* of the namespace that handed the entry out.
    """

    __slots__ = ("_tree", "_node_id", "_lock_timeout")

    def __init__(
        self, tree: NodeTree, node_id: int, lock_timeout: float | None = None
    ) -> None:
        self._tree = tree
        self._node_id = node_id
        self._lock_timeout = lock_timeout

    @property
    def node_id(self) -> int:
        return self._node_id

    @property
    def is_live(self) -> bool:
        return self._tree.is_live(self._node_id)

    @property
    def name(self) -> str:
        with self._tree.locked(self._lock_timeout):
            return self._tree.name(self._node_id)

    @property
    def is_dir(self) -> bool:
        with self._tree.locked(self._lock_timeout):
            return self._tree.is_dir(self._node_id)

    @property
    def is_root(self) -> bool:
        with self._tree.locked(self._lock_timeout):
            return self._tree.is_root(self._node_id)

    @property
    def parent(self) -> Entry | None:
        with self._tree.locked(self._lock_timeout):
            parent_id = self._tree.parent(self._node_id)
        if parent_id is None:
            return None
        return Entry(self._tree, parent_id, self._lock_timeout)

    @property
    def full_path(self) -> str:
        with self._tree.locked(self._lock_timeout):
            return self._tree.full_path(self._node_id)

    def read_content(self, offset: int = 0, size: int = -1) -> str:
        with self._tree.locked(self._lock_timeout):
            return self._tree.get_leaf(self._node_id).content.read(offset, size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._tree is other._tree and self._node_id == other._node_id

    def __hash__(self) -> int:
        return hash((id(self._tree), self._node_id))

    def __repr__(self) -> str:
        if not self._tree.is_live(self._node_id):
            return f"<Entry #{self._node_id} (deleted)>"
        return f"<Entry #{self._node_id} {self.full_path!r}>"
