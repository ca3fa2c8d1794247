from __future__ import annotations

import logging
from collections.abc import Iterator

from ._entry import Entry
from ._exceptions import MNSError, MNSNotADirectoryError
from ._node import DirNode, LeafNode, NodeTree
from ._ops import create_entry, delete_node, move_leaf
from ._resolver import PathResolver
from ._typing import CollisionPolicy, ListFormat, MNSEntryInfo, MNSStats

logger = logging.getLogger(__name__)


class MemoryNamespace:
    """A session over an in-memory tree of directories and leaves.

    Each instance has its own current directory (initially root).  Relative
    paths resolve against it; only :meth:`change_directory` moves it.
    :meth:`session` opens another cursor over the same tree.
    """

    def __init__(
        self,
        max_nodes: int | None = None,
        lock_timeout: float | None = None,
        _tree: NodeTree | None = None,
    ) -> None:
        if lock_timeout is not None and lock_timeout < 0:
            raise ValueError(f"lock_timeout must be >= 0 or None, got {lock_timeout!r}")
        if _tree is not None and max_nodes is not None:
            raise ValueError("max_nodes can not be set on a shared tree.")
        self._tree: NodeTree = _tree if _tree is not None else NodeTree(max_nodes)
        self._lock_timeout: float | None = lock_timeout
        self._resolver = PathResolver(self._tree)

    def session(self) -> MemoryNamespace:
        """Return a new namespace sharing this tree, with its cursor at root."""
        return MemoryNamespace(lock_timeout=self._lock_timeout, _tree=self._tree)

    # -- helpers --

    def _entry(self, node_id: int) -> Entry:
        return Entry(self._tree, node_id, self._lock_timeout)

    def _lookup(self, path: str) -> int:
        with self._resolver.preserving_cursor():
            return self._resolver.resolve(path)

    def _dir_id(self, path: str | None) -> int:
        if path is None:
            return self._resolver.cursor
        node_id = self._lookup(path)
        if not self._tree.is_dir(node_id):
            raise MNSNotADirectoryError(f"Not a directory: '{path}'", path)
        return node_id

    # -- cursor --

    @property
    def root(self) -> Entry:
        return self._entry(self._tree.root_id)

    @property
    def cwd(self) -> str:
        with self._tree.locked(self._lock_timeout):
            return self._tree.full_path(self._resolver.cursor)

    def getcwd(self) -> Entry:
        with self._tree.locked(self._lock_timeout):
            return self._entry(self._resolver.cursor)

    def change_directory(self, path: str, auto_create: bool = False) -> Entry:
        with self._tree.locked(self._lock_timeout):
            with self._resolver.preserving_cursor():
                node_id = self._resolver.resolve(path, auto_create)
            if not self._tree.is_dir(node_id):
                raise MNSNotADirectoryError(
                    f"'{path}' is a file, can not change directory to it.", path
                )
            self._resolver.cursor = node_id
        logger.debug("cwd is now node %d (%r)", node_id, path)
        return self._entry(node_id)

    # -- lookup --

    def resolve(self, path: str, auto_create: bool = False) -> Entry:
        with self._tree.locked(self._lock_timeout):
            with self._resolver.preserving_cursor():
                node_id = self._resolver.resolve(path, auto_create)
        return self._entry(node_id)

    def exists(self, path: str) -> bool:
        try:
            with self._tree.locked(self._lock_timeout):
                self._lookup(path)
        except MNSError:
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            with self._tree.locked(self._lock_timeout):
                return self._tree.is_dir(self._lookup(path))
        except MNSError:
            return False

    def is_leaf(self, path: str) -> bool:
        try:
            with self._tree.locked(self._lock_timeout):
                return not self._tree.is_dir(self._lookup(path))
        except MNSError:
            return False

    # -- mutation --

    def create_entry(self, name: str, is_dir: bool = False) -> Entry:
        with self._tree.locked(self._lock_timeout):
            node_id = create_entry(self._tree, self._resolver.cursor, name, is_dir)
        return self._entry(node_id)

    def mkdir(self, name: str) -> Entry:
        return self.create_entry(name, is_dir=True)

    def touch(self, name: str) -> Entry:
        return self.create_entry(name, is_dir=False)

    def move(
        self,
        source: str,
        dest: str,
        auto_create: bool = False,
        policy: CollisionPolicy = CollisionPolicy.REPLACE,
    ) -> bool:
        with self._tree.locked(self._lock_timeout):
            node_id = self._lookup(source)
            return move_leaf(self._tree, node_id, dest, auto_create, policy)

    def delete(self, path: str) -> bool:
        with self._tree.locked(self._lock_timeout):
            node_id = self._lookup(path)
            return delete_node(self._tree, node_id)

    def delete_entry(self, entry: Entry) -> bool:
        """Delete the node *entry* refers to; a second call raises."""
        if entry._tree is not self._tree:
            raise ValueError("Entry belongs to a different namespace.")
        return delete_node(self._tree, entry.node_id, self._lock_timeout)

    def write_content(self, path: str, text: str) -> bool:
        """Append *text* to the leaf at *path*.

        Returns ``False`` and leaves the leaf untouched when *text* is empty.
        """
        with self._tree.locked(self._lock_timeout):
            leaf = self._tree.get_leaf(self._lookup(path))
            if not text:
                logger.debug("empty content for '%s'; nothing appended", path)
                return False
            leaf.content.append(text)
        return True

    def read_content(self, path: str, offset: int = 0, size: int = -1) -> str:
        """Return *size* characters of the leaf at *path* starting at *offset*.

        The defaults read the whole content; a negative *size* reads to the end.
        """
        with self._tree.locked(self._lock_timeout):
            leaf = self._tree.get_leaf(self._lookup(path))
            return leaf.content.read(offset, size)

    # -- listing --

    def list_children(self, path: str | None = None) -> list[tuple[str, bool]]:
        with self._tree.locked(self._lock_timeout):
            children = self._tree.children(self._dir_id(path))
            return sorted(
                (name, self._tree.is_dir(child_id))
                for name, child_id in children.items()
            )

    def ls(self, path: str | None = None, fmt: ListFormat = ListFormat.NAME) -> list[str]:
        fmt = ListFormat(fmt)
        with self._tree.locked(self._lock_timeout):
            children = self._tree.children(self._dir_id(path))
            if fmt is ListFormat.NAME:
                return sorted(children)
            return [self._tree.full_path(children[name]) for name in sorted(children)]

    def find_exact(self, name: str, recursive: bool = False) -> list[str]:
        """Return full paths of entries named *name* under the cwd."""
        result: list[str] = []
        with self._tree.locked(self._lock_timeout):
            # Pushed in reverse name order so siblings pop smallest first.
            stack = self._sorted_child_ids(self._resolver.cursor)
            while stack:
                node_id = stack.pop()
                if self._tree.name(node_id) == name:
                    result.append(self._tree.full_path(node_id))
                if recursive and self._tree.is_dir(node_id):
                    stack.extend(self._sorted_child_ids(node_id))
        return result

    def _sorted_child_ids(self, dir_id: int) -> list[int]:
        children = self._tree.children(dir_id)
        return [children[n] for n in sorted(children, reverse=True)]

    def walk(self, path: str | None = None) -> Iterator[tuple[str, list[str], list[str]]]:
        """Recursively walk the tree top-down, like :func:`os.walk`.

        Each directory's listing is snapshotted under the lock; entries
        deleted between steps are skipped.
        """
        with self._tree.locked(self._lock_timeout):
            start = self._dir_id(path)
            start_path = self._tree.full_path(start)
        stack: list[tuple[str, int]] = [(start_path, start)]
        while stack:
            dir_path, dir_id = stack.pop()
            dirnames: list[str] = []
            leafnames: list[str] = []
            child_dirs: list[tuple[str, int]] = []
            with self._tree.locked(self._lock_timeout):
                if not self._tree.is_live(dir_id):
                    continue
                for name, child_id in sorted(self._tree.children(dir_id).items()):
                    if self._tree.is_dir(child_id):
                        dirnames.append(name)
                        child_dirs.append((dir_path + name + "/", child_id))
                    else:
                        leafnames.append(name)
            yield dir_path, dirnames, leafnames
            stack.extend(reversed(child_dirs))

    # -- metadata --

    def stat(self, path: str) -> MNSEntryInfo:
        with self._tree.locked(self._lock_timeout):
            node = self._tree.get(self._lookup(path))
            if isinstance(node, LeafNode):
                size = len(node.content)
            else:
                size = len(node.children)
            return MNSEntryInfo(
                name=node.name,
                full_path=self._tree.full_path(node.node_id),
                is_dir=isinstance(node, DirNode),
                size=size,
            )

    def stats(self) -> MNSStats:
        with self._tree.locked(self._lock_timeout):
            dir_count = 0
            leaf_count = 0
            content_chars = 0
            for node in self._tree.iter_nodes():
                if isinstance(node, DirNode):
                    dir_count += 1
                else:
                    leaf_count += 1
                    content_chars += len(node.content)
        return MNSStats(
            node_count=dir_count + leaf_count,
            dir_count=dir_count,
            leaf_count=leaf_count,
            content_chars=content_chars,
            max_nodes=self._tree.max_nodes,
        )

    def __repr__(self) -> str:
        return f"<MemoryNamespace cwd={self.cwd!r}>"
