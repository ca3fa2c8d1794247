from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from ._exceptions import MNSNotADirectoryError, MNSNotFoundError
from ._names import CURRENT_DIR, PARENT_DIR, split_path
from ._node import DirNode, NodeTree

logger = logging.getLogger(__name__)


class PathResolver:
    """Walks a path string component by component over a :class:`NodeTree`.

    The resolver keeps its own *cursor*, the directory that relative paths
    start from.  A successful resolution that ends on a directory moves the
    cursor there; ending on a leaf or failing leaves it where it was.  Use
    :meth:`preserving_cursor` for one-shot lookups.
    """

    def __init__(self, tree: NodeTree, cursor: int | None = None) -> None:
        self._tree = tree
        self._cursor: int = tree.root_id if cursor is None else cursor
        tree.get_dir(self._cursor)

    @property
    def cursor(self) -> int:
        self._revive_cursor()
        return self._cursor

    @cursor.setter
    def cursor(self, node_id: int) -> None:
        self._tree.get_dir(node_id)
        self._cursor = node_id

    def _revive_cursor(self) -> None:
        # A cursor whose directory was deleted falls back to root.
        if not self._tree.is_live(self._cursor):
            logger.debug("cursor node %d was deleted; resetting to root", self._cursor)
            self._cursor = self._tree.root_id

    @contextmanager
    def preserving_cursor(self) -> Iterator[None]:
        saved = self._cursor
        try:
            yield
        finally:
            self._cursor = saved
            self._revive_cursor()

    def resolve(self, path: str, auto_create: bool = False) -> int:
        """Return the node id *path* names.

        Absolute paths start at root, relative ones at the cursor.  With
        *auto_create*, every missing component is created as a directory,
        including the last one.

        Raises ``MNSNotFoundError`` for a missing component and
        ``MNSNotADirectoryError`` when a leaf appears before the last one.
        """
        tree = self._tree
        is_abs, parts = split_path(path)
        with tree.locked():
            self._revive_cursor()
            current = tree.root_id if is_abs else self._cursor
            found = self._walk(path, parts, current, auto_create)
            if isinstance(tree.get(found), DirNode):
                self._cursor = found
        return found

    def _walk(
        self, path: str, parts: list[str], current: int, auto_create: bool
    ) -> int:
        tree = self._tree
        last = len(parts) - 1
        for idx, part in enumerate(parts):
            if part == CURRENT_DIR:
                continue
            if part == PARENT_DIR:
                parent = tree.parent(current)
                if parent is not None:
                    current = parent
                continue
            child = tree.children(current).get(part)
            if child is None:
                if not auto_create:
                    raise MNSNotFoundError(
                        f"No such file or directory: '{path}' "
                        f"('{part}' missing)",
                        path,
                    )
                child = tree.create_child(current, part, is_dir=True)
                logger.debug("auto-created directory %r while resolving %r", part, path)
            if idx == last:
                return child
            if not tree.is_dir(child):
                raise MNSNotADirectoryError(
                    f"Not a directory: '{part}' in '{path}'", path
                )
            current = child
        return current
