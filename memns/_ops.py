"""Structural mutations: create, move and delete.

Every function takes the :class:`NodeTree` lock for its whole duration, so a
call is observed by other threads either entirely or not at all.
"""

from __future__ import annotations

import logging

from ._exceptions import (
    MNSAlreadyDeletedError,
    MNSAlreadyExistsError,
    MNSCannotDeleteRootError,
    MNSNotADirectoryError,
    MNSTypeMismatchError,
    MNSUnsupportedOperationError,
)
from ._names import split_destination, validate_name
from ._node import DirNode, LeafNode, LiveNode, NodeTree
from ._resolver import PathResolver
from ._typing import CollisionPolicy

logger = logging.getLogger(__name__)


def create_entry(tree: NodeTree, parent_id: int, name: str, is_dir: bool) -> int:
    return tree.create_child(parent_id, name, is_dir)


def move_leaf(
    tree: NodeTree,
    node_id: int,
    dest: str,
    auto_create: bool = False,
    policy: CollisionPolicy = CollisionPolicy.REPLACE,
    lock_timeout: float | None = None,
) -> bool:
    """Rename and/or reparent the leaf *node_id*.

    *dest* is ``dir/name``, ``/dir/name`` or a bare ``name``.  A relative
    directory part is resolved from the leaf's current parent; a bare name
    renames in place.

    Returns ``True`` when the leaf was moved (or already sits at *dest*) and
    ``False`` when ``KEEP_PREVIOUS`` kept an existing entry, in which case
    nothing changed.  Every failure leaves the leaf's name and parent intact.
    """
    policy = CollisionPolicy(policy)
    with tree.locked(lock_timeout):
        node = tree.get(node_id)
        if isinstance(node, DirNode):
            raise MNSUnsupportedOperationError(
                f"Directory move is not supported: '{tree.full_path(node_id)}'",
                tree.full_path(node_id),
            )
        assert node.parent_id is not None
        dir_part, new_name = split_destination(dest)
        validate_name(new_name)

        if dir_part is None:
            dest_dir_id = node.parent_id
        else:
            walker = PathResolver(tree, cursor=node.parent_id)
            dest_dir_id = walker.resolve(dir_part, auto_create)
            if not tree.is_dir(dest_dir_id):
                raise MNSNotADirectoryError(
                    f"Destination is not a directory: '{dir_part}'", dir_part
                )
        dest_dir = tree.get_dir(dest_dir_id)

        existing_id = dest_dir.children.get(new_name)
        if existing_id == node_id:
            return True
        if existing_id is not None:
            if policy is CollisionPolicy.ABORT:
                raise MNSAlreadyExistsError(
                    f"'{new_name}' already exists in "
                    f"'{tree.full_path(dest_dir_id)}', aborting move.",
                    dest,
                )
            if policy is CollisionPolicy.KEEP_PREVIOUS:
                logger.info(
                    "'%s' already exists in '%s'; keeping existing entry",
                    new_name,
                    tree.full_path(dest_dir_id),
                )
                return False
            existing = tree.get(existing_id)
            if isinstance(existing, DirNode):
                raise MNSTypeMismatchError(
                    f"'{tree.full_path(existing_id)}' is a directory and can not "
                    "be replaced by a file.",
                    dest,
                )
            logger.info("replacing existing '%s'", tree.full_path(existing_id))
            _destroy(tree, existing)

        old_parent = tree.get_dir(node.parent_id)
        old_name = node.name
        dest_dir.children[new_name] = node_id
        del old_parent.children[old_name]
        node.name = new_name
        node.parent_id = dest_dir_id
    logger.debug("moved node %d from %r to %r", node_id, old_name, dest)
    return True


def delete_node(
    tree: NodeTree, node_id: int, lock_timeout: float | None = None
) -> bool:
    """Detach *node_id* and tombstone it along with its whole subtree."""
    with tree.locked(lock_timeout):
        if tree.is_tombstone(node_id):
            raise MNSAlreadyDeletedError(f"Node {node_id} is already deleted.")
        node = tree.get(node_id)
        if node_id == tree.root_id:
            raise MNSCannotDeleteRootError("Can not delete the root directory.", "/")
        assert node.parent_id is not None
        path = tree.full_path(node_id)
        parent = tree.get_dir(node.parent_id)
        count = _destroy(tree, node)
        del parent.children[node.name]
    logger.debug("deleted '%s' (%d nodes)", path, count)
    return True


def _destroy(tree: NodeTree, node: LiveNode) -> int:
    # Post-order: children are tombstoned before their directory.
    count = 0
    stack: list[tuple[LiveNode, bool]] = [(node, False)]
    while stack:
        cur, expanded = stack.pop()
        if isinstance(cur, DirNode) and not expanded:
            stack.append((cur, True))
            for child_id in cur.children.values():
                stack.append((tree.get(child_id), False))
            continue
        if isinstance(cur, DirNode):
            cur.children.clear()
        elif isinstance(cur, LeafNode):
            cur.content.clear()
        tree.tombstone(cur)
        count += 1
    return count
