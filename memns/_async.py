"""Async wrapper around MemoryNamespace.

Every call is delegated to :func:`asyncio.to_thread`, so the tree lock is
never held on the event-loop thread.
"""

from __future__ import annotations

import asyncio

from ._entry import Entry
from ._namespace import MemoryNamespace
from ._typing import CollisionPolicy, MNSStats


class AsyncMemoryNamespace:
    """Thin async facade over :class:`MemoryNamespace`."""

    def __init__(
        self,
        max_nodes: int | None = None,
        lock_timeout: float | None = None,
    ) -> None:
        self._sync = MemoryNamespace(max_nodes=max_nodes, lock_timeout=lock_timeout)

    @property
    def sync(self) -> MemoryNamespace:
        return self._sync

    async def cwd(self) -> str:
        return await asyncio.to_thread(lambda: self._sync.cwd)

    async def resolve(self, path: str, auto_create: bool = False) -> Entry:
        return await asyncio.to_thread(self._sync.resolve, path, auto_create)

    async def change_directory(self, path: str, auto_create: bool = False) -> Entry:
        return await asyncio.to_thread(self._sync.change_directory, path, auto_create)

    async def create_entry(self, name: str, is_dir: bool = False) -> Entry:
        return await asyncio.to_thread(self._sync.create_entry, name, is_dir)

    async def move(
        self,
        source: str,
        dest: str,
        auto_create: bool = False,
        policy: CollisionPolicy = CollisionPolicy.REPLACE,
    ) -> bool:
        return await asyncio.to_thread(
            self._sync.move, source, dest, auto_create, policy
        )

    async def delete(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.delete, path)

    async def write_content(self, path: str, text: str) -> bool:
        return await asyncio.to_thread(self._sync.write_content, path, text)

    async def read_content(self, path: str, offset: int = 0, size: int = -1) -> str:
        return await asyncio.to_thread(self._sync.read_content, path, offset, size)

    async def list_children(self, path: str | None = None) -> list[tuple[str, bool]]:
        return await asyncio.to_thread(self._sync.list_children, path)

    async def find_exact(self, name: str, recursive: bool = False) -> list[str]:
        return await asyncio.to_thread(self._sync.find_exact, name, recursive)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self._sync.exists, path)

    async def stats(self) -> MNSStats:
        return await asyncio.to_thread(self._sync.stats)
