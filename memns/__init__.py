from typing import TYPE_CHECKING

from ._entry import Entry
from ._exceptions import (
    ErrorKind,
    MNSAlreadyDeletedError,
    MNSAlreadyExistsError,
    MNSCannotDeleteRootError,
    MNSDestroyedError,
    MNSError,
    MNSInvalidNameError,
    MNSNodeLimitExceededError,
    MNSNotADirectoryError,
    MNSNotALeafError,
    MNSNotFoundError,
    MNSTypeMismatchError,
    MNSUnsupportedOperationError,
)
from ._names import DELIMITER
from ._namespace import MemoryNamespace
from ._typing import CollisionPolicy, ListFormat, MNSEntryInfo, MNSStats

if TYPE_CHECKING:
    from ._async import AsyncMemoryNamespace


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "AsyncMemoryNamespace":
        from ._async import AsyncMemoryNamespace

        globals()["AsyncMemoryNamespace"] = AsyncMemoryNamespace
        return AsyncMemoryNamespace
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MemoryNamespace",
    "AsyncMemoryNamespace",
    "Entry",
    "CollisionPolicy",
    "ListFormat",
    "MNSStats",
    "MNSEntryInfo",
    "DELIMITER",
    "ErrorKind",
    "MNSError",
    "MNSInvalidNameError",
    "MNSAlreadyExistsError",
    "MNSNotFoundError",
    "MNSNotADirectoryError",
    "MNSNotALeafError",
    "MNSTypeMismatchError",
    "MNSCannotDeleteRootError",
    "MNSAlreadyDeletedError",
    "MNSUnsupportedOperationError",
    "MNSDestroyedError",
    "MNSNodeLimitExceededError",
]
__version__ = "0.1.0"
