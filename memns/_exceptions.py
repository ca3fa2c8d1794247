from enum import Enum


class ErrorKind(str, Enum):
    INVALID_NAME = "InvalidName"
    ALREADY_EXISTS = "AlreadyExists"
    NOT_FOUND = "NotFound"
    NOT_A_DIRECTORY = "NotADirectory"
    NOT_A_LEAF = "NotALeaf"
    TYPE_MISMATCH = "TypeMismatch"
    CANNOT_DELETE_ROOT = "CannotDeleteRoot"
    ALREADY_DELETED = "AlreadyDeleted"
    UNSUPPORTED_OPERATION = "UnsupportedOperation"
    DESTROYED = "Destroyed"
    NODE_LIMIT = "NodeLimitExceeded"


class MNSError(OSError):
    """Base class for every namespace failure. Subclass of OSError.

    ``kind`` identifies the failure; ``path`` is the path or name the caller
    supplied, when one is known.
    """

    kind: ErrorKind

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class MNSInvalidNameError(MNSError, ValueError):
    kind = ErrorKind.INVALID_NAME


class MNSAlreadyExistsError(MNSError, FileExistsError):
    kind = ErrorKind.ALREADY_EXISTS


class MNSNotFoundError(MNSError, FileNotFoundError):
    kind = ErrorKind.NOT_FOUND


class MNSNotADirectoryError(MNSError, NotADirectoryError):
    kind = ErrorKind.NOT_A_DIRECTORY


class MNSNotALeafError(MNSError, IsADirectoryError):
    kind = ErrorKind.NOT_A_LEAF


class MNSTypeMismatchError(MNSError, IsADirectoryError):
    """Raised when a leaf would replace a directory of the same name."""
    kind = ErrorKind.TYPE_MISMATCH


class MNSCannotDeleteRootError(MNSError, PermissionError):
    kind = ErrorKind.CANNOT_DELETE_ROOT


class MNSAlreadyDeletedError(MNSError, FileNotFoundError):
    kind = ErrorKind.ALREADY_DELETED


class MNSUnsupportedOperationError(MNSError, IsADirectoryError):
    """Raised for directory moves, which are not supported."""
    kind = ErrorKind.UNSUPPORTED_OPERATION


class MNSDestroyedError(MNSError):
    """Raised on any attribute access to a deleted (tombstoned) node."""
    kind = ErrorKind.DESTROYED

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id} has been deleted.")


class MNSNodeLimitExceededError(MNSError):
    """Raised when the live node count limit is exceeded."""
    kind = ErrorKind.NODE_LIMIT

    def __init__(self, current: int, limit: int) -> None:
        self.current = current
        self.limit = limit
        super().__init__(
            f"MNS node limit exceeded: current {current} nodes, limit is {limit}."
        )
