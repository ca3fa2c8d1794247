from enum import Enum
from typing import TypedDict


class CollisionPolicy(str, Enum):
    """What a move does when the destination name is already taken."""

    REPLACE = "replace"
    ABORT = "abort"
    KEEP_PREVIOUS = "keep_previous"


class ListFormat(str, Enum):
    NAME = "name"
    FULL_PATH = "full"


class MNSStats(TypedDict):
    node_count: int
    dir_count: int
    leaf_count: int
    content_chars: int
    max_nodes: int | None


class MNSEntryInfo(TypedDict):
    name: str
    full_path: str
    is_dir: bool
    size: int
