from ._exceptions import MNSInvalidNameError

DELIMITER = "/"
CURRENT_DIR = "."
PARENT_DIR = ".."


def is_valid_name(name: str) -> bool:
    if not name:
        return False
    if name in (CURRENT_DIR, PARENT_DIR):
        return False
    return DELIMITER not in name


def validate_name(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"Name must be str, not {type(name).__name__}")
    if not name:
        raise MNSInvalidNameError("Name must not be empty.", name)
    if not is_valid_name(name):
        raise MNSInvalidNameError(
            f"Invalid name {name!r}: must not be '.', '..' or contain "
            f"'{DELIMITER}'.",
            name,
        )
    return name


def split_path(path: str) -> tuple[bool, list[str]]:
    """Return ``(is_absolute, components)`` with empty components dropped."""
    parts = [p for p in path.split(DELIMITER) if p]
    return path.startswith(DELIMITER), parts


def split_destination(dest: str) -> tuple[str | None, str]:
    """Split a move destination into ``(directory_part, new_name)``.

    ``directory_part`` is ``None`` when *dest* has no delimiter (same-directory
    rename) and ``"/"`` when the destination sits directly under root.
    """
    idx = dest.rfind(DELIMITER)
    if idx < 0:
        return None, dest
    dir_part = dest[:idx]
    if not dir_part:
        dir_part = DELIMITER
    return dir_part, dest[idx + 1:]
