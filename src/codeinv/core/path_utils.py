"""
Path helpers shared by the scanner, the services and the CLI.

All path strings leaving the scanner use forward slashes regardless of the
host separator convention.
"""

import os
from pathlib import PurePath


def to_posix_path(path: str | os.PathLike) -> str:
    """
    Normalize a path to a forward-slash string.

    Args:
        path: Path string or path-like object.

    Returns:
        The path with every backslash and host separator replaced by '/'.
    """
    path_str = os.fspath(path)
    if os.sep != "/":
        path_str = path_str.replace(os.sep, "/")
    return path_str.replace("\\", "/")


def path_segments(relative_path: str) -> list[str]:
    """Split a normalized relative path into its non-empty segments."""
    return [part for part in relative_path.split("/") if part]


def directory_depth(relative_path: str) -> int:
    """Number of directory segments above the file in a relative path."""
    return max(len(path_segments(to_posix_path(relative_path))) - 1, 0)


def split_extension(file_name: str) -> str:
    """
    Return the lowercase extension of a file name without the leading dot.

    Follows the usual suffix rules: dotfiles such as '.gitignore' and names
    without a dot have no extension.
    """
    suffix = PurePath(file_name).suffix
    return suffix[1:].lower() if suffix else ""
