"""
Abstract interfaces for file scanning operations.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import FileRecord


class FileScannerInterface(ABC):
    """
    Abstract interface for file scanning operations.

    Implementations should provide recursive directory scanning with
    built-in, custom and .gitignore ignore rules.
    """

    @abstractmethod
    def scan(self, root_path: Path | str) -> list[FileRecord]:
        """
        Recursively scan a directory and return its file records.

        Args:
            root_path: Root directory to scan

        Returns:
            FileRecord objects sorted by relative path

        Notes:
            - Returns an empty list if the root is missing or not a directory
            - Skips files matching ignore rules
            - Logs errors and continues on unreadable entries
        """
        pass

    @abstractmethod
    def set_ignore_patterns(self, patterns: list[str]) -> None:
        """
        Set the custom ignore patterns.

        Args:
            patterns: List of bare names or glob patterns
        """
        pass

    @abstractmethod
    def set_use_gitignore(self, use_gitignore: bool) -> None:
        """Enable or disable reading the root .gitignore."""
        pass
