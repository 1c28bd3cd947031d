"""
FileScanner implementation for recursive directory scanning.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from codeinv.core.path_utils import split_extension, to_posix_path

from .ignore_rules import IgnoreRuleSet
from .interfaces import FileScannerInterface
from .language_registry import LanguageRegistry, get_default_registry
from .models import FileRecord

logger = logging.getLogger(__name__)


def _is_representable(*texts: str) -> bool:
    """Check that names decoded from the filesystem are valid text."""
    try:
        for text in texts:
            text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class FileScanner(FileScannerInterface):
    """
    Concrete implementation of FileScannerInterface.

    Provides recursive directory scanning with:
    - Built-in directory, file name, extension and minified-asset rules
    - Custom patterns and the root .gitignore
    - Language detection via LanguageRegistry
    - Symlinks never followed
    - Graceful handling of unreadable entries
    """

    def __init__(
        self,
        custom_ignore: Iterable[str] | None = None,
        use_gitignore: bool = True,
        language_registry: LanguageRegistry | None = None,
    ):
        """
        Initialize the FileScanner.

        Args:
            custom_ignore: Bare names or glob patterns to exclude.
            use_gitignore: Whether to honor the .gitignore at the scan root.
            language_registry: Custom LanguageRegistry for language detection.
                              If None, uses the global default registry.
        """
        self._custom_ignore: list[str] = list(custom_ignore or [])
        self._use_gitignore = use_gitignore
        self._language_registry = language_registry or get_default_registry()

    def set_ignore_patterns(self, patterns: list[str]) -> None:
        """Set the custom ignore patterns."""
        self._custom_ignore = list(patterns)

    def set_use_gitignore(self, use_gitignore: bool) -> None:
        """Enable or disable reading the root .gitignore."""
        self._use_gitignore = use_gitignore

    def scan(self, root_path: Path | str) -> list[FileRecord]:
        """
        Recursively scan a directory.

        Args:
            root_path: Root directory to scan

        Returns:
            FileRecord objects sorted ascending by relative path
        """
        records = list(self.iter_files(root_path))
        records.sort(key=lambda record: record.relative_path)
        return records

    def iter_files(self, root_path: Path | str) -> Iterator[FileRecord]:
        """
        Yield file records in traversal order (unsorted).

        Args:
            root_path: Root directory to scan
        """
        root = os.path.abspath(os.fspath(root_path))

        if not os.path.exists(root):
            logger.warning(f"Root path does not exist: {root}")
            return

        if not os.path.isdir(root):
            logger.warning(f"Root path is not a directory: {root}")
            return

        rules = IgnoreRuleSet.for_root(root, self._custom_ignore, self._use_gitignore)
        logger.debug(
            f"Scanning {root} with {len(rules.custom_patterns)} custom and "
            f"{len(rules.gitignore_patterns)} .gitignore patterns"
        )
        yield from self._scan_directory(root, root, rules)

    def _scan_directory(
        self, root: str, current_path: str, rules: IgnoreRuleSet
    ) -> Iterator[FileRecord]:
        """
        Recursively scan one directory.

        Args:
            root: Absolute scan root
            current_path: Directory being scanned
            rules: Ignore rules for this scan

        Yields:
            FileRecord objects for files that survive the ignore rules
        """
        try:
            with os.scandir(current_path) as iterator:
                entries = list(iterator)
        except PermissionError as e:
            logger.warning(f"Permission denied accessing directory: {current_path} - {e}")
            return
        except OSError as e:
            logger.warning(f"Error accessing directory: {current_path} - {e}")
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as e:
                logger.debug(f"Skipping unreadable entry: {entry.path} - {e}")
                continue

            if is_dir:
                if rules.prunes_directory(entry.name):
                    logger.debug(f"Ignoring directory: {entry.path}")
                    continue
                yield from self._scan_directory(root, entry.path, rules)
            elif is_file:
                record = self._scan_file(root, entry, rules)
                if record is not None:
                    yield record

    def _scan_file(
        self, root: str, entry: os.DirEntry, rules: IgnoreRuleSet
    ) -> FileRecord | None:
        """
        Build the FileRecord for a single file.

        Returns:
            FileRecord, or None if the file is ignored or unrepresentable
        """
        try:
            relative = os.path.relpath(entry.path, root)
        except ValueError as e:
            logger.debug(f"Cannot compute relative path for {entry.path}: {e}")
            return None

        name = entry.name
        if not _is_representable(name, relative):
            logger.debug(f"Skipping file with undecodable name: {entry.path!r}")
            return None

        relative_path = to_posix_path(relative)
        if rules.is_ignored(relative_path, name):
            logger.debug(f"Ignoring: {relative_path}")
            return None

        extension = split_extension(name)

        try:
            size_bytes = entry.stat(follow_symlinks=False).st_size
        except OSError as e:
            logger.debug(f"Cannot read size of {entry.path}: {e}")
            size_bytes = 0

        return FileRecord(
            absolute_path=to_posix_path(entry.path),
            relative_path=relative_path,
            name=name,
            extension=f".{extension}" if extension else "",
            size_bytes=size_bytes,
            language=self._language_registry.detect(extension),
        )


def scan_files(
    root_path: Path | str,
    custom_ignore: Iterable[str] = (),
    use_gitignore: bool = True,
    language_registry: LanguageRegistry | None = None,
) -> list[FileRecord]:
    """
    Scan a directory tree and return its sorted file records.

    Args:
        root_path: Root directory to scan
        custom_ignore: Bare names or glob patterns to exclude
        use_gitignore: Whether to honor the .gitignore at the root
        language_registry: Optional LanguageRegistry override

    Returns:
        FileRecord objects sorted ascending by relative path; empty if the
        root does not exist or is not a directory
    """
    scanner = FileScanner(
        custom_ignore=custom_ignore,
        use_gitignore=use_gitignore,
        language_registry=language_registry,
    )
    return scanner.scan(root_path)
