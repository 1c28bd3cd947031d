"""
File type aggregation across one or more scan roots.
"""

import logging
from pathlib import Path
from typing import Iterable

from .language_registry import LanguageRegistry
from .models import FileRecord, TypeSummary
from .scanner import FileScanner

logger = logging.getLogger(__name__)


def summarize_types(records: Iterable[FileRecord]) -> list[TypeSummary]:
    """
    Reduce file records into per-extension buckets.

    Files without an extension are skipped. A bucket's language is taken from
    the first record seen with that extension.

    Returns:
        TypeSummary objects sorted by file count, descending (stable)
    """
    buckets: dict[str, TypeSummary] = {}

    for record in records:
        if not record.extension:
            continue
        bucket = buckets.get(record.extension)
        if bucket is None:
            bucket = TypeSummary(extension=record.extension, language=record.language)
            buckets[record.extension] = bucket
        bucket.file_count += 1
        bucket.total_size_bytes += record.size_bytes

    return sorted(buckets.values(), key=lambda summary: summary.file_count, reverse=True)


def detect_types(
    root_paths: Iterable[Path | str],
    custom_ignore: Iterable[str] = (),
    use_gitignore: bool = True,
    language_registry: LanguageRegistry | None = None,
) -> list[TypeSummary]:
    """
    Scan every root and aggregate file types.

    Roots are scanned independently; a file reachable from two roots is
    counted twice.

    Args:
        root_paths: Directories to scan
        custom_ignore: Bare names or glob patterns to exclude
        use_gitignore: Whether to honor each root's .gitignore
        language_registry: Optional LanguageRegistry override

    Returns:
        TypeSummary objects sorted by file count, descending
    """
    scanner = FileScanner(
        custom_ignore=custom_ignore,
        use_gitignore=use_gitignore,
        language_registry=language_registry,
    )

    def _all_records() -> Iterable[FileRecord]:
        for root in root_paths:
            records = scanner.scan(root)
            logger.debug(f"Aggregating {len(records)} files from {root}")
            yield from records

    return summarize_types(_all_records())
