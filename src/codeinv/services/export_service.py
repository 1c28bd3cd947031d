"""
Export service: builds an in-memory code listing from selected directories.

Pipeline per directory: scan, smart sort, batch read, clean. The cleaned
files of all directories are then handed to the ratio allocator.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from codeinv.core.code_cleaner import CleanOptions, process_file_content
from codeinv.core.config import ExportConfig
from codeinv.core.file_sorter import smart_sort_files
from codeinv.core.ratio_allocator import (
    AllocationResult,
    DirectorySlice,
    FileLines,
    allocate_code_by_ratio,
)
from codeinv.services.inventory_service import FileContent, InventoryService, ReadRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectorySelection:
    """A directory chosen for export and its share of the page budget."""

    path: str
    ratio: float = 1.0

    @classmethod
    def parse(cls, value: str) -> "DirectorySelection":
        """
        Parse "PATH" or "PATH:RATIO".

        A suffix after the last colon is taken as the ratio only if it parses
        as a number, so Windows drive letters survive.

        Raises:
            ValueError: If the ratio is negative
        """
        path, sep, tail = value.rpartition(":")
        if sep and path:
            try:
                ratio = float(tail)
            except ValueError:
                return cls(path=value)
            if ratio < 0:
                raise ValueError(f"Ratio must not be negative: {value}")
            return cls(path=path, ratio=ratio)
        return cls(path=value)


@dataclass
class ExportPreview:
    """
    Result of preparing an export.

    Attributes:
        allocation: Allocated listing and per-directory breakdown
        file_count: Files read successfully across all directories
        failed_files: Files whose content could not be loaded
        scan_errors: Error strings of directories that failed to scan
    """

    allocation: AllocationResult
    file_count: int = 0
    failed_files: list[FileContent] = field(default_factory=list)
    scan_errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "lines": self.allocation.lines,
            "total_pages": self.allocation.total_pages,
            "is_truncated": self.allocation.is_truncated,
            "allocations": [
                {
                    "path": a.path,
                    "ratio": a.ratio,
                    "allocated_pages": a.allocated_pages,
                    "allocated_lines": a.allocated_lines,
                    "allocated_files": a.allocated_files,
                    "total_files": a.total_files,
                    "total_lines": a.total_lines,
                }
                for a in self.allocation.allocations
            ],
            "file_count": self.file_count,
            "failed_files": [f.to_dict() for f in self.failed_files],
            "scan_errors": self.scan_errors,
        }


def clean_options_from_config(config: ExportConfig) -> CleanOptions:
    """Build cleaning switches from the export configuration."""
    return CleanOptions(
        remove_comments=config.remove_comments,
        remove_empty_lines=config.remove_empty_lines,
        remove_trailing_whitespace=config.remove_trailing_whitespace,
        remove_imports=config.remove_imports,
        remove_copyright_headers=config.remove_copyright_headers,
    )


class ExportService:
    """Prepares ratio-allocated listings of one or more directories."""

    def __init__(
        self,
        inventory_service: InventoryService,
        export_config: Optional[ExportConfig] = None,
        custom_ignore: Iterable[str] = (),
        use_gitignore: bool = True,
    ):
        """
        Initialize the ExportService.

        Args:
            inventory_service: Service used to scan and read directories
            export_config: Page budget and cleaning switches
            custom_ignore: Extra ignore patterns applied to every directory
            use_gitignore: Whether each directory's .gitignore is honoured
        """
        self._inventory = inventory_service
        self._config = export_config or ExportConfig()
        self._custom_ignore = list(custom_ignore)
        self._use_gitignore = use_gitignore

    def _collect(
        self, selection: DirectorySelection, options: CleanOptions, preview: ExportPreview
    ) -> DirectorySlice:
        scan = self._inventory.scan_directory(
            selection.path, self._custom_ignore, self._use_gitignore
        )
        if not scan.success:
            preview.scan_errors.append(f"{selection.path}: {scan.error}")
            return DirectorySlice(path=selection.path, ratio=selection.ratio)

        ordered = smart_sort_files(scan.files)
        read = self._inventory.read_files_content(ReadRequest.from_record(r) for r in ordered)
        if not read.success:
            preview.scan_errors.append(f"{selection.path}: {read.error}")
            return DirectorySlice(path=selection.path, ratio=selection.ratio)

        files: list[FileLines] = []
        for item in read.files:
            if item.error:
                preview.failed_files.append(item)
                continue
            preview.file_count += 1
            processed = process_file_content(item.content, item.ext, options)
            if processed.line_count:
                files.append(FileLines(name=item.relative_path, lines=processed.lines))

        logger.debug(f"Collected {len(files)} non-empty files from {selection.path}")
        return DirectorySlice(path=selection.path, ratio=selection.ratio, files=files)

    def prepare(
        self,
        selections: Sequence[DirectorySelection],
        lines_per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        clean_options: Optional[CleanOptions] = None,
    ) -> ExportPreview:
        """
        Build the export listing for the selected directories.

        Args:
            selections: Directories and their ratios, in output order
            lines_per_page: Overrides the configured page size
            max_pages: Overrides the configured page budget
            clean_options: Overrides the configured cleaning switches

        Returns:
            ExportPreview with the allocation and any per-file failures

        Raises:
            ValueError: If the page size is not positive
        """
        lines_per_page = lines_per_page if lines_per_page is not None else self._config.lines_per_page
        max_pages = max_pages if max_pages is not None else self._config.max_pages
        options = clean_options or clean_options_from_config(self._config)

        preview = ExportPreview(allocation=AllocationResult())
        slices = [self._collect(s, options, preview) for s in selections]
        preview.allocation = allocate_code_by_ratio(slices, lines_per_page, max_pages)

        logger.info(
            f"Prepared export of {len(selections)} directories: "
            f"{len(preview.allocation.lines)} lines, {preview.allocation.total_pages} pages"
        )
        if preview.allocation.is_truncated:
            logger.info("Export truncated to fit the page budget")
        return preview


def parse_selections(values: Iterable[str]) -> list[DirectorySelection]:
    """Parse several "PATH[:RATIO]" arguments."""
    return [DirectorySelection.parse(v) for v in values]
