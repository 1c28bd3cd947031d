"""
Inventory service: the boundary operations consumed by a host application.

Each operation returns a result envelope with a success flag and an optional
error string. Per-item failures are reported inline and never abort a call.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

from codeinv.core.content_loader import load_file_content
from codeinv.core.file_scanner import (
    FileRecord,
    FileScanner,
    LanguageRegistry,
    TypeSummary,
    detect_types,
    get_default_registry,
)

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Envelope for scan_directory."""

    success: bool
    files: list[FileRecord] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "files": [f.to_dict() for f in self.files],
            "error": self.error,
        }


@dataclass
class DetectResult:
    """Envelope for detect_file_types."""

    success: bool
    types: list[TypeSummary] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "types": [t.to_dict() for t in self.types],
            "error": self.error,
        }


@dataclass(frozen=True)
class ReadRequest:
    """Identity of one file to load; echoed back in its FileContent."""

    path: str
    relative_path: str
    name: str
    ext: str

    @classmethod
    def from_record(cls, record: FileRecord) -> "ReadRequest":
        return cls(
            path=record.absolute_path,
            relative_path=record.relative_path,
            name=record.name,
            ext=record.extension,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "ReadRequest":
        return cls(
            path=str(data["path"]),
            relative_path=data.get("relative_path", ""),
            name=data.get("name", ""),
            ext=data.get("ext", ""),
        )


@dataclass
class FileContent:
    """
    Loaded content of one requested file.

    On failure content is empty, line_count is 0 and error is set.
    """

    path: str
    relative_path: str
    name: str
    ext: str
    content: str = ""
    line_count: int = 0
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "relative_path": self.relative_path,
            "name": self.name,
            "ext": self.ext,
            "content": self.content,
            "line_count": self.line_count,
            "error": self.error,
        }


@dataclass
class ReadResult:
    """Envelope for read_files_content; files are in request order."""

    success: bool
    files: list[FileContent] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "files": [f.to_dict() for f in self.files],
            "error": self.error,
        }


def _read_one(request: ReadRequest | Mapping[str, str]) -> FileContent:
    if not isinstance(request, ReadRequest):
        try:
            request = ReadRequest.from_dict(request)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Invalid read request {request!r}: {e!r}")
            return FileContent(
                path="", relative_path="", name="", ext="",
                error=f"Invalid read request: {e!r}",
            )

    decoded = load_file_content(request.path)
    return FileContent(
        path=request.path,
        relative_path=request.relative_path,
        name=request.name,
        ext=request.ext,
        content=decoded.content,
        line_count=decoded.line_count,
        error=decoded.error,
    )


class InventoryService:
    """
    Scan, detect-types and batch-read operations with result envelopes.

    The service holds no state between calls other than its configuration.
    """

    def __init__(
        self,
        language_registry: LanguageRegistry | None = None,
        max_workers: int = 1,
    ):
        """
        Initialize the InventoryService.

        Args:
            language_registry: LanguageRegistry used to classify files.
                              If None, uses the global default registry.
            max_workers: Threads used by read_files_content; 1 reads
                         sequentially.
        """
        self._language_registry = language_registry or get_default_registry()
        self._max_workers = max(1, max_workers)

    def _scanner(self, custom_ignore: Iterable[str], use_gitignore: bool) -> FileScanner:
        return FileScanner(
            custom_ignore=custom_ignore,
            use_gitignore=use_gitignore,
            language_registry=self._language_registry,
        )

    def scan_directory(
        self,
        dir_path: Path | str,
        custom_ignore: Iterable[str] = (),
        use_gitignore: bool = True,
    ) -> ScanResult:
        """
        Scan one root.

        Returns:
            ScanResult with the sorted file records
        """
        try:
            files = self._scanner(custom_ignore, use_gitignore).scan(dir_path)
        except Exception as e:
            logger.exception(f"Scan of {dir_path} failed")
            return ScanResult(success=False, error=str(e))

        logger.info(f"Scanned {dir_path}: {len(files)} files")
        return ScanResult(success=True, files=files)

    def detect_file_types(
        self,
        dir_paths: Iterable[Path | str],
        custom_ignore: Iterable[str] = (),
        use_gitignore: bool = True,
    ) -> DetectResult:
        """
        Aggregate file types over several roots.

        Returns:
            DetectResult with TypeSummary buckets sorted by count
        """
        try:
            types = detect_types(
                dir_paths,
                custom_ignore=custom_ignore,
                use_gitignore=use_gitignore,
                language_registry=self._language_registry,
            )
        except Exception as e:
            logger.exception("File type detection failed")
            return DetectResult(success=False, error=str(e))

        return DetectResult(success=True, types=types)

    def read_files_content(
        self, requests: Iterable[ReadRequest | Mapping[str, str]]
    ) -> ReadResult:
        """
        Load the content of each requested file.

        Items fail independently; the output order matches the request order.

        Returns:
            ReadResult with one FileContent per request
        """
        try:
            requests = list(requests)
            if self._max_workers > 1 and len(requests) > 1:
                with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                    files = list(executor.map(_read_one, requests))
            else:
                files = [_read_one(r) for r in requests]
        except Exception as e:
            logger.exception("Batch read failed")
            return ReadResult(success=False, error=str(e))

        failed = sum(1 for f in files if f.error)
        if failed:
            logger.warning(f"{failed} of {len(files)} files could not be read")
        return ReadResult(success=True, files=files)


_default_service = InventoryService()


def scan_directory(
    dir_path: Path | str,
    custom_ignore: Iterable[str] = (),
    use_gitignore: bool = True,
) -> ScanResult:
    """Scan one root with the default service."""
    return _default_service.scan_directory(dir_path, custom_ignore, use_gitignore)


def detect_file_types(
    dir_paths: Iterable[Path | str],
    custom_ignore: Iterable[str] = (),
    use_gitignore: bool = True,
) -> DetectResult:
    """Aggregate file types with the default service."""
    return _default_service.detect_file_types(dir_paths, custom_ignore, use_gitignore)


def read_files_content(requests: Iterable[ReadRequest | Mapping[str, str]]) -> ReadResult:
    """Batch-read files with the default service."""
    return _default_service.read_files_content(requests)
