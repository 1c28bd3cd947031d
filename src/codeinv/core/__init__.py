"""
Core Layer - File scanning, ignore rules, content loading and export helpers.
"""

from codeinv.core.code_cleaner import (
    CleanOptions,
    CodeStats,
    ProcessedFile,
    clean_code,
    code_stats,
    process_file_content,
    remove_comments,
)
from codeinv.core.config import (
    CodeinvConfig,
    ExportConfig,
    LoggingConfig,
    ReadingConfig,
    ScanningConfig,
    load_config,
)
from codeinv.core.content_loader import (
    DECODE_LADDER,
    DecodedContent,
    count_lines,
    decode_bytes,
    load_file_content,
)
from codeinv.core.file_scanner import (
    FileRecord,
    FileScanner,
    FileScannerInterface,
    IgnoreRuleSet,
    LanguageRegistry,
    TypeSummary,
    classify,
    detect_types,
    get_default_registry,
    is_ignored,
    scan_files,
)
from codeinv.core.file_sorter import smart_sort_files
from codeinv.core.ratio_allocator import (
    AllocationResult,
    DirectoryAllocation,
    DirectorySlice,
    FileLines,
    allocate_code_by_ratio,
)

__all__ = [
    # Config
    "CodeinvConfig",
    "ScanningConfig",
    "ReadingConfig",
    "ExportConfig",
    "LoggingConfig",
    "load_config",
    # FileScanner
    "FileRecord",
    "TypeSummary",
    "FileScannerInterface",
    "FileScanner",
    "IgnoreRuleSet",
    "LanguageRegistry",
    "classify",
    "detect_types",
    "get_default_registry",
    "is_ignored",
    "scan_files",
    # Content loading
    "DECODE_LADDER",
    "DecodedContent",
    "count_lines",
    "decode_bytes",
    "load_file_content",
    # Export helpers
    "smart_sort_files",
    "CleanOptions",
    "CodeStats",
    "ProcessedFile",
    "clean_code",
    "code_stats",
    "process_file_content",
    "remove_comments",
    "AllocationResult",
    "DirectoryAllocation",
    "DirectorySlice",
    "FileLines",
    "allocate_code_by_ratio",
]
