"""
FileScanner module for codeinv.

Provides recursive directory scanning with built-in and custom ignore rules,
language classification, and per-extension aggregation.
"""

from .aggregator import detect_types, summarize_types
from .ignore_rules import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_EXTENSIONS,
    DEFAULT_IGNORE_FILES,
    MINIFIED_SUFFIXES,
    IgnorePattern,
    IgnoreRuleSet,
    is_ignored,
    parse_gitignore,
)
from .interfaces import FileScannerInterface
from .language_registry import (
    UNKNOWN_LANGUAGE,
    LanguageRegistry,
    classify,
    get_default_registry,
)
from .models import FileRecord, TypeSummary
from .scanner import FileScanner, scan_files

__all__ = [
    # Main classes
    "FileScanner",
    "FileScannerInterface",
    "FileRecord",
    "TypeSummary",
    "scan_files",
    # Aggregation
    "detect_types",
    "summarize_types",
    # Ignore rules
    "IgnorePattern",
    "IgnoreRuleSet",
    "is_ignored",
    "parse_gitignore",
    # Language registry
    "LanguageRegistry",
    "classify",
    "get_default_registry",
    # Constants
    "DEFAULT_IGNORE_DIRS",
    "DEFAULT_IGNORE_EXTENSIONS",
    "DEFAULT_IGNORE_FILES",
    "MINIFIED_SUFFIXES",
    "UNKNOWN_LANGUAGE",
]
