"""
Smart ordering of selected files for export.

Entry points are placed first, then configuration, routing, pages,
components, services and utilities, with stylesheets, data files and tests
at the end. Files with equal weight keep lexicographic relative-path order.
"""

import re
from typing import Any, Iterable, Mapping, TypeVar

from codeinv.core.path_utils import directory_depth, to_posix_path

T = TypeVar("T")

# Exact entry-point file names; earlier names sort first
ENTRY_EXACT_NAMES: tuple[str, ...] = (
    "main.rs", "main.go", "main.py", "main.c", "main.cpp", "main.java",
    "Main.java", "Main.kt", "App.java", "Application.java",
    "main.js", "main.ts", "main.jsx", "main.tsx",
    "index.js", "index.ts", "index.jsx", "index.tsx",
    "index.html", "index.htm",
    "App.vue", "App.jsx", "App.tsx", "App.js", "App.ts",
    "app.py", "app.js", "app.ts",
    "manage.py", "wsgi.py", "asgi.py",
    "server.js", "server.ts", "server.go",
    "Program.cs", "Startup.cs",
    "lib.rs", "mod.rs",
)

# Entry-point stems, matched case-insensitively without the extension
ENTRY_POINT_NAMES: frozenset[str] = frozenset([
    "main", "index", "app", "application", "program",
    "server", "bootstrap", "startup", "init", "entry",
])

# Non-source data and configuration files
DATA_FILE_EXTS: frozenset[str] = frozenset([
    ".json", ".yaml", ".yml", ".toml", ".ini", ".cfg", ".conf",
    ".xml", ".svg", ".csv", ".md", ".txt", ".log",
    ".lock", ".env",
])

TEST_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"\.test\.(js|ts|jsx|tsx|py)$",
        r"\.spec\.(js|ts|jsx|tsx)$",
        r"test_.*\.py$",
        r".*_test\.py$",
        r".*_test\.go$",
        r".*Test\.java$",
        r"^tests?/",
        r"^__tests__/",
        r"^spec/",
    )
)

_TOOL_CONFIG_RE = re.compile(
    r"^(vite|webpack|rollup|tsconfig|babel|next|nuxt|tailwind|postcss|jest|vitest)\.config",
    re.IGNORECASE,
)
_CONFIG_SCRIPT_RE = re.compile(r"config\.(js|ts)$", re.IGNORECASE)
_SETTINGS_RE = re.compile(r"settings\.(py|js|ts)$", re.IGNORECASE)
_ROUTER_RE = re.compile(r"router|routes|routing", re.IGNORECASE)
_PAGE_RE = re.compile(r"layout|page|view", re.IGNORECASE)
_COMPONENT_RE = re.compile(r"component|widget|module", re.IGNORECASE)
_SERVICE_RE = re.compile(r"service|api|repository|dao|mapper", re.IGNORECASE)
_UTILITY_RE = re.compile(r"util|helper|lib|common|shared|constant|enum|type", re.IGNORECASE)
_STYLE_RE = re.compile(r"\.(css|scss|sass|less|styl)$", re.IGNORECASE)
_LAST_SUFFIX_RE = re.compile(r"\.[^.]+$")


def file_sort_weight(relative_path: str, file_name: str, ext: str) -> float:
    """
    Compute the ordering weight of a file; lower sorts first.

    Args:
        relative_path: Path relative to its scan root
        file_name: Final path segment
        ext: Extension with the leading dot, or ''

    Returns:
        Sort weight
    """
    relative_path = to_posix_path(relative_path)
    depth = directory_depth(relative_path)

    if ext in DATA_FILE_EXTS:
        return 850 + depth * 5

    if file_name in ENTRY_EXACT_NAMES:
        return ENTRY_EXACT_NAMES.index(file_name) * 0.01 + depth * 0.001

    if _LAST_SUFFIX_RE.sub("", file_name).lower() in ENTRY_POINT_NAMES:
        return 100 + depth * 10

    if (
        _TOOL_CONFIG_RE.search(file_name)
        or _CONFIG_SCRIPT_RE.search(file_name)
        or _SETTINGS_RE.search(file_name)
    ):
        return 200

    if _ROUTER_RE.search(file_name):
        return 300

    if _PAGE_RE.search(relative_path):
        return 400 + depth * 5

    if _COMPONENT_RE.search(relative_path):
        return 500 + depth * 5

    if _SERVICE_RE.search(relative_path):
        return 600 + depth * 5

    if _UTILITY_RE.search(relative_path):
        return 700 + depth * 5

    if _STYLE_RE.search(file_name):
        return 800

    if any(p.search(file_name) or p.search(relative_path) for p in TEST_PATTERNS):
        return 900 + depth * 5

    return 500 + depth * 5


def _field(item: Any, *names: str) -> str:
    """Read the first present attribute or mapping key of an item."""
    for name in names:
        if isinstance(item, Mapping):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    raise KeyError(f"{item!r} has none of the fields {names}")


def smart_sort_files(files: Iterable[T]) -> list[T]:
    """
    Order files so the listing starts at the program entry and ends with tests.

    Accepts FileRecord objects or any object or mapping exposing
    relative_path, name and ext/extension.

    Returns:
        New list sorted by weight, then by relative path
    """
    def sort_key(item: T) -> tuple[float, str]:
        relative_path = to_posix_path(_field(item, "relative_path"))
        weight = file_sort_weight(
            relative_path, _field(item, "name"), _field(item, "extension", "ext")
        )
        return weight, relative_path

    return sorted(files, key=sort_key)
