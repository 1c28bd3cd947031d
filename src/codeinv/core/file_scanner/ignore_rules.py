"""
Ignore rule evaluation for the file scanner.

A file is excluded when any rule of an ordered pipeline matches:

1. A directory segment of its relative path is a built-in ignored directory
2. Its name is a built-in ignored file name
3. Its lowercase extension is a built-in ignored extension
4. Its lowercase name ends with a minified-asset suffix
5. A custom or root .gitignore pattern matches it, either as a bare name
   or as a glob

Rules 1-4 cannot be disabled. Only the .gitignore at the scan root is read;
negation (!) and nested .gitignore files are not supported.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable

from codeinv.core.path_utils import path_segments, split_extension, to_posix_path

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset([
    # Dependency managers
    "node_modules",
    "bower_components",
    "vendor",
    # Build output
    "dist",
    "build",
    "out",
    "output",
    "target",
    "bin",
    "obj",
    ".next",
    ".nuxt",
    ".output",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # IDE metadata
    ".idea",
    ".vscode",
    ".vs",
    # Caches and tooling
    "__pycache__",
    ".pytest_cache",
    "coverage",
    ".nyc_output",
    ".gradle",
    ".mvn",
    ".cache",
    ".tmp",
])

DEFAULT_IGNORE_FILES: frozenset[str] = frozenset([
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
])

# Lowercase, without the leading dot
DEFAULT_IGNORE_EXTENSIONS: frozenset[str] = frozenset([
    # Source maps and lockfiles
    "map", "lock",
    # Native binaries and objects
    "exe", "dll", "so", "dylib", "o", "a",
    # Images
    "png", "jpg", "jpeg", "gif", "svg", "ico", "bmp", "webp",
    # Audio and video
    "mp3", "mp4", "avi", "mov", "wav", "flac",
    # Archives
    "zip", "tar", "gz", "rar", "7z", "bz2",
    # Office documents
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx",
    # Fonts
    "woff", "woff2", "ttf", "eot", "otf",
    # Databases
    "sqlite", "db", "mdb",
    # Compiled bytecode
    "pyc", "pyo", "class",
])

MINIFIED_SUFFIXES: tuple[str, ...] = (".min.js", ".min.css")

def _escape_class(body: str) -> str:
    """Escape the characters that are special inside a regex character class."""
    return (
        body.replace("\\", "\\\\")
        .replace("[", "\\[")
        .replace("]", "\\]")
        .replace("^", "\\^")
    )


def _translate_glob(pattern: str) -> str | None:
    """
    Translate a glob into a regular expression body.

    '*' and '?' match any character including '/', '**' must form a whole
    path component, and '[...]' / '[!...]' are character classes.

    Returns:
        Regex string, or None if the glob is malformed
    """
    out: list[str] = []
    i, n = 0, len(pattern)

    while i < n:
        char = pattern[i]

        if char == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            run = j - i
            if run > 2:
                return None
            if run == 2:
                if (i > 0 and pattern[i - 1] != "/") or (j < n and pattern[j] != "/"):
                    return None
                if j < n:
                    # '**/' also matches zero directories
                    out.append("(?:.*/)?")
                    i = j + 1
                    continue
            out.append(".*")
            i = j
            continue

        if char == "?":
            out.append(".")
            i += 1
            continue

        if char == "[":
            j = i + 1
            negate = j < n and pattern[j] == "!"
            if negate:
                j += 1
            start = j
            # A ']' right after the opening bracket is a literal member
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                return None
            out.append("[" + ("^" if negate else "") + _escape_class(pattern[start:j]) + "]")
            i = j + 1
            continue

        out.append(re.escape(char))
        i += 1

    return "".join(out)


def compile_glob(pattern: str) -> re.Pattern | None:
    """
    Compile a glob pattern for whole-string, case-sensitive matching.

    Args:
        pattern: Glob pattern

    Returns:
        Compiled regex, or None if the pattern is malformed
    """
    body = _translate_glob(pattern)
    if body is None:
        return None
    try:
        return re.compile(body, re.DOTALL)
    except re.error:
        return None


@dataclass(frozen=True)
class IgnorePattern:
    """
    A parsed custom or .gitignore pattern.

    Attributes:
        raw: Pattern as supplied
        pattern: Pattern with trailing slashes removed
        bare: True if the pattern has no '*' and no '/' (exact-name match)
        glob: Compiled glob, or None if the pattern is malformed as a glob
    """

    raw: str
    pattern: str
    bare: bool
    glob: re.Pattern | None

    @classmethod
    def parse(cls, raw: str) -> "IgnorePattern | None":
        """
        Parse a raw pattern string.

        Returns:
            IgnorePattern, or None if nothing remains after stripping
            trailing slashes
        """
        pattern = raw.rstrip("/")
        if not pattern:
            return None

        bare = "*" not in pattern and "/" not in pattern
        glob = compile_glob(pattern)
        if glob is None:
            logger.debug(f"Skipping malformed glob pattern: '{raw}'")

        return cls(raw=raw, pattern=pattern, bare=bare, glob=glob)

    def matches(self, relative_path: str, file_name: str, segments: list[str]) -> bool:
        """Check the pattern against one file."""
        if self.bare and (self.pattern in segments or file_name == self.pattern):
            return True
        if self.glob is not None:
            return bool(
                self.glob.fullmatch(relative_path) or self.glob.fullmatch(file_name)
            )
        return False


def parse_gitignore(root_path: Path | str) -> list[str]:
    """
    Read patterns from the .gitignore at a scan root.

    Lines are trimmed; empty lines and '#' comments are dropped.

    Args:
        root_path: Scan root directory

    Returns:
        List of pattern strings (empty if the file is missing or unreadable)
    """
    gitignore_path = Path(root_path) / ".gitignore"
    if not gitignore_path.is_file():
        logger.debug(f"Gitignore file not found: {gitignore_path}")
        return []

    try:
        content = gitignore_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        logger.warning(f"Invalid UTF-8 encoding in {gitignore_path}: {e}")
        return []
    except PermissionError as e:
        logger.warning(f"Permission denied reading {gitignore_path}: {e}")
        return []
    except OSError as e:
        logger.warning(f"Error reading {gitignore_path}: {e}")
        return []

    patterns = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)

    logger.debug(f"Loaded {len(patterns)} patterns from {gitignore_path}")
    return patterns


def _compile_patterns(raw_patterns: Iterable[str]) -> tuple[IgnorePattern, ...]:
    compiled = []
    for raw in raw_patterns:
        parsed = IgnorePattern.parse(raw)
        if parsed is not None:
            compiled.append(parsed)
    return tuple(compiled)


@dataclass(frozen=True)
class IgnoreRuleSet:
    """
    Inputs governing exclusion for one scan.

    Attributes:
        custom_patterns: Caller-supplied patterns
        gitignore_patterns: Patterns read from the root .gitignore
        ignore_dirs: Built-in ignored directory names
        ignore_files: Built-in ignored file names
        ignore_extensions: Built-in ignored extensions (lowercase, no dot)
        minified_suffixes: Lowercase name suffixes of minified assets
    """

    custom_patterns: tuple[str, ...] = ()
    gitignore_patterns: tuple[str, ...] = ()
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    ignore_files: frozenset[str] = DEFAULT_IGNORE_FILES
    ignore_extensions: frozenset[str] = DEFAULT_IGNORE_EXTENSIONS
    minified_suffixes: tuple[str, ...] = MINIFIED_SUFFIXES
    _patterns: tuple[IgnorePattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "custom_patterns", tuple(self.custom_patterns))
        object.__setattr__(self, "gitignore_patterns", tuple(self.gitignore_patterns))
        object.__setattr__(
            self, "_patterns", _compile_patterns(self.custom_patterns + self.gitignore_patterns)
        )

    @classmethod
    def for_root(
        cls,
        root_path: Path | str,
        custom_patterns: Iterable[str] = (),
        use_gitignore: bool = True,
    ) -> "IgnoreRuleSet":
        """Build the rule set for a scan of root_path."""
        gitignore_patterns = parse_gitignore(root_path) if use_gitignore else []
        return cls(
            custom_patterns=tuple(custom_patterns),
            gitignore_patterns=tuple(gitignore_patterns),
        )

    @property
    def patterns(self) -> tuple[IgnorePattern, ...]:
        """Parsed custom patterns followed by parsed .gitignore patterns."""
        return self._patterns

    def is_ignored(self, relative_path: str, file_name: str) -> bool:
        """
        Check whether a file must be excluded.

        Args:
            relative_path: Path relative to the scan root
            file_name: Final path segment

        Returns:
            True as soon as any rule matches
        """
        relative_path = to_posix_path(relative_path)
        segments = path_segments(relative_path)
        return any(
            check(self, relative_path, file_name, segments) for check in IGNORE_CHECKS
        )

    def prunes_directory(self, dir_name: str) -> bool:
        """
        Check whether every file beneath a directory with this name is excluded.

        True for built-in ignored directories and bare-name patterns, which
        match any path segment.
        """
        if dir_name in self.ignore_dirs:
            return True
        return any(p.bare and p.pattern == dir_name for p in self._patterns)


def matches_ignored_directory(
    rules: IgnoreRuleSet, relative_path: str, file_name: str, segments: list[str]
) -> bool:
    """Rule 1: any directory segment is a built-in ignored directory."""
    return any(segment in rules.ignore_dirs for segment in segments[:-1])


def matches_ignored_file_name(
    rules: IgnoreRuleSet, relative_path: str, file_name: str, segments: list[str]
) -> bool:
    """Rule 2: the file name is a built-in ignored file name."""
    return file_name in rules.ignore_files


def matches_ignored_extension(
    rules: IgnoreRuleSet, relative_path: str, file_name: str, segments: list[str]
) -> bool:
    """Rule 3: the lowercase extension is a built-in ignored extension."""
    extension = split_extension(file_name)
    return bool(extension) and extension in rules.ignore_extensions


def matches_minified_suffix(
    rules: IgnoreRuleSet, relative_path: str, file_name: str, segments: list[str]
) -> bool:
    """Rule 4: the lowercase name ends with a minified-asset suffix."""
    return file_name.lower().endswith(rules.minified_suffixes)


def matches_custom_patterns(
    rules: IgnoreRuleSet, relative_path: str, file_name: str, segments: list[str]
) -> bool:
    """Rule 5: a custom or .gitignore pattern matches."""
    return any(p.matches(relative_path, file_name, segments) for p in rules.patterns)


IGNORE_CHECKS: tuple[Callable[[IgnoreRuleSet, str, str, list[str]], bool], ...] = (
    matches_ignored_directory,
    matches_ignored_file_name,
    matches_ignored_extension,
    matches_minified_suffix,
    matches_custom_patterns,
)


def is_ignored(
    relative_path: str,
    file_name: str,
    custom_patterns: Iterable[str] = (),
    gitignore_patterns: Iterable[str] = (),
) -> bool:
    """
    Evaluate the ignore pipeline for a single file.

    Args:
        relative_path: Path relative to the scan root
        file_name: Final path segment
        custom_patterns: Caller-supplied patterns
        gitignore_patterns: Patterns parsed from the root .gitignore

    Returns:
        True if the file must be excluded
    """
    rules = IgnoreRuleSet(
        custom_patterns=tuple(custom_patterns),
        gitignore_patterns=tuple(gitignore_patterns),
    )
    return rules.is_ignored(relative_path, file_name)
