"""
Comment removal and code cleanup for exported listings.

Comment removal is line based and respects string literals. It is tuned
for producing readable listings, not for round-tripping source code.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class CommentRule:
    """Comment and string delimiters of one language family."""

    single: Optional[str] = None
    single_alt: Optional[str] = None
    multi_start: Optional[str] = None
    multi_end: Optional[str] = None
    strings: tuple[str, ...] = ()


COMMENT_RULES: dict[str, CommentRule] = {
    "c-style": CommentRule(single="//", multi_start="/*", multi_end="*/", strings=('"', "'", "`")),
    "python": CommentRule(single="#", strings=('"', "'")),
    "html": CommentRule(multi_start="<!--", multi_end="-->", strings=('"', "'")),
    "css": CommentRule(multi_start="/*", multi_end="*/", strings=('"', "'")),
    "scss": CommentRule(single="//", multi_start="/*", multi_end="*/", strings=('"', "'")),
    "sql": CommentRule(single="--", multi_start="/*", multi_end="*/", strings=("'",)),
    "shell": CommentRule(single="#", strings=('"', "'")),
    "ruby": CommentRule(single="#", multi_start="=begin", multi_end="=end", strings=('"', "'")),
    "lua": CommentRule(single="--", multi_start="--[[", multi_end="]]", strings=('"', "'")),
    "php": CommentRule(
        single="//", single_alt="#", multi_start="/*", multi_end="*/", strings=('"', "'")
    ),
    "haskell": CommentRule(single="--", multi_start="{-", multi_end="-}", strings=('"',)),
    "clojure": CommentRule(single=";", strings=('"',)),
    "erlang": CommentRule(single="%", strings=('"',)),
}

EXT_TO_RULE: dict[str, str] = {
    ".js": "c-style", ".jsx": "c-style", ".ts": "c-style", ".tsx": "c-style",
    ".java": "c-style", ".c": "c-style", ".cpp": "c-style", ".cc": "c-style",
    ".cxx": "c-style", ".h": "c-style", ".hpp": "c-style",
    ".cs": "c-style", ".go": "c-style", ".rs": "c-style",
    ".swift": "c-style", ".kt": "c-style", ".kts": "c-style",
    ".scala": "c-style", ".dart": "c-style",
    ".m": "c-style", ".mm": "c-style",
    ".groovy": "c-style", ".gradle": "c-style",
    ".prisma": "c-style", ".proto": "c-style",
    ".ml": "c-style", ".fs": "c-style", ".fsx": "c-style",
    ".py": "python",
    ".html": "html", ".htm": "html", ".xml": "html", ".wxml": "html",
    ".css": "css", ".wxss": "css",
    ".scss": "scss", ".sass": "scss", ".less": "scss",
    ".sql": "sql",
    ".sh": "shell", ".bash": "shell", ".zsh": "shell",
    ".bat": "shell", ".cmd": "shell", ".ps1": "shell",
    ".r": "shell",
    ".pl": "shell", ".pm": "shell",
    ".ex": "shell", ".exs": "shell",
    ".tf": "shell", ".graphql": "shell", ".gql": "shell",
    ".rb": "ruby",
    ".lua": "lua",
    ".php": "php",
    ".erl": "erlang", ".hrl": "erlang",
    ".hs": "haskell",
    ".clj": "clojure", ".cljs": "clojure",
}

# Single-file components: HTML comments plus cleaned <script> and <style> blocks
COMPONENT_EXTS: frozenset[str] = frozenset([".vue", ".svelte", ".astro"])

COPYRIGHT_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"copyright",
        r"license",
        r"all rights reserved",
        r"licensed under",
        r"permission is hereby granted",
        r"\(c\)\s*\d{4}",
        r"©\s*\d{4}",
    )
)

# Copyright headers are only looked for near the top of a file
COPYRIGHT_SCAN_LINES = 30

_IMPORT_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p)
    for p in (
        r"^import\s+",
        r"^(const|let|var)\s+.*=\s*require\s*\(",
        r"^from\s+\S+\s+import\s+",
        r"^#include\s+",
        r"^using\s+[\w.]+;?\s*$",
        r"^use\s+[\w:]+",
    )
)

_ORPHAN_CLOSER_RE = re.compile(r"[}\])\s,;]*")
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_SCRIPT_BLOCK_RE = re.compile(r"<script[^>]*>(.*?)</script>", re.DOTALL | re.IGNORECASE)
_STYLE_BLOCK_RE = re.compile(r"<style[^>]*>(.*?)</style>", re.DOTALL | re.IGNORECASE)


@dataclass
class CleanOptions:
    """Switches for process_file_content and clean_code."""

    remove_comments: bool = True
    remove_empty_lines: bool = True
    remove_trailing_whitespace: bool = True
    remove_imports: bool = False
    remove_copyright_headers: bool = True


@dataclass
class CodeStats:
    """Before/after line statistics of a cleaning pass."""

    original_line_count: int
    cleaned_line_count: int
    empty_lines_removed: int
    comment_lines_removed: int
    reduction_percentage: int


@dataclass
class ProcessedFile:
    """Non-blank lines of a cleaned file with its statistics."""

    lines: list[str] = field(default_factory=list)
    line_count: int = 0
    stats: Optional[CodeStats] = None


def _strip_line(line: str, rule: CommentRule) -> tuple[Optional[str], bool]:
    """
    Remove comments from one line outside of string literals.

    Returns:
        Tuple of (kept text or None if the line should be dropped,
        whether a multi-line comment is still open)
    """
    out: list[str] = []
    in_string = False
    quote = ""
    in_multi = False
    j, n = 0, len(line)

    while j < n:
        if not in_string and rule.strings:
            opener = next((d for d in rule.strings if line.startswith(d, j)), None)
            if opener is not None:
                in_string = True
                quote = opener
                out.append(opener)
                j += len(opener)
                continue

        if in_string:
            if line[j] == "\\":
                out.append(line[j:j + 2])
                j += 2
                continue
            if line.startswith(quote, j):
                out.append(quote)
                j += len(quote)
                in_string = False
                continue
            out.append(line[j])
            j += 1
            continue

        if rule.multi_start and line.startswith(rule.multi_start, j):
            end = line.find(rule.multi_end, j + len(rule.multi_start))
            if end != -1:
                j = end + len(rule.multi_end)
                continue
            in_multi = True
            break

        if rule.single and line.startswith(rule.single, j):
            break
        if rule.single_alt and line.startswith(rule.single_alt, j):
            break

        out.append(line[j])
        j += 1

    text = "".join(out)
    if text or (not in_multi and not line.strip()):
        return text, in_multi
    return None, in_multi


def _remove_generic_comments(code: str, rule: CommentRule) -> str:
    result: list[str] = []
    in_multi = False

    for line in code.split("\n"):
        if in_multi:
            idx = line.find(rule.multi_end)
            if idx == -1:
                continue
            in_multi = False
            line = line[idx + len(rule.multi_end):]
            if not line.strip():
                continue

        processed, in_multi = _strip_line(line, rule)
        if processed is not None:
            result.append(processed)

    return "\n".join(result)


def _remove_python_comments(code: str) -> str:
    result: list[str] = []
    in_docstring = False
    delimiter = ""

    for line in code.split("\n"):
        if in_docstring:
            idx = line.find(delimiter)
            if idx != -1:
                in_docstring = False
                rest = line[idx + 3:]
                if rest.strip():
                    result.append(rest)
            continue

        processed = line
        for quote in ('"""', "'''"):
            idx = processed.find(quote)
            if idx == -1:
                continue
            close = processed.find(quote, idx + 3)
            if close != -1:
                processed = processed[:idx] + processed[close + 3:]
            else:
                processed = processed[:idx]
                in_docstring = True
                delimiter = quote
            break

        if not in_docstring:
            processed = _strip_hash_comment(processed)

        result.append(processed)

    return "\n".join(result)


def _strip_hash_comment(line: str) -> str:
    """Cut a Python line at the first '#' outside a string literal."""
    in_string = False
    quote = ""
    i = 0
    while i < len(line):
        char = line[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                in_string = False
        elif char in ('"', "'"):
            in_string = True
            quote = char
        elif char == "#":
            return line[:i]
        i += 1
    return line


def _remove_component_comments(code: str) -> str:
    code = _HTML_COMMENT_RE.sub("", code)

    def _clean_script(match: re.Match) -> str:
        content = match.group(1)
        cleaned = _remove_generic_comments(content, COMMENT_RULES["c-style"])
        return match.group(0).replace(content, cleaned, 1)

    def _clean_style(match: re.Match) -> str:
        content = match.group(1)
        rule = COMMENT_RULES["scss"] if 'lang="scss"' in match.group(0) else COMMENT_RULES["css"]
        return match.group(0).replace(content, _remove_generic_comments(content, rule), 1)

    code = _SCRIPT_BLOCK_RE.sub(_clean_script, code)
    return _STYLE_BLOCK_RE.sub(_clean_style, code)


def remove_comments(code: str, ext: str) -> str:
    """
    Remove comments from source code.

    Args:
        code: Source text
        ext: File extension with the leading dot

    Returns:
        Code without comments; unchanged if the extension is unknown
    """
    if ext.lower() in COMPONENT_EXTS:
        return _remove_component_comments(code)

    rule_name = EXT_TO_RULE.get(ext) or EXT_TO_RULE.get(ext.lower())
    if rule_name is None:
        return code
    if rule_name == "python":
        return _remove_python_comments(code)
    return _remove_generic_comments(code, COMMENT_RULES[rule_name])


def is_import_line(line: str) -> bool:
    """Check whether a line is an import/include/use statement."""
    stripped = line.strip()
    return any(p.search(stripped) for p in _IMPORT_PATTERNS)


def remove_copyright_block(lines: list[str]) -> list[str]:
    """Drop a copyright or license header found within the first lines."""
    end = -1
    in_block = False

    for i, line in enumerate(lines[:COPYRIGHT_SCAN_LINES]):
        stripped = line.strip()
        if any(p.search(stripped) for p in COPYRIGHT_PATTERNS):
            in_block = True
            end = i
        elif in_block:
            if stripped.startswith(("*", "//", "#")) or stripped in ("*/", ""):
                end = i
            else:
                break

    return lines[end + 1:] if end >= 0 else lines


def clean_code(code: str, options: CleanOptions | None = None) -> str:
    """
    Normalize newlines and strip noise from code.

    Args:
        code: Source text
        options: Cleaning switches (defaults to CleanOptions())

    Returns:
        Cleaned code joined with '\\n'
    """
    options = options or CleanOptions()

    code = code.replace("\r\n", "\n").replace("\r", "\n")
    lines = code.split("\n")

    if options.remove_copyright_headers:
        lines = remove_copyright_block(lines)
    if options.remove_imports:
        lines = [line for line in lines if not is_import_line(line)]
    if options.remove_trailing_whitespace:
        lines = [line.rstrip() for line in lines]
    if options.remove_empty_lines:
        lines = [line for line in lines if line.strip()]

    return "\n".join(lines)


def code_stats(original: str, cleaned: str) -> CodeStats:
    """Compute before/after line statistics."""
    original_lines = original.split("\n")
    cleaned_lines = [line for line in cleaned.split("\n") if line.strip()]
    empty = sum(1 for line in original_lines if not line.strip())

    reduction = 0
    if original_lines:
        reduction = math.floor((1 - len(cleaned_lines) / len(original_lines)) * 100 + 0.5)

    return CodeStats(
        original_line_count=len(original_lines),
        cleaned_line_count=len(cleaned_lines),
        empty_lines_removed=empty,
        comment_lines_removed=max(0, len(original_lines) - empty - len(cleaned_lines)),
        reduction_percentage=reduction,
    )


def process_file_content(
    content: str, ext: str, options: CleanOptions | None = None
) -> ProcessedFile:
    """
    Clean one file's content for export.

    Comments are removed (unless disabled), the code is cleaned, blank lines
    are dropped and leading lines holding only closing brackets are trimmed.

    Args:
        content: Decoded file text
        ext: File extension with the leading dot
        options: Cleaning switches

    Returns:
        ProcessedFile with the kept lines, their count and statistics
    """
    options = options or CleanOptions()

    code = remove_comments(content, ext) if options.remove_comments else content
    code = clean_code(code, options)
    lines = [line for line in code.split("\n") if line.strip()]

    while lines and _ORPHAN_CLOSER_RE.fullmatch(lines[0].strip()):
        lines.pop(0)

    return ProcessedFile(
        lines=lines,
        line_count=len(lines),
        stats=code_stats(content, code),
    )
