"""
Property-based tests for FileScanner ordering and built-in exclusions.
"""

import tempfile
from pathlib import Path

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from codeinv.core.file_scanner import DEFAULT_IGNORE_DIRS, is_ignored, scan_files

# Lowercase names avoid collisions on case-insensitive filesystems
segment = st.from_regex(r"[a-z][a-z0-9_]{0,7}", fullmatch=True).filter(
    lambda s: s not in DEFAULT_IGNORE_DIRS
)
extension = st.sampled_from(["py", "js", "ts", "md", "go", "rs", "txt", ""])


@st.composite
def relative_file_path(draw):
    """Generate a relative path of 1-4 segments ending in a file name."""
    dirs = draw(st.lists(segment, min_size=0, max_size=3))
    stem = draw(segment)
    ext = draw(extension)
    name = f"{stem}.{ext}" if ext else stem
    return "/".join(dirs + [name])


def _materialize(root: Path, paths: list[str]) -> set[str]:
    """Create files, skipping paths that clash with an existing file or directory."""
    created: set[str] = set()
    for rel in paths:
        target = root / rel
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if target.exists():
                continue
            target.write_bytes(b"x")
        except (FileExistsError, NotADirectoryError, IsADirectoryError):
            continue
        created.add(rel)
    return {rel for rel in created if (root / rel).is_file()}


@given(paths=st.lists(relative_file_path(), min_size=1, max_size=15))
@settings(max_examples=40, deadline=None, suppress_health_check=[HealthCheck.too_slow])
def test_scan_output_sorted_and_unique(paths):
    """Relative paths come out strictly ascending."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        created = _materialize(root, paths)

        records = scan_files(root, use_gitignore=False)
        relative_paths = [r.relative_path for r in records]

        assert relative_paths == sorted(set(relative_paths))
        assert set(relative_paths) == created


@given(
    prefix=st.lists(segment, min_size=0, max_size=2),
    ignored=st.sampled_from(sorted(DEFAULT_IGNORE_DIRS)),
    suffix=st.lists(segment, min_size=0, max_size=2),
    name=segment,
)
def test_ignored_directory_excludes_at_any_depth(prefix, ignored, suffix, name):
    """A built-in ignored directory anywhere above a file excludes it."""
    file_name = f"{name}.py"
    relative_path = "/".join(prefix + [ignored] + suffix + [file_name])

    assert is_ignored(relative_path, file_name)


@given(path=relative_file_path())
def test_extension_lowercase_with_dot(path):
    """Scanned extensions are lowercase and start with a dot, or are empty."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        target = root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"")

        (record,) = scan_files(root)

        assert record.extension == "" or (
            record.extension.startswith(".") and record.extension == record.extension.lower()
        )
        assert record.relative_path == path
