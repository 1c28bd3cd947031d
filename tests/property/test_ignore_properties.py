"""
Property-based tests for .gitignore parsing and custom patterns.
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from codeinv.core.file_scanner import DEFAULT_IGNORE_DIRS, is_ignored, parse_gitignore

pattern_line = st.from_regex(r"[a-zA-Z0-9_\-\*\.]{1,12}", fullmatch=True)
comment_line = st.from_regex(r"#[ a-zA-Z0-9_\-\*\.]{0,12}", fullmatch=True)
blank_line = st.sampled_from(["", " ", "\t", "   "])
name = st.from_regex(r"[a-z][a-z0-9]{0,7}", fullmatch=True).filter(
    lambda s: s not in DEFAULT_IGNORE_DIRS
)


@given(
    lines=st.lists(
        st.one_of(
            pattern_line.map(lambda p: ("pattern", p)),
            comment_line.map(lambda c: ("comment", c)),
            blank_line.map(lambda b: ("blank", b)),
        ),
        max_size=20,
    )
)
@settings(max_examples=50, deadline=None)
def test_comments_and_blank_lines_contribute_nothing(lines):
    """Only pattern lines survive, in file order."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        content = "\n".join(text for _, text in lines)
        (root / ".gitignore").write_text(content, encoding="utf-8")

        expected = [text for kind, text in lines if kind == "pattern"]

        assert parse_gitignore(root) == expected


@given(dirs=st.lists(name, min_size=0, max_size=3), bare=name, file_stem=name)
def test_bare_name_matches_any_segment(dirs, bare, file_stem):
    """A bare pattern excludes a file exactly when some segment equals it."""
    file_name = f"{file_stem}.py"
    relative_path = "/".join(dirs + [file_name])

    assert is_ignored(relative_path, file_name, [bare]) == (bare in dirs + [file_name])


@given(dirs=st.lists(name, min_size=0, max_size=3), stem=name)
def test_extension_glob_matches_only_that_extension(dirs, stem):
    """'*.gen.ts' excludes generated TypeScript and nothing else."""
    generated = f"{stem}.gen.ts"
    plain = f"{stem}.ts"

    assert is_ignored("/".join(dirs + [generated]), generated, ["*.gen.ts"])
    assert not is_ignored("/".join(dirs + [plain]), plain, ["*.gen.ts"])
