"""
Unit tests for the ignore rule pipeline.

Covers the built-in directory, file name, extension and minified rules,
bare-name and glob patterns, and .gitignore parsing.
"""

import logging

import pytest

from codeinv.core.file_scanner import IgnorePattern, IgnoreRuleSet, is_ignored, parse_gitignore
from codeinv.core.file_scanner.ignore_rules import compile_glob


class TestBuiltinRules:
    """Rules 1-4 apply regardless of custom patterns."""

    @pytest.mark.parametrize(
        "relative_path",
        [
            "node_modules/react/index.js",
            "a/b/node_modules/x.js",
            ".git/config",
            "pkg/__pycache__/mod.py",
            "web/.next/server/page.js",
        ],
    )
    def test_ignored_directory_at_any_depth(self, relative_path):
        name = relative_path.rsplit("/", 1)[-1]
        assert is_ignored(relative_path, name)

    def test_directory_rule_does_not_match_file_name(self):
        """A file that happens to be named like an ignored directory is kept."""
        assert not is_ignored("scripts/build", "build")
        assert not is_ignored("out", "out")

    def test_backslash_paths_normalized(self):
        assert is_ignored("src\\node_modules\\x.js", "x.js")

    @pytest.mark.parametrize(
        "name",
        ["package-lock.json", "yarn.lock", "pnpm-lock.yaml", ".DS_Store", "Thumbs.db", "desktop.ini"],
    )
    def test_ignored_file_names(self, name):
        assert is_ignored(f"sub/{name}", name)

    @pytest.mark.parametrize(
        "name", ["logo.PNG", "bundle.js.map", "font.woff2", "data.sqlite", "mod.pyc", "a.7z"]
    )
    def test_ignored_extensions_case_insensitive(self, name):
        assert is_ignored(name, name)

    @pytest.mark.parametrize("name", ["app.min.js", "style.min.css", "APP.MIN.JS"])
    def test_minified_suffix(self, name):
        assert is_ignored(f"static/{name}", name)

    @pytest.mark.parametrize(
        "relative_path", ["src/main.py", "README.md", "src/app.js", "Makefile", "minify.js"]
    )
    def test_regular_files_kept(self, relative_path):
        name = relative_path.rsplit("/", 1)[-1]
        assert not is_ignored(relative_path, name)


class TestCustomPatterns:
    """Rule 5: bare names and globs."""

    def test_bare_name_excludes_directory_contents(self):
        assert is_ignored("generated/a/b.ts", "b.ts", ["generated"])
        assert is_ignored("src/generated/b.ts", "b.ts", ["generated"])
        assert not is_ignored("src/gen/b.ts", "b.ts", ["generated"])

    def test_bare_name_matches_file_name(self):
        assert is_ignored("docs/NOTES.txt", "NOTES.txt", ["NOTES.txt"])

    def test_bare_name_requires_exact_segment(self):
        assert not is_ignored("src/generated_code/b.ts", "b.ts", ["generated"])

    def test_trailing_slash_stripped(self):
        assert is_ignored("tmp/x.py", "x.py", ["tmp/"])

    def test_empty_patterns_skipped(self):
        assert not is_ignored("src/x.py", "x.py", ["", "/", "//"])

    def test_glob_against_file_name(self):
        patterns = ["*.generated.*"]

        assert is_ignored("src/api.generated.ts", "api.generated.ts", patterns)
        assert not is_ignored("src/api.ts", "api.ts", patterns)

    def test_glob_star_crosses_separators(self):
        assert is_ignored("src/deep/x.py", "x.py", ["src*py"])

    def test_glob_question_mark(self):
        assert is_ignored("a/file1.txt", "file1.txt", ["file?.txt"])
        assert not is_ignored("a/file10.txt", "file10.txt", ["file?.txt"])

    def test_glob_character_classes(self):
        assert is_ignored("x/a1.py", "a1.py", ["a[0-9].py"])
        assert not is_ignored("x/ab.py", "ab.py", ["a[0-9].py"])
        assert is_ignored("x/ab.py", "ab.py", ["a[!0-9].py"])

    def test_glob_double_star_component(self):
        patterns = ["docs/**/*.md"]

        assert is_ignored("docs/a/b/c.md", "c.md", patterns)
        assert is_ignored("docs/c.md", "c.md", patterns)
        assert not is_ignored("src/c.md", "c.md", patterns)

    def test_glob_is_case_sensitive(self):
        assert not is_ignored("src/Temp.py", "Temp.py", ["temp.py"])

    def test_glob_with_path(self):
        assert is_ignored("src/legacy/old.js", "old.js", ["src/legacy/*"])
        assert not is_ignored("lib/legacy/old.js", "old.js", ["src/legacy/*"])

    def test_gitignore_patterns_apply(self):
        assert is_ignored("logs/app.txt", "app.txt", gitignore_patterns=["logs"])

    @pytest.mark.parametrize("pattern", ["a[b", "***", "a**b", "src/**x"])
    def test_malformed_glob_is_inert(self, pattern):
        assert compile_glob(pattern) is None
        assert not is_ignored("src/main.py", "main.py", [pattern])

    def test_malformed_glob_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="codeinv.core.file_scanner.ignore_rules"):
            IgnorePattern.parse("broken[")

        assert any("malformed glob" in record.message for record in caplog.records)


class TestIgnorePattern:
    """Parsing of individual patterns."""

    def test_bare_detection(self):
        assert IgnorePattern.parse("vendor").bare
        assert not IgnorePattern.parse("*.log").bare
        assert not IgnorePattern.parse("a/b").bare
        assert IgnorePattern.parse("file?.txt").bare
        assert IgnorePattern.parse("[ab]").bare

    def test_bracketed_name_matches_literally(self):
        assert is_ignored("foo[1]/x.py", "x.py", ["foo[1]"])
        assert is_ignored("src/foo[1]/x.py", "x.py", ["foo[1]"])
        assert not is_ignored("foo1/x.py", "x.py", ["foo[1]"])

    def test_question_mark_name_matches_literally_and_as_glob(self):
        assert is_ignored("a?/x.py", "x.py", ["a?"])
        assert is_ignored("src/ab", "ab", ["a?"])

    def test_empty_after_strip_returns_none(self):
        assert IgnorePattern.parse("/") is None
        assert IgnorePattern.parse("") is None


class TestIgnoreRuleSet:
    """Rule set construction and directory pruning."""

    def test_prunes_builtin_and_bare_directories(self):
        rules = IgnoreRuleSet(custom_patterns=("generated", "*.tmp"))

        assert rules.prunes_directory("node_modules")
        assert rules.prunes_directory("generated")
        assert not rules.prunes_directory("src")
        assert not rules.prunes_directory("x.tmp")

    def test_is_frozen(self):
        rules = IgnoreRuleSet()

        with pytest.raises(AttributeError):
            rules.custom_patterns = ("x",)

    def test_patterns_order_custom_then_gitignore(self):
        rules = IgnoreRuleSet(custom_patterns=("a",), gitignore_patterns=("b",))

        assert [p.pattern for p in rules.patterns] == ["a", "b"]

    def test_for_root_reads_gitignore(self, tmp_path):
        (tmp_path / ".gitignore").write_text("secret\n", encoding="utf-8")

        assert IgnoreRuleSet.for_root(tmp_path).gitignore_patterns == ("secret",)
        assert IgnoreRuleSet.for_root(tmp_path, use_gitignore=False).gitignore_patterns == ()


class TestParseGitignore:
    """Reading patterns from the root .gitignore."""

    def test_comments_and_blank_lines_dropped(self, tmp_path):
        (tmp_path / ".gitignore").write_text(
            "# comment\n\n   \n*.log\n  build-cache/  \n#another\n", encoding="utf-8"
        )

        assert parse_gitignore(tmp_path) == ["*.log", "build-cache/"]

    def test_missing_file(self, tmp_path):
        assert parse_gitignore(tmp_path) == []

    def test_invalid_utf8_contributes_nothing(self, tmp_path, caplog):
        (tmp_path / ".gitignore").write_bytes(b"valid\n\xff\xfe broken\n")

        with caplog.at_level(logging.WARNING):
            patterns = parse_gitignore(tmp_path)

        assert patterns == []
        assert any("Invalid UTF-8 encoding" in record.message for record in caplog.records)

    def test_crlf_line_endings(self, tmp_path):
        (tmp_path / ".gitignore").write_bytes(b"one\r\ntwo\r\n")

        assert parse_gitignore(tmp_path) == ["one", "two"]
