"""
Property-based tests for CodeinvConfig round-trip serialization.
"""

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from codeinv.core.config import (
    CodeinvConfig,
    ExportConfig,
    LoggingConfig,
    ReadingConfig,
    ScanningConfig,
)

ignore_pattern = st.from_regex(r"[a-zA-Z0-9_\-\*\./]+", fullmatch=True).filter(lambda s: len(s) > 0)

log_level = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


@st.composite
def scanning_config_strategy(draw):
    """Generate valid ScanningConfig instances."""
    return ScanningConfig(
        custom_ignore=draw(st.lists(ignore_pattern, max_size=10)),
        use_gitignore=draw(st.booleans()),
    )


@st.composite
def export_config_strategy(draw):
    """Generate valid ExportConfig instances."""
    return ExportConfig(
        lines_per_page=draw(st.integers(min_value=1, max_value=500)),
        max_pages=draw(st.integers(min_value=1, max_value=1000)),
        remove_comments=draw(st.booleans()),
        remove_empty_lines=draw(st.booleans()),
        remove_trailing_whitespace=draw(st.booleans()),
        remove_imports=draw(st.booleans()),
        remove_copyright_headers=draw(st.booleans()),
    )


@st.composite
def codeinv_config_strategy(draw):
    """Generate valid CodeinvConfig instances."""
    return CodeinvConfig(
        scanning=draw(scanning_config_strategy()),
        reading=ReadingConfig(max_workers=draw(st.integers(min_value=1, max_value=64))),
        export=draw(export_config_strategy()),
        logging=LoggingConfig(level=draw(log_level)),
    )


@given(config=codeinv_config_strategy())
@settings(max_examples=50, deadline=None)
def test_yaml_round_trip(config):
    """Serializing to YAML and loading back yields an equal configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.yaml"
        path.write_text(config.to_yaml(), encoding="utf-8")

        assert CodeinvConfig.from_file(path) == config


@given(config=codeinv_config_strategy())
@settings(max_examples=50, deadline=None)
def test_json_round_trip(config):
    """Serializing to JSON and loading back yields an equal configuration."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "config.json"
        path.write_text(config.to_json(), encoding="utf-8")

        assert CodeinvConfig.from_file(path) == config
