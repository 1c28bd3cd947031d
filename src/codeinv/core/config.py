"""
Configuration module for codeinv.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    return section_defaults.get(key, fallback)


@dataclass
class ScanningConfig:
    """Configuration for directory scanning."""

    custom_ignore: list[str] = field(
        default_factory=lambda: list(_get_default("scanning", "custom_ignore", []))
    )
    use_gitignore: bool = field(
        default_factory=lambda: _get_default("scanning", "use_gitignore", True)
    )
    languages_file: str = field(
        default_factory=lambda: _get_default("scanning", "languages_file", "")
    )


@dataclass
class ReadingConfig:
    """Configuration for batch content reading."""

    max_workers: int = field(default_factory=lambda: _get_default("reading", "max_workers", 1))


@dataclass
class ExportConfig:
    """Configuration for export listings."""

    lines_per_page: int = field(
        default_factory=lambda: _get_default("export", "lines_per_page", 50)
    )
    max_pages: int = field(default_factory=lambda: _get_default("export", "max_pages", 60))
    remove_comments: bool = field(
        default_factory=lambda: _get_default("export", "remove_comments", True)
    )
    remove_empty_lines: bool = field(
        default_factory=lambda: _get_default("export", "remove_empty_lines", True)
    )
    remove_trailing_whitespace: bool = field(
        default_factory=lambda: _get_default("export", "remove_trailing_whitespace", True)
    )
    remove_imports: bool = field(
        default_factory=lambda: _get_default("export", "remove_imports", False)
    )
    remove_copyright_headers: bool = field(
        default_factory=lambda: _get_default("export", "remove_copyright_headers", True)
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class CodeinvConfig:
    """Main configuration class for codeinv."""

    scanning: ScanningConfig = field(default_factory=ScanningConfig)
    reading: ReadingConfig = field(default_factory=ReadingConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "CodeinvConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            CodeinvConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported or malformed
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            try:
                data = yaml.safe_load(content) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in configuration file {path}: {e}") from e
        elif path.suffix == ".json":
            try:
                data = json.loads(content) if content.strip() else {}
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in configuration file {path}: {e}") from e
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration format: expected mapping, got {type(data)}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "CodeinvConfig":
        """Create CodeinvConfig from a dictionary."""
        config = cls()

        if "scanning" in data:
            config.scanning = ScanningConfig(**data["scanning"])
        if "reading" in data:
            config.reading = ReadingConfig(**data["reading"])
        if "export" in data:
            config.export = ExportConfig(**data["export"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "CodeinvConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: CODEINV_<SECTION>_<KEY>
        Examples:
            - CODEINV_SCANNING_USE_GITIGNORE
            - CODEINV_SCANNING_CUSTOM_IGNORE (comma-separated)
            - CODEINV_READING_MAX_WORKERS
            - CODEINV_EXPORT_LINES_PER_PAGE
            - CODEINV_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Scanning config
            "CODEINV_SCANNING_CUSTOM_IGNORE": ("scanning", "custom_ignore", _parse_list),
            "CODEINV_SCANNING_USE_GITIGNORE": ("scanning", "use_gitignore", _parse_bool),
            "CODEINV_SCANNING_LANGUAGES_FILE": ("scanning", "languages_file", str),
            # Reading config
            "CODEINV_READING_MAX_WORKERS": ("reading", "max_workers", int),
            # Export config
            "CODEINV_EXPORT_LINES_PER_PAGE": ("export", "lines_per_page", int),
            "CODEINV_EXPORT_MAX_PAGES": ("export", "max_pages", int),
            "CODEINV_EXPORT_REMOVE_COMMENTS": ("export", "remove_comments", _parse_bool),
            "CODEINV_EXPORT_REMOVE_EMPTY_LINES": ("export", "remove_empty_lines", _parse_bool),
            "CODEINV_EXPORT_REMOVE_TRAILING_WHITESPACE": (
                "export",
                "remove_trailing_whitespace",
                _parse_bool,
            ),
            "CODEINV_EXPORT_REMOVE_IMPORTS": ("export", "remove_imports", _parse_bool),
            "CODEINV_EXPORT_REMOVE_COPYRIGHT_HEADERS": (
                "export",
                "remove_copyright_headers",
                _parse_bool,
            ),
            # Logging config
            "CODEINV_LOGGING_LEVEL": ("logging", "level", str),
            "CODEINV_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list of non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> CodeinvConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        CodeinvConfig instance
    """
    if config_path:
        config = CodeinvConfig.from_file(config_path)
    else:
        config = CodeinvConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
