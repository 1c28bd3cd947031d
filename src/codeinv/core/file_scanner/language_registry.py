"""
Language registry for mapping file extensions to human-readable language labels.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml

logger = logging.getLogger(__name__)

# Default path to the languages configuration file
_DEFAULT_LANGUAGES_CONFIG = Path(__file__).parent.parent / "languages.yaml"

UNKNOWN_LANGUAGE = "Unknown"


def _normalize_extension(extension: str) -> str:
    return extension.strip().lstrip(".").lower()


class LanguageRegistry:
    """
    Read-only registry mapping file extensions to language labels.

    The table is loaded once from YAML and frozen; no runtime registration
    is supported.

    Example:
        >>> registry = LanguageRegistry()
        >>> registry.detect("py")
        'Python'
        >>> registry.detect(".TSX")
        'TypeScript (TSX)'

        >>> # Load from custom config
        >>> registry = LanguageRegistry.from_yaml("custom_languages.yaml")
    """

    def __init__(self, mapping: Mapping[str, str] | None = None):
        """
        Initialize the language registry.

        Args:
            mapping: Extension to language mapping. If None, the packaged
                     languages.yaml table is loaded.
        """
        if mapping is None:
            mapping = _load_mapping_from_yaml(_DEFAULT_LANGUAGES_CONFIG)

        table = {_normalize_extension(ext): language for ext, language in mapping.items()}
        self._extension_to_language: Mapping[str, str] = MappingProxyType(table)

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "LanguageRegistry":
        """
        Create a LanguageRegistry from a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            LanguageRegistry instance with loaded mappings

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the config file format is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Languages config not found: {config_path}")
        return cls(_load_mapping_from_yaml(config_path))

    @property
    def mapping(self) -> Mapping[str, str]:
        """Read-only view of the extension to language table."""
        return self._extension_to_language

    def detect(self, extension: str) -> str:
        """
        Detect language from a file extension.

        Args:
            extension: File extension, with or without the leading dot

        Returns:
            Language label or 'Unknown' if not recognized
        """
        return self._extension_to_language.get(_normalize_extension(extension), UNKNOWN_LANGUAGE)

    def detect_from_path(self, file_path: Path | str) -> str:
        """Detect language from a file path's suffix."""
        return self.detect(Path(file_path).suffix)

    def get_extensions(self, language: str) -> set[str]:
        """Get all registered extensions for a language."""
        return {ext for ext, lang in self._extension_to_language.items() if lang == language}

    def get_all_extensions(self) -> set[str]:
        """Get all registered file extensions."""
        return set(self._extension_to_language)

    def get_all_languages(self) -> set[str]:
        """Get all registered language labels."""
        return set(self._extension_to_language.values())

    def is_supported(self, extension: str) -> bool:
        """Check if an extension is registered."""
        return _normalize_extension(extension) in self._extension_to_language


def _load_mapping_from_yaml(config_path: Path) -> dict[str, str]:
    """
    Load language mappings from a YAML file.

    Expected format:
        Language Label: [ext1, ext2]
    """
    if not config_path.exists():
        logger.warning(f"Languages config not found: {config_path}, using empty registry")
        return {}

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse languages config: {e}")
        raise ValueError(f"Invalid YAML in languages config: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"Invalid languages config format: expected dict, got {type(data)}")

    mapping: dict[str, str] = {}
    for language, extensions in data.items():
        if not isinstance(extensions, list):
            logger.warning(
                f"Invalid extensions for {language}: expected list, got {type(extensions)}"
            )
            continue
        for ext in extensions:
            mapping[str(ext)] = str(language)
    return mapping


# Global default registry instance
_default_registry = LanguageRegistry()


def get_default_registry() -> LanguageRegistry:
    """Get the global default language registry."""
    return _default_registry


def classify(extension: str) -> str:
    """Map an extension to its language label using the default registry."""
    return _default_registry.detect(extension)
