"""
Centralized services container module for codeinv.

Builds the shared service instances from configuration so that every entry
point wires them the same way.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from codeinv.core.config import CodeinvConfig, load_config
from codeinv.core.file_scanner import LanguageRegistry, get_default_registry
from codeinv.services.export_service import ExportService
from codeinv.services.inventory_service import InventoryService


@dataclass
class ServicesContainer:
    """
    Container holding all shared service instances.

    Attributes:
        config: Application configuration
        language_registry: Extension to language table
        inventory_service: Scan, detect-types and read operations
        export_service: Ratio-allocated listing builder
    """

    config: CodeinvConfig
    language_registry: LanguageRegistry
    inventory_service: InventoryService
    export_service: ExportService


def create_services(
    config_path: Optional[Path] = None,
    config: Optional[CodeinvConfig] = None,
) -> ServicesContainer:
    """
    Create and initialize all services.

    Args:
        config_path: Optional path to configuration file. If None, uses
                    environment variables and defaults.
        config: Already loaded configuration; takes precedence over
               config_path.

    Returns:
        ServicesContainer with all initialized services.

    Raises:
        FileNotFoundError: If the config or languages file does not exist
        ValueError: If the config or languages file is malformed
    """
    config = config or load_config(config_path)

    if config.scanning.languages_file:
        language_registry = LanguageRegistry.from_yaml(config.scanning.languages_file)
    else:
        language_registry = get_default_registry()

    inventory_service = InventoryService(
        language_registry=language_registry,
        max_workers=config.reading.max_workers,
    )

    export_service = ExportService(
        inventory_service=inventory_service,
        export_config=config.export,
        custom_ignore=config.scanning.custom_ignore,
        use_gitignore=config.scanning.use_gitignore,
    )

    return ServicesContainer(
        config=config,
        language_registry=language_registry,
        inventory_service=inventory_service,
        export_service=export_service,
    )
