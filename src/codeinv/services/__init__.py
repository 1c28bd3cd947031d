"""
Service Layer - InventoryService, ExportService and ServicesContainer.
"""

from codeinv.services.container import ServicesContainer, create_services
from codeinv.services.export_service import (
    DirectorySelection,
    ExportPreview,
    ExportService,
    clean_options_from_config,
    parse_selections,
)
from codeinv.services.inventory_service import (
    DetectResult,
    FileContent,
    InventoryService,
    ReadRequest,
    ReadResult,
    ScanResult,
    detect_file_types,
    read_files_content,
    scan_directory,
)

__all__ = [
    # Container and factory
    "ServicesContainer",
    "create_services",
    # Boundary operations
    "InventoryService",
    "ScanResult",
    "DetectResult",
    "ReadRequest",
    "FileContent",
    "ReadResult",
    "scan_directory",
    "detect_file_types",
    "read_files_content",
    # Export
    "DirectorySelection",
    "ExportPreview",
    "ExportService",
    "clean_options_from_config",
    "parse_selections",
]
