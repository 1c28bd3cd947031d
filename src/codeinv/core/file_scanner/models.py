"""
Data models for the file scanner module.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileRecord:
    """
    One file discovered by a scan.

    Attributes:
        absolute_path: Full path with forward-slash separators
        relative_path: Path relative to the scan root, forward-slash separated
        name: Final path segment
        extension: Lowercase extension with the leading dot, or '' if none
        size_bytes: File size at scan time (0 when metadata was unreadable)
        language: Language label derived from the extension
    """

    absolute_path: str
    relative_path: str
    name: str
    extension: str
    size_bytes: int
    language: str

    def to_dict(self) -> dict:
        """Serialize using the host-facing field names."""
        return {
            "path": self.absolute_path,
            "relative_path": self.relative_path,
            "name": self.name,
            "ext": self.extension,
            "size": self.size_bytes,
            "language": self.language,
        }


@dataclass
class TypeSummary:
    """
    Aggregation bucket for one file extension.

    Attributes:
        extension: Extension with the leading dot (never empty)
        language: Language of the first file seen with this extension
        file_count: Number of files with this extension
        total_size_bytes: Sum of the sizes of those files
    """

    extension: str
    language: str
    file_count: int = 0
    total_size_bytes: int = 0

    def to_dict(self) -> dict:
        """Serialize using the host-facing field names."""
        return {
            "ext": self.extension,
            "language": self.language,
            "count": self.file_count,
            "total_size": self.total_size_bytes,
        }
