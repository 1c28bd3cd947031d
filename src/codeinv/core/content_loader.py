"""
File content loading with multi-encoding fallback.

Decoding tries strict UTF-8 first, then a fixed ladder of legacy encodings,
and finally a lossy GBK decode. The ladder order is part of the contract:
reordering it changes which legacy files are decoded correctly.
"""

import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Attempted in order after strict UTF-8 fails; the first clean decode wins
DECODE_LADDER: tuple[str, ...] = (
    "gbk",
    "gb18030",
    "big5hkscs",
    "utf-16-le",
    "utf-16-be",
    "cp932",
    "cp949",
)

FALLBACK_ENCODING = "gbk"

# A leading byte-order mark takes precedence over the ladder
_BOMS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


@dataclass
class DecodedContent:
    """
    Result of loading one file: decoded text or an error, never both.

    Attributes:
        path: Path that was requested
        content: Decoded text ('' on error)
        line_count: Number of lines in content (0 on error)
        encoding: Codec that produced content, or None on error
        error: Description of the read failure, or None on success
    """

    path: str
    content: str = ""
    line_count: int = 0
    encoding: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True if the file was read and decoded."""
        return self.error is None


def count_lines(text: str) -> int:
    """
    Count lines the way a reader would.

    Each '\\n'-terminated segment is a line and a trailing fragment without
    a terminator counts as one more. An empty string has no lines.
    """
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def decode_bytes(data: bytes) -> tuple[str, str]:
    """
    Decode raw bytes using the UTF-8 first fallback ladder.

    Args:
        data: Raw file content

    Returns:
        Tuple of (decoded text, codec name used)
    """
    try:
        return data.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        pass

    for bom, encoding in _BOMS:
        if data.startswith(bom):
            return data[len(bom):].decode(encoding, errors="replace"), encoding

    for encoding in DECODE_LADDER:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        logger.debug(f"Decoded content as {encoding}")
        return text, encoding

    logger.debug(f"No clean decode found, forcing {FALLBACK_ENCODING} with replacement")
    return data.decode(FALLBACK_ENCODING, errors="replace"), FALLBACK_ENCODING


def load_file_content(path: Path | str) -> DecodedContent:
    """
    Read and decode one file.

    Read failures are returned as an error result and never raised.

    Args:
        path: File to read

    Returns:
        DecodedContent with text and line count, or with an error message
    """
    path_str = str(path)

    try:
        data = Path(path).read_bytes()
    except PermissionError as e:
        logger.warning(f"Permission denied reading file: {path_str} - {e}")
        return DecodedContent(path=path_str, error=f"Failed to read file: {e}")
    except OSError as e:
        logger.warning(f"Error reading file: {path_str} - {e}")
        return DecodedContent(path=path_str, error=f"Failed to read file: {e}")
    except ValueError as e:
        # Paths the OS cannot represent, such as ones with a NUL byte
        logger.warning(f"Invalid file path: {path_str!r} - {e}")
        return DecodedContent(path=path_str, error=f"Failed to read file: {e}")

    text, encoding = decode_bytes(data)
    return DecodedContent(
        path=path_str,
        content=text,
        line_count=count_lines(text),
        encoding=encoding,
    )
