"""Deterministic file trees for exercising discovery and replay."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def pattern_bytes(size: int) -> bytes:
    """Return ``size`` bytes where byte ``i`` is ``(i + i % 255) & 0xFF``."""
    return bytes((i + i % 255) & 0xFF for i in range(size))


def file_generates(path: Path | str, size: int) -> Path:
    """Write a pattern file of ``size`` bytes at ``path``."""
    path = Path(path)
    path.write_bytes(pattern_bytes(size))
    return path


def file_generates_folder(path: Path | str, size: int, count: int) -> Path:
    """Create ``path`` holding ``file_0`` .. ``file_{count-1}`` of ``size`` bytes.

    Raises:
        OSError: The directory or a file could not be created.
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    data = pattern_bytes(size)
    for i in range(count):
        (path / f"file_{i}").write_bytes(data)
    logger.debug("Generated %d files of %d bytes in %s", count, size, path)
    return path
