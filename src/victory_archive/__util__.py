"""victory-archive: victory_archive/__util__.py
Shared errors and formatting helpers.
"""

import time


class AbortError(Exception):
    """Fatal error that aborts the enclosing operation."""


class BatchError(AbortError):
    """A batch file could not be written or read back."""


class PlanError(AbortError):
    """A plan manifest is unusable or a plan cannot be executed."""


def log_heading(caption: str) -> str:
    """Formatted heading for logging output."""
    return f"--[ {caption} ]".ljust(60, "-")


def format_size(size: int) -> str:
    """Format a byte count as a short human readable string."""
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} TiB"


def elapsed_ms(start: float, end: float | None = None) -> float:
    """Milliseconds between two ``time.monotonic()`` readings."""
    if end is None:
        end = time.monotonic()
    return (end - start) * 1000.0
