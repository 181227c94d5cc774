"""Core backup operations for victory-archive.

Discovery and replay of backup plans, plus the generator used to build
test trees.
"""

from .executor import Executor, ExecutorResults
from .testdata import file_generates, file_generates_folder

__all__ = [
    "Executor",
    "ExecutorResults",
    "file_generates",
    "file_generates_folder",
]
