"""File batches: the unit of discovery checkpointing and replay.

A batch is written once, as a whole, right after discovery fills it and is
read back whole when the plan is replayed. The on-disk form is a YAML
document holding the batch name and every record, including any content
bytes still resident (as ``!!binary`` scalars).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from .__util__ import BatchError
from .file import VictoryFile

logger = logging.getLogger(__name__)


@dataclass
class FileBatch:
    """An ordered, append-only collection of file records."""

    name: str
    files: list[VictoryFile] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.files)

    def get_name(self) -> str:
        return self.name

    def get_length(self) -> int:
        return len(self.files)

    def get_files(self) -> list[VictoryFile]:
        return self.files

    def add_file(self, file: VictoryFile) -> None:
        self.files.append(file)

    def add_files(self, files: Iterable[VictoryFile]) -> None:
        for file in files:
            self.add_file(file)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "files": [f.to_dict() for f in self.files]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileBatch":
        return cls(
            name=str(data["name"]),
            files=[VictoryFile.from_dict(f) for f in data.get("files") or []],
        )

    def save_batch(self, path: Path | str) -> int:
        """Serialize the whole batch to ``path``.

        Args:
            path: Destination file; parent directories are created.

        Returns:
            Number of bytes written.

        Raises:
            BatchError: The file or its directory could not be written.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BatchError(f"Cannot create batch directory {path.parent}: {e}") from e

        data = yaml.safe_dump(self.to_dict(), sort_keys=False).encode("utf-8")
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise BatchError(f"Cannot write batch file {path}: {e}") from e

        logger.debug("Saved batch %s (%d records) to %s", self.name, len(self), path)
        return len(data)

    @classmethod
    def load_batch(cls, path: Path | str) -> "FileBatch":
        """Read a complete batch back from ``path``.

        Raises:
            BatchError: The file is missing, unreadable, or not a valid batch.
        """
        path = Path(path)
        try:
            with open(path, "rb") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise BatchError(f"Batch file not found: {path}") from e
        except OSError as e:
            raise BatchError(f"Cannot read batch file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise BatchError(f"Invalid batch encoding in {path}: {e}") from e

        if not isinstance(data, dict):
            raise BatchError(f"Invalid batch encoding in {path}: not a mapping")
        try:
            return cls.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise BatchError(f"Invalid batch record in {path}: {e!r}") from e
