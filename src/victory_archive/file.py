"""File records produced by endpoint listings and carried through batches."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional

logger = logging.getLogger(__name__)


class FileState(Enum):
    """Lifecycle state of a file record."""

    DISCOVERED = "Discovered"
    INSPECTED = "Inspected"  # reserved, nothing produces it yet
    READ = "Read"
    STORED = "Stored"
    ERROR = "Error"  # reserved, nothing produces it yet
    SKIPPED = "Skipped"  # reserved, nothing produces it yet


@dataclass
class VictoryFile:
    """One enumerated file.

    ``path`` is always relative to the root of the endpoint that listed it,
    so the same record can be read from a source and written to a
    destination with a different root. ``hash`` is carried but never
    populated.
    """

    name: str
    path: str
    extension: str = ""
    state: FileState = FileState.DISCOVERED
    contents: Optional[bytes] = None
    size: int = 0
    hash: str = ""

    @classmethod
    def new(cls, path: str) -> "VictoryFile":
        """Create a freshly discovered record for a root-relative path."""
        pure = PurePosixPath(path)
        return cls(name=pure.name, path=path, extension=pure.suffix.lstrip("."))

    def load_contents(self, contents: bytes) -> None:
        """Attach content bytes and mark the record as read."""
        self.size = len(contents)
        self.contents = contents
        self.state = FileState.READ
        logger.debug(
            "Loaded contents for file: %s with size %.1fMB",
            self.path,
            self.size / 1_000_000,
        )

    def get_contents(self) -> bytes:
        if self.contents is None:
            raise ValueError(f"File {self.path!r} has no contents")
        return self.contents

    def clear_contents(self) -> None:
        """Drop resident content once it has been stored."""
        self.contents = None
        self.state = FileState.STORED

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "extension": self.extension,
            "state": self.state.value,
            "contents": self.contents,
            "size": self.size,
            "hash": self.hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VictoryFile":
        """Rebuild a record from ``to_dict`` output.

        Raises:
            KeyError: A required field is missing.
            ValueError: The state or a field type is invalid.
        """
        contents = data.get("contents")
        if contents is not None and not isinstance(contents, bytes):
            raise ValueError(f"contents of {data['path']!r} is not binary data")
        return cls(
            name=str(data["name"]),
            path=str(data["path"]),
            extension=str(data.get("extension", "")),
            state=FileState(data.get("state", FileState.DISCOVERED.value)),
            contents=contents,
            size=int(data.get("size", 0)),
            hash=str(data.get("hash", "")),
        )
