# pyright: standard

"""victory-archive: victory_archive/endpoint/local.py
Filesystem endpoint.
"""

import itertools
import logging
import os
from pathlib import Path

from victory_archive import __util__
from victory_archive.file import VictoryFile

from .common import Endpoint, require_contents

logger = logging.getLogger(__name__)


class LocalEndpoint(Endpoint):
    """Read and write files below a local directory."""

    def __init__(self, config=None, **kwargs) -> None:
        """
        Initialize the LocalEndpoint with a configuration dictionary.

        Args:
            config (dict): Configuration dictionary containing endpoint settings.
            kwargs: Additional settings overriding ``config``.
        """
        super().__init__(config=config, **kwargs)

        if self.config["path"] is None:
            raise ValueError("LocalEndpoint requires a path")
        self.config["path"] = Path(self.config["path"]).resolve()
        self._cursor = self._walk(self.config["path"])

    def get_name(self):
        """Return an id string to identify this endpoint over multiple runs."""
        return str(self.config["path"])

    def reset(self) -> None:
        self._cursor = self._walk(self.config["path"])

    def list_files_next(self, count):
        """Return up to ``count`` records, continuing where the last call stopped.

        Entries are visited depth first with siblings sorted by name; only
        regular files are returned. Entries that cannot be inspected are
        logged and left out.
        """
        if count <= 0:
            return []
        root = self.config["path"]
        files = []
        for entry_path in itertools.islice(self._cursor, count):
            relative = Path(entry_path).relative_to(root).as_posix()
            files.append(VictoryFile.new(relative))
        return files

    def read_file(self, record):
        """Load the file content into ``record``.

        Unreadable files produce an empty record rather than an error so a
        batch replay can carry on.
        """
        full_path = self._resolve(record.path)
        try:
            contents = full_path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s, storing it empty: %s", full_path, e)
            contents = b""
        record.load_contents(contents)
        return record

    @require_contents
    def write_file(self, record):
        """Write the record content below the endpoint root.

        Missing parent directories are created. Failures propagate; on
        success the record content is released and the record is marked
        as stored.
        """
        full_path = self._resolve(record.path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(record.get_contents())
        record.clear_contents()
        return record

    def _prepare(self) -> None:
        """Create the endpoint root directory if needed."""
        root = self.config["path"]
        if not root.is_dir():
            logger.info("Creating directory: %s", root)
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error("Error creating new location %s: %s", root, e)
                raise __util__.AbortError(f"Cannot create {root}: {e}") from e

    def _walk(self, directory):
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.error("Error listing %s: %s", directory, e)
            return

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    yield from self._walk(entry.path)
                elif entry.is_file(follow_symlinks=self.config["follow_symlinks"]):
                    yield entry.path
                else:
                    logger.warning("Skipping %s: not a regular file", entry.path)
            except OSError as e:
                logger.error("Error inspecting %s: %s", entry.path, e)
