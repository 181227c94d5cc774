# pyright: standard

"""victory-archive: victory_archive/endpoint/common.py
Common functionality among endpoints.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def require_contents(method):
    """Decorator to ensure a record carries content before it is written."""

    def wrapped(self, record, *args, **kwargs):
        if record.contents is None:
            raise ValueError(f"{record.path!r} has no contents to write")
        return method(self, record, *args, **kwargs)

    return wrapped


class Endpoint:
    """Generic structure of a storage endpoint.

    The same interface serves as a backup source and as a destination.
    Subclasses implement the listing cursor and the content transfer;
    records exchanged with an endpoint always carry paths relative to
    ``config["path"]``.
    """

    def __init__(self, config=None, **kwargs) -> None:
        """
        Initialize the Endpoint with a configuration dictionary.

        Args:
            config (dict): Configuration dictionary containing endpoint settings.
            kwargs: Additional settings overriding ``config``.
        """
        config = config or {}
        self.config = {}

        self.config["path"] = self._normalize_path(config.get("path"))
        self.config["follow_symlinks"] = config.get("follow_symlinks", True)

        for key, value in kwargs.items():
            self.config[key] = value

    def _normalize_path(self, val):
        if val is None:
            return None
        path = Path(val).expanduser()
        return path.resolve() if not path.is_absolute() else path

    def prepare(self):
        """Public access to _prepare, which is called after creating an endpoint."""
        logger.info("Preparing endpoint %r ...", self)
        return self._prepare()

    def list_files_next(self, count):
        """Return up to ``count`` further records from the listing cursor.

        An empty list means the endpoint is exhausted.
        """
        raise NotImplementedError

    def read_file(self, record):
        """Load the content of ``record`` into it."""
        raise NotImplementedError

    def write_file(self, record):
        """Store the content of ``record`` below this endpoint's root."""
        raise NotImplementedError

    def reset(self) -> None:
        """Rewind the listing cursor to the beginning."""
        raise NotImplementedError

    # The following methods may be implemented by endpoints unless the
    # default behaviour is wanted.

    def __repr__(self) -> str:
        return f"{self.config['path']}"

    def get_name(self) -> str:
        """Return an id string to identify this endpoint over multiple runs."""
        return f"unknown://{self.config['path']}"

    def _prepare(self) -> None:
        """Called after endpoint creation for additional checks."""
        pass

    def _resolve(self, relative_path) -> Path:
        """Join a record path to the endpoint root, refusing to escape it."""
        relative = Path(relative_path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"{relative_path!r} is not a root-relative path")
        return self.config["path"] / relative
