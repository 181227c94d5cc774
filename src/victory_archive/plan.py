"""Backup plans: endpoints plus the ordered ledger of discovered batches.

A plan is persisted as a small YAML manifest ``<root>/<name>.yaml``::

    name: Home
    path: /mnt/backup/meta
    sources: [/home/alex]
    destinations: [/mnt/backup/home]
    batches: [Home_0, Home_1]

Endpoints are stored by identifier and rebuilt with ``choose_endpoint``
on load. Batch files live in ``<root>/.vbatches/``.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from filelock import FileLock

from . import BATCH_DIR_NAME, batch_file_name, plan_file_name
from .__util__ import PlanError
from .core.executor import Executor, ExecutorResults
from .endpoint import Endpoint, choose_endpoint


@dataclass
class SavedPlan:
    """Plain manifest content, before endpoints are rebuilt."""

    name: str
    path: str
    sources: list[str] = field(default_factory=list)
    destinations: list[str] = field(default_factory=list)
    batches: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "sources": list(self.sources),
            "destinations": list(self.destinations),
            "batches": list(self.batches),
        }


def _string_list(data: dict[str, Any], key: str, manifest: Path) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise PlanError(f"Manifest {manifest}: '{key}' must be a list of strings")
    return value


class BackupPlan:
    """A named backup job.

    ``sources`` and ``destinations`` accept any number of endpoints, but
    replay only copies from ``sources[0]`` to ``destinations[0]``.
    ``batches`` is the ledger written by discovery.
    """

    def __init__(
        self,
        name: str,
        path: Optional[Path | str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.name = name
        self.path = Path(path) if path is not None else Path(".")
        self.sources: list[Endpoint] = []
        self.destinations: list[Endpoint] = []
        self.batches: list[str] = []
        self.logger = logger or logging.getLogger(__name__)

    def __repr__(self) -> str:
        return (
            f"BackupPlan(name={self.name!r}, path={str(self.path)!r}, "
            f"sources={len(self.sources)}, destinations={len(self.destinations)}, "
            f"batches={len(self.batches)})"
        )

    def add_source(self, source: Endpoint) -> None:
        self.sources.append(source)

    def add_destination(self, destination: Endpoint) -> None:
        self.destinations.append(destination)

    def batch_dir(self) -> Path:
        return self.path / BATCH_DIR_NAME

    def batch_path(self, batch_name: str) -> Path:
        return self.batch_dir() / batch_file_name(batch_name)

    def manifest_path(self) -> Path:
        return self.path / plan_file_name(self.name)

    def to_saved(self) -> SavedPlan:
        return SavedPlan(
            name=self.name,
            path=str(self.path),
            sources=[s.get_name() for s in self.sources],
            destinations=[d.get_name() for d in self.destinations],
            batches=list(self.batches),
        )

    def save_plan(self, directory: Path | str) -> Path:
        """Write the manifest into ``directory`` and make it the plan root.

        Returns:
            Path of the written manifest.

        Raises:
            PlanError: The directory or the manifest cannot be written.
        """
        directory = Path(directory).expanduser().resolve()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PlanError(f"Cannot create plan directory {directory}: {e}") from e
        self.path = directory

        manifest = self.manifest_path()
        content = yaml.safe_dump(self.to_saved().to_dict(), sort_keys=False)
        lock_path = directory / f".{manifest.name}.lock"
        try:
            with FileLock(lock_path):
                manifest.write_text(content, encoding="utf-8")
        except OSError as e:
            raise PlanError(f"Cannot write plan manifest {manifest}: {e}") from e

        self.logger.debug("Saved plan %s to %s", self.name, manifest)
        return manifest

    @staticmethod
    def load_saved(manifest: Path | str) -> SavedPlan:
        """Read a manifest without instantiating any endpoint.

        Raises:
            PlanError: The manifest is missing, unreadable, or malformed.
        """
        manifest = Path(manifest)
        try:
            data = yaml.safe_load(manifest.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise PlanError(f"Plan manifest not found: {manifest}") from e
        except OSError as e:
            raise PlanError(f"Cannot read plan manifest {manifest}: {e}") from e
        except yaml.YAMLError as e:
            raise PlanError(f"Invalid plan manifest {manifest}: {e}") from e

        if not isinstance(data, dict):
            raise PlanError(f"Invalid plan manifest {manifest}: not a mapping")
        for key in ("name", "path"):
            if not isinstance(data.get(key), str):
                raise PlanError(f"Manifest {manifest}: missing '{key}'")

        return SavedPlan(
            name=data["name"],
            path=data["path"],
            sources=_string_list(data, "sources", manifest),
            destinations=_string_list(data, "destinations", manifest),
            batches=_string_list(data, "batches", manifest),
        )

    @classmethod
    def from_saved(
        cls, saved: SavedPlan, logger: Optional[logging.Logger] = None
    ) -> "BackupPlan":
        """Rebuild a plan and fresh endpoints from manifest content.

        Raises:
            PlanError: An endpoint identifier is not understood.
        """
        plan = cls(saved.name, path=saved.path, logger=logger)
        try:
            for spec in saved.sources:
                plan.add_source(choose_endpoint(spec))
            for spec in saved.destinations:
                plan.add_destination(choose_endpoint(spec))
        except ValueError as e:
            raise PlanError(f"Plan {saved.name!r}: {e}") from e
        plan.batches = list(saved.batches)
        return plan

    @classmethod
    def load(
        cls, manifest: Path | str, logger: Optional[logging.Logger] = None
    ) -> "BackupPlan":
        """``load_saved`` followed by ``from_saved``."""
        return cls.from_saved(cls.load_saved(manifest), logger=logger)

    def discover(self, batch_size: int) -> ExecutorResults:
        """See ``Executor.discover``."""
        return Executor.discover(self, batch_size)

    def process_batch(self, batch_name: str) -> ExecutorResults:
        """See ``Executor.process_batch``."""
        return Executor.process_batch(self, batch_name)

    def run(self) -> ExecutorResults:
        """See ``Executor.run``."""
        return Executor.run(self)
