"""Discovery and replay of backup plans.

``discover`` pages every source of a plan into batches, persists each batch
and appends its name to the plan ledger. ``run`` replays the ledger in
order, copying each record from the first source to the first destination.
Both passes are sequential; the per-source cursor and the ledger are the
only state carried between iterations.
"""

import logging
import re
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .. import BATCH_SUFFIX, __util__
from ..batch import FileBatch

if TYPE_CHECKING:
    from ..plan import BackupPlan


@dataclass
class ExecutorResults:
    """Counters and timings collected by an executor pass.

    Attributes:
        files: Records discovered, or records written during replay
        batches: Batches produced, or batches processed during replay
        batch_time: Seconds spent building and saving or replaying batches
        total_time: Seconds for the whole pass
        skipped: Records that could not be read or written during replay
    """

    files: int = 0
    batches: int = 0
    batch_time: float = 0.0
    total_time: float = 0.0
    skipped: int = 0

    def __iadd__(self, other: "ExecutorResults") -> "ExecutorResults":
        self.files += other.files
        self.batches += other.batches
        self.batch_time += other.batch_time
        self.total_time += other.total_time
        self.skipped += other.skipped
        return self


class Executor:
    """Stateless driver for the discovery and replay passes."""

    @staticmethod
    def discover(
        plan: "BackupPlan",
        batch_size: int,
        logger: Optional[logging.Logger] = None,
    ) -> ExecutorResults:
        """Enumerate all sources of ``plan`` into persisted batches.

        Each pass starts from an empty ledger with every source cursor
        rewound. Batch files left by an earlier pass of the same plan are
        deleted first. Sources are exhausted one after another; batch names are
        ``<plan>_<index>`` with one index shared by all sources.

        A batch that fails to save is logged and its name is still appended
        to the ledger, so later batch names do not shift.

        Raises:
            ValueError: ``batch_size`` is not positive.
        """
        log = logger or plan.logger
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        total_start = time.monotonic()
        results = ExecutorResults()
        Executor._remove_stale_batches(plan, log)
        plan.batches.clear()

        for source in plan.sources:
            source.reset()
            log.debug("Discovering files in %r", source)
            while True:
                batch_start = time.monotonic()
                batch = FileBatch(f"{plan.name}_{results.batches}")

                try:
                    files = source.list_files_next(batch_size)
                except OSError as e:
                    log.error("list_files_next ERROR on %r: %s", source, e)
                    files = []

                if not files:
                    break

                batch.add_files(files)
                batch_end = time.monotonic()
                results.batches += 1
                results.files += len(batch)

                plan.batches.append(batch.get_name())
                batch_path = plan.batch_path(batch.get_name())
                try:
                    save_size = batch.save_batch(batch_path)
                except __util__.BatchError as e:
                    log.error("save_batch ERROR: %s", e)
                    save_size = 0
                batch_saved = time.monotonic()
                results.batch_time += batch_saved - batch_start

                log.info(
                    "Batch %s: %s files, %s on disk, discovered in %.2fms, "
                    "saved in %.2fms -> %s",
                    batch.get_name(),
                    f"{len(batch):,}",
                    __util__.format_size(save_size),
                    __util__.elapsed_ms(batch_start, batch_end),
                    __util__.elapsed_ms(batch_end, batch_saved),
                    batch_path,
                )

        results.total_time = time.monotonic() - total_start
        log.info(
            "Total time to discover %d batches with %s files: %.0fms",
            results.batches,
            f"{results.files:,}",
            results.total_time * 1000,
        )
        return results

    @staticmethod
    def _remove_stale_batches(plan: "BackupPlan", log: logging.Logger) -> None:
        """Delete the batch files of the current ledger and any other
        ``<plan>_<index>`` batch file in the plan's batch directory."""
        batch_dir = plan.batch_dir()
        pattern = re.compile(rf"{re.escape(plan.name)}_\d+{re.escape(BATCH_SUFFIX)}")
        stale = {plan.batch_path(name) for name in plan.batches}
        if batch_dir.is_dir():
            stale.update(
                entry for entry in batch_dir.iterdir() if pattern.fullmatch(entry.name)
            )

        for path in sorted(stale):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                log.error("Could not remove stale batch %s: %s", path, e)
            else:
                log.debug("Removed stale batch %s", path)

    @staticmethod
    def process_batch(
        plan: "BackupPlan",
        batch_name: str,
        logger: Optional[logging.Logger] = None,
    ) -> ExecutorResults:
        """Copy every record of one persisted batch to the destination.

        Only ``plan.sources[0]`` and ``plan.destinations[0]`` take part.
        Records that fail to read or write are logged and counted as
        skipped.

        Raises:
            PlanError: The plan has no source or no destination.
            BatchError: The batch file cannot be loaded.
        """
        log = logger or plan.logger
        if not plan.sources or not plan.destinations:
            raise __util__.PlanError(
                f"Plan {plan.name!r} needs a source and a destination to run"
            )
        source = plan.sources[0]
        destination = plan.destinations[0]

        batch_path = plan.batch_path(batch_name)
        log.info("Executor: Loading batch: %s", batch_path)
        batch_start = time.monotonic()
        try:
            batch = FileBatch.load_batch(batch_path)
        except __util__.BatchError as e:
            log.error("Executor: Error loading batch: %s", e)
            raise

        written = 0
        skipped = 0
        for record in batch.get_files():
            try:
                source.read_file(record)
            except (OSError, ValueError) as e:
                log.error("Executor: Error reading file %s: %s", record.path, e)
                skipped += 1
                continue

            try:
                destination.write_file(record)
            except (OSError, ValueError) as e:
                log.error("Executor: Error writing file %s: %s", record.path, e)
                skipped += 1
                continue
            written += 1

        elapsed = time.monotonic() - batch_start
        log.info("Wrote %d files in %.4fs", written, elapsed)
        return ExecutorResults(
            files=written,
            batches=1,
            batch_time=elapsed,
            total_time=elapsed,
            skipped=skipped,
        )

    @staticmethod
    def run(
        plan: "BackupPlan", logger: Optional[logging.Logger] = None
    ) -> ExecutorResults:
        """Replay every batch in the plan ledger, in order.

        The first batch that cannot be loaded aborts the run.
        """
        log = logger or plan.logger
        log.debug("Executor: Running backup plan %s", plan.name)
        results = ExecutorResults()
        for batch_name in plan.batches:
            try:
                results += Executor.process_batch(plan, batch_name, logger=log)
            except __util__.AbortError as e:
                log.error("Executor: Error processing batch %s: %s", batch_name, e)
                raise

        log.info(
            "Executor: Total time to process %d batches with %s files: %.0fms",
            results.batches,
            f"{results.files:,}",
            results.total_time * 1000,
        )
        return results
