"""victory-archive: victory_archive/__init__.py."""

__version__ = "0.3.0"

BATCH_DIR_NAME = ".vbatches"
BATCH_SUFFIX = ".vbak_batch"
PLAN_SUFFIX = ".yaml"


def batch_file_name(batch_name: str) -> str:
    """Return the on-disk file name for a batch."""
    return f"{batch_name}{BATCH_SUFFIX}"


def plan_file_name(plan_name: str) -> str:
    """Return the on-disk file name for a plan manifest."""
    return f"{plan_name}{PLAN_SUFFIX}"
