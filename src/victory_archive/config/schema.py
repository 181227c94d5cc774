"""Configuration schema definitions using dataclasses.

Defines the structure for TOML configuration with sensible defaults.
"""

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_BATCH_SIZE = 10_000


@dataclass
class PlanConfig:
    """Backup plan configuration.

    Attributes:
        name: Plan name, also the manifest file name and batch name prefix
        sources: Source endpoint identifiers
        destinations: Destination endpoint identifiers
        batch_size: Records per batch (None to use the global default)
        plan_dir: Directory receiving the manifest (None to use the global default)
    """

    name: str
    sources: list[str] = field(default_factory=list)
    destinations: list[str] = field(default_factory=list)
    batch_size: Optional[int] = None
    plan_dir: Optional[str] = None


@dataclass
class GlobalConfig:
    """Global configuration settings.

    Attributes:
        batch_size: Default number of records per batch
        plan_dir: Default directory for plan manifests and batches
        log_file: Path to log file (None for no file logging)
        quiet: Suppress non-essential output
        verbose: Enable verbose output
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    plan_dir: str = "~/.victory-archive"
    log_file: Optional[str] = None
    quiet: bool = False
    verbose: bool = False


@dataclass
class Config:
    """Root configuration object.

    Attributes:
        global_config: Global settings that apply to all plans
        plans: List of plan configurations
    """

    global_config: GlobalConfig = field(default_factory=GlobalConfig)
    plans: list[PlanConfig] = field(default_factory=list)

    def get_plan(self, name: str) -> Optional[PlanConfig]:
        """Return the plan configured under ``name``, if any."""
        for plan in self.plans:
            if plan.name == name:
                return plan
        return None

    def get_effective_batch_size(self, plan: PlanConfig) -> int:
        """Plan-specific batch size overrides the global one."""
        return plan.batch_size or self.global_config.batch_size

    def get_effective_plan_dir(self, plan: PlanConfig) -> str:
        """Plan-specific directory overrides the global one."""
        return plan.plan_dir or self.global_config.plan_dir
