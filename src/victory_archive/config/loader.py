"""TOML configuration loading and validation.

Handles config file discovery, parsing, and validation with helpful error messages.
"""

import tomllib
from pathlib import Path
from typing import Any

from .schema import DEFAULT_BATCH_SIZE, Config, GlobalConfig, PlanConfig


class ConfigError(Exception):
    """Configuration loading or validation error."""

    pass


# Config file search paths in priority order
CONFIG_PATHS = [
    Path.home() / ".config" / "victory-archive" / "config.toml",
    Path("/etc/victory-archive/config.toml"),
]


def find_config_file(explicit_path: str | None = None) -> Path | None:
    """Find configuration file.

    Args:
        explicit_path: Explicitly specified config path (highest priority)

    Returns:
        Path to config file, or None if not found
    """
    if explicit_path:
        path = Path(explicit_path)
        if path.exists():
            return path
        raise ConfigError(f"Config file not found: {explicit_path}")

    for path in CONFIG_PATHS:
        if path.exists():
            return path

    return None


def _parse_batch_size(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{where}: batch_size must be a positive integer")
    return value


def _parse_endpoints(data: dict[str, Any], key: str, where: str) -> list[str]:
    value = data.get(key, [])
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{where}: '{key}' must be a list of paths")
    return value


def _parse_plan(data: dict[str, Any]) -> PlanConfig:
    """Parse plan configuration from dict."""
    if "name" not in data:
        raise ConfigError("Plan missing required 'name' field")
    where = f"Plan '{data['name']}'"

    sources = _parse_endpoints(data, "sources", where)
    if not sources:
        raise ConfigError(f"{where} missing required 'sources' field")

    batch_size = None
    if "batch_size" in data:
        batch_size = _parse_batch_size(data["batch_size"], where)

    return PlanConfig(
        name=str(data["name"]),
        sources=sources,
        destinations=_parse_endpoints(data, "destinations", where),
        batch_size=batch_size,
        plan_dir=data.get("plan_dir"),
    )


def _parse_global(data: dict[str, Any]) -> GlobalConfig:
    """Parse global configuration from dict."""
    return GlobalConfig(
        batch_size=_parse_batch_size(
            data.get("batch_size", DEFAULT_BATCH_SIZE), "[global]"
        ),
        plan_dir=data.get("plan_dir", "~/.victory-archive"),
        log_file=data.get("log_file"),
        quiet=data.get("quiet", False),
        verbose=data.get("verbose", False),
    )


def _validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    if not config.plans:
        warnings.append("No plans configured")

    for plan in config.plans:
        if not plan.destinations:
            warnings.append(f"Plan '{plan.name}' has no destinations configured")
        if len(plan.sources) > 1 or len(plan.destinations) > 1:
            warnings.append(
                f"Plan '{plan.name}' lists several endpoints; "
                "only the first source and destination are copied"
            )

    # Check for duplicate plan names
    names = [p.name for p in config.plans]
    if len(names) != len(set(names)):
        warnings.append("Duplicate plan names detected")

    return warnings


def load_config(path: Path | str) -> tuple[Config, list[str]]:
    """Load and validate configuration from TOML file.

    Args:
        path: Path to configuration file

    Returns:
        Tuple of (Config object, list of warnings)

    Raises:
        ConfigError: If config is invalid or cannot be parsed
    """
    path = Path(path)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}")

    global_config = _parse_global(data.get("global", {}))
    plans = [_parse_plan(plan_data) for plan_data in data.get("plans", [])]

    config = Config(global_config=global_config, plans=plans)

    # Validate and collect warnings
    warnings = _validate_config(config)

    return config, warnings


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# victory-archive configuration
# See documentation for full options

[global]
batch_size = 10000              # Files per discovered batch
plan_dir = "~/.victory-archive" # Where plan manifests and batches live
# log_file = "/var/log/victory-archive.log"

# Home directory backup
[[plans]]
name = "Home"
sources = ["/home/alex"]
destinations = ["/mnt/backup/home"]

# Project archive with its own batch size and plan directory
# [[plans]]
# name = "Projects"
# sources = ["/srv/projects"]
# destinations = ["/mnt/backup/projects"]
# batch_size = 500
# plan_dir = "/mnt/backup/meta"
"""
