"""Pytest configuration and shared fixtures."""

import pytest

from victory_archive.core import file_generates_folder
from victory_archive.endpoint import LocalEndpoint
from victory_archive.plan import BackupPlan


@pytest.fixture
def source_dir(tmp_path):
    """Create a flat source directory with 25 small files."""
    return file_generates_folder(tmp_path / "source", 100, 25)


@pytest.fixture
def nested_source_dir(tmp_path):
    """Create a source tree with nested directories and an empty one."""
    root = tmp_path / "nested"
    (root / "b" / "deep").mkdir(parents=True)
    (root / "a").mkdir()
    (root / "empty").mkdir()
    (root / "z.txt").write_bytes(b"zzz")
    (root / "a" / "one.bin").write_bytes(b"\x00\x01\x02")
    (root / "b" / "two.txt").write_text("two")
    (root / "b" / "deep" / "three.md").write_text("three")
    return root


@pytest.fixture
def dest_dir(tmp_path):
    """Return a not yet existing destination directory."""
    return tmp_path / "dest"


@pytest.fixture
def meta_dir(tmp_path):
    """Return the directory holding plan manifests and batches."""
    return tmp_path / "meta"


@pytest.fixture
def plan(source_dir, dest_dir, meta_dir):
    """Create a saved plan copying source_dir to dest_dir."""
    plan = BackupPlan("TestPlan")
    plan.add_source(LocalEndpoint(config={"path": source_dir}))
    plan.add_destination(LocalEndpoint(config={"path": dest_dir}))
    plan.save_plan(meta_dir)
    return plan


@pytest.fixture
def sample_config_toml():
    """Return a sample valid TOML configuration string."""
    return """
[global]
batch_size = 250
plan_dir = "/var/lib/victory"
log_file = "/tmp/victory.log"

[[plans]]
name = "Home"
sources = ["/home/alex"]
destinations = ["/mnt/backup/home"]

[[plans]]
name = "Projects"
sources = ["/srv/projects"]
destinations = ["/mnt/backup/projects"]
batch_size = 40
plan_dir = "/mnt/backup/meta"
"""


@pytest.fixture
def minimal_config_toml():
    """Return a minimal valid TOML configuration string."""
    return """
[[plans]]
name = "Home"
sources = ["/home"]
destinations = ["/mnt/backup"]
"""


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def config_file(tmp_config_dir, sample_config_toml):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "config.toml"
    config_path.write_text(sample_config_toml)
    return config_path


@pytest.fixture
def minimal_config_file(tmp_config_dir, minimal_config_toml):
    """Create a temporary config file with minimal content."""
    config_path = tmp_config_dir / "minimal.toml"
    config_path.write_text(minimal_config_toml)
    return config_path
