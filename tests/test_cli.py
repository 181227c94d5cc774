"""Tests for the command line interface."""

import argparse

import pytest
import yaml

from victory_archive import __version__
from victory_archive.cli import main
from victory_archive.cli.common import (
    add_verbosity_args,
    create_global_parser,
    get_log_level,
)
from victory_archive.cli.dispatcher import create_subcommand_parser
from victory_archive.config import loader
from victory_archive.core import file_generates_folder


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch, tmp_path):
    """Keep real configuration files out of CLI tests."""
    monkeypatch.setattr(loader, "CONFIG_PATHS", [tmp_path / "absent.toml"])


class TestCommon:
    """Tests for shared CLI helpers."""

    def test_global_parser(self):
        """Test the global parser carries verbosity flags."""
        parser = create_global_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.parse_args(["--verbose"]).verbose is True

    def test_verbosity_defaults(self):
        """Test verbosity flags default to off."""
        parser = argparse.ArgumentParser()
        add_verbosity_args(parser)
        args = parser.parse_args([])
        assert (args.verbose, args.quiet, args.debug) == (False, False, False)
        assert args.log_file is None

    @pytest.mark.parametrize(
        "flags,level",
        [
            ([], "INFO"),
            (["-v"], "DEBUG"),
            (["-q"], "WARNING"),
            (["--debug", "-q"], "DEBUG"),
        ],
    )
    def test_get_log_level(self, flags, level):
        """Test log level selection."""
        parser = argparse.ArgumentParser()
        add_verbosity_args(parser)
        assert get_log_level(parser.parse_args(flags)) == level


class TestParser:
    """Tests for the subcommand parser."""

    def test_new_collects_endpoints(self):
        """Test repeated --source and --dest flags."""
        args = create_subcommand_parser().parse_args(
            ["new", "P", "--source", "/a", "--source", "/b", "--dest", "/c"]
        )
        assert args.command == "new"
        assert args.sources == ["/a", "/b"]
        assert args.destinations == ["/c"]

    def test_discover_batch_size(self):
        """Test --batch-size is parsed as an integer."""
        args = create_subcommand_parser().parse_args(
            ["discover", "plan.yaml", "--batch-size", "50"]
        )
        assert args.batch_size == 50

    def test_description(self):
        """Test the help text describes persisted ledgers."""
        description = create_subcommand_parser().description
        assert "persisted discovery ledgers" in description
        assert "resumable" not in description

    def test_version(self, capsys):
        """Test --version prints the version."""
        assert main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self, capsys):
        """Test a missing command prints help and fails."""
        assert main([]) == 1


class TestCommands:
    """Tests for the full new / discover / show / run cycle."""

    def test_full_cycle(self, tmp_path, capsys):
        """Test a plan created on the command line copies every file."""
        source = file_generates_folder(tmp_path / "source", 64, 30)
        dest = tmp_path / "dest"
        meta = tmp_path / "meta"
        manifest = meta / "Cycle.yaml"

        assert main(
            ["new", "Cycle", "--source", str(source), "--dest", str(dest),
             "--plan-dir", str(meta)]
        ) == 0
        assert manifest.is_file()
        assert dest.is_dir()

        assert main(["discover", str(manifest), "--batch-size", "7"]) == 0
        data = yaml.safe_load(manifest.read_text())
        assert data["batches"] == [f"Cycle_{i}" for i in range(5)]

        assert main(["show", str(manifest)]) == 0
        out = capsys.readouterr().out
        assert "Plan: Cycle" in out
        assert "Cycle_4" in out

        assert main(["run", str(manifest)]) == 0
        assert sorted(p.name for p in dest.iterdir()) == sorted(
            p.name for p in source.iterdir()
        )

    def test_new_from_config(self, tmp_path):
        """Test a plan can be created from a configured entry."""
        source = file_generates_folder(tmp_path / "src", 8, 3)
        config = tmp_path / "config.toml"
        config.write_text(
            f'[global]\nbatch_size = 2\n\n[[plans]]\nname = "Cfg"\n'
            f'sources = ["{source}"]\ndestinations = ["{tmp_path / "out"}"]\n'
            f'plan_dir = "{tmp_path / "meta"}"\n'
        )
        assert main(["-c", str(config), "new", "Cfg", "--from-config"]) == 0
        manifest = tmp_path / "meta" / "Cfg.yaml"
        assert manifest.is_file()

        assert main(["-c", str(config), "discover", str(manifest)]) == 0
        assert len(yaml.safe_load(manifest.read_text())["batches"]) == 2

    def test_new_from_unknown_config_plan(self, tmp_path):
        """Test asking for an unconfigured plan fails."""
        assert main(["new", "Ghost", "--from-config"]) == 1

    def test_new_requires_source(self, tmp_path):
        """Test a plan without sources is refused."""
        assert main(["new", "P", "--plan-dir", str(tmp_path / "meta")]) == 1

    def test_invalid_config(self, tmp_path, capsys):
        """Test a broken configuration file fails the command."""
        config = tmp_path / "bad.toml"
        config.write_text("not [ valid")
        assert main(["-c", str(config), "show", "x.yaml"]) == 1
        assert "Configuration error" in capsys.readouterr().out

    def test_show_missing_manifest(self, tmp_path):
        """Test showing a missing manifest fails."""
        assert main(["show", str(tmp_path / "missing.yaml")]) == 1

    def test_run_missing_batch(self, tmp_path):
        """Test run fails when a batch file is gone."""
        source = file_generates_folder(tmp_path / "source", 8, 4)
        meta = tmp_path / "meta"
        main(["new", "P", "--source", str(source), "--dest", str(tmp_path / "d"),
              "--plan-dir", str(meta)])
        main(["discover", str(meta / "P.yaml"), "--batch-size", "2"])
        (meta / ".vbatches" / "P_0.vbak_batch").unlink()
        assert main(["run", str(meta / "P.yaml")]) == 1

    def test_run_without_batches(self, tmp_path):
        """Test run on an undiscovered plan is a no-op."""
        source = file_generates_folder(tmp_path / "source", 8, 2)
        meta = tmp_path / "meta"
        main(["new", "P", "--source", str(source), "--plan-dir", str(meta)])
        assert main(["run", str(meta / "P.yaml")]) == 0

    def test_discover_rejects_bad_batch_size(self, tmp_path):
        """Test a non-positive batch size fails."""
        source = file_generates_folder(tmp_path / "source", 8, 2)
        meta = tmp_path / "meta"
        main(["new", "P", "--source", str(source), "--plan-dir", str(meta)])
        assert main(["discover", str(meta / "P.yaml"), "--batch-size", "0"]) == 1

    def test_make_test_dir(self, tmp_path):
        """Test generating a directory of pattern files."""
        target = tmp_path / "generated"
        assert main(["make-test-dir", str(target), "--count", "4", "--size", "300"]) == 0
        files = sorted(target.iterdir())
        assert [f.name for f in files] == ["file_0", "file_1", "file_2", "file_3"]
        assert all(f.stat().st_size == 300 for f in files)

    def test_config_init(self, tmp_path, capsys):
        """Test writing the example configuration."""
        output = tmp_path / "out" / "config.toml"
        assert main(["config", "init", "-o", str(output)]) == 0
        assert "[[plans]]" in output.read_text()
        assert main(["config", "init", "-o", str(output)]) == 1

    def test_config_validate(self, config_file, capsys):
        """Test validating a configuration file."""
        assert main(["-c", str(config_file), "config", "validate"]) == 0
        assert "Plans: 2" in capsys.readouterr().out
