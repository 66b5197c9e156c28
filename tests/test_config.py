"""Tests for the config file."""

from pathlib import PurePosixPath

import pytest

from zfs_undelete.errors import ConfigError
from zfs_undelete.utils.config import Config, get_config_file, parse_config_text


def test_parse_config_text():
    """Test comments, blank lines and whitespace."""
    text = (
        "# listing command\n"
        "\n"
        "  LsCommand = ls -la   # trailing comment\n"
        "not a pair\n"
        "VersionRepresentative=newest\n"
    )
    assert parse_config_text(text) == {"LsCommand": "ls -la", "VersionRepresentative": "newest"}


def test_parse_config_duplicate_key():
    """Test that a key may appear only once."""
    with pytest.raises(ConfigError, match="duplicate key"):
        parse_config_text("LsCommand = ls\nLsCommand = exa\n")


def test_load_missing_file_uses_defaults(tmp_path):
    """Test that no config file means default settings."""
    config = Config.load(tmp_path / "missing.conf")

    assert config.ls_command == "ls -l"
    assert config.representative == "oldest"
    assert config.snapshot_dir == PurePosixPath(".zfs/snapshot")


def test_load_file(tmp_path):
    """Test reading values from disk."""
    config_file = tmp_path / "zfs-undelete.conf"
    config_file.write_text("LsCommand = stat\nSnapshotDir = .snapshots\nUnknownKey = 1\n")

    config = Config.load(config_file)

    assert config.ls_command == "stat"
    assert config.snapshot_dir == PurePosixPath(".snapshots")


def test_empty_ls_command(tmp_path):
    """Test that LsCommand must not be empty."""
    config_file = tmp_path / "zfs-undelete.conf"
    config_file.write_text("LsCommand =\n")

    with pytest.raises(ConfigError, match="LsCommand"):
        Config.load(config_file)


def test_invalid_values():
    """Test sanity checks on representative and snapshot dir."""
    with pytest.raises(ConfigError):
        Config(representative="middle")
    with pytest.raises(ConfigError):
        Config(snapshot_dir=PurePosixPath("/abs/snapshots"))
    with pytest.raises(ConfigError):
        Config(snapshot_dir=PurePosixPath("../elsewhere"))


def test_config_file_location(monkeypatch, tmp_path):
    """Test XDG_CONFIG_HOME and the ~/.config fallback."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_config_file() == tmp_path / "zfs-undelete.conf"

    monkeypatch.delenv("XDG_CONFIG_HOME")
    monkeypatch.setenv("HOME", str(tmp_path))
    assert get_config_file() == tmp_path / ".config" / "zfs-undelete.conf"
