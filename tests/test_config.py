"""Tests for YAML config loading."""

import pytest

from ggs.config import CONFIG_FILENAME, DEFAULT_SKIP, ScanConfig, load_config
from ggs.errors import ConfigError


def test_defaults_when_no_file(tmp_path):
    config = load_config(root=tmp_path)
    assert config == ScanConfig()
    assert config.skip == DEFAULT_SKIP == frozenset()
    assert config.include_hidden is True
    assert config.jobs == 1


def test_explicit_file(tmp_path):
    p = tmp_path / "ggs.yaml"
    p.write_text("git: /usr/local/bin/git\ntimeout: 3\njobs: 4\nskip: [vendor]\ninclude_hidden: true\n")
    config = load_config(p)
    assert config.git == "/usr/local/bin/git"
    assert config.timeout == 3.0
    assert config.jobs == 4
    assert config.skip == frozenset({"vendor"})
    assert config.include_hidden is True


def test_root_file_is_picked_up(tmp_path):
    (tmp_path / CONFIG_FILENAME).write_text("jobs: 8\n")
    assert load_config(root=tmp_path).jobs == 8


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "missing.yaml")


def test_explicit_invalid_yaml_raises(tmp_path):
    p = tmp_path / "bad.yaml"
    p.write_text("jobs: [1, 2\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(p)


@pytest.mark.parametrize("text", ["jobs: 0", "jobs: two", "timeout: -1", "skip: vendor", "include_hidden: maybe", "- a\n- b"])
def test_explicit_bad_values_raise(tmp_path, text):
    p = tmp_path / "bad.yaml"
    p.write_text(text + "\n")
    with pytest.raises(ConfigError):
        load_config(p)


def test_broken_root_file_falls_back_to_defaults(tmp_path, caplog):
    (tmp_path / CONFIG_FILENAME).write_text("jobs: -3\n")
    with caplog.at_level("WARNING", logger="ggs.config"):
        config = load_config(root=tmp_path)
    assert config == ScanConfig()
    assert any("ignoring" in rec.message for rec in caplog.records)


def test_unknown_keys_ignored(tmp_path):
    p = tmp_path / "c.yaml"
    p.write_text("colour: always\njobs: 2\n")
    assert load_config(p).jobs == 2


def test_with_overrides_skips_none():
    config = ScanConfig(jobs=3).with_overrides(jobs=None, timeout=1.5)
    assert config.jobs == 3
    assert config.timeout == 1.5
