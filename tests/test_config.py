"""Tests for YAML configuration loading."""

import pytest

from scanner_registration.utils.config import AppConfig, load_config


def test_default_config_file():
    cfg = load_config(None)  # Load config/default.yaml

    assert cfg.alignment.min_overlap == 12
    assert cfg.parallel.enabled is False
    assert cfg.parallel.n_workers is None
    assert cfg.logging.level == "INFO"
    assert cfg.paths.input_file is None


def test_missing_file_falls_back_to_defaults(tmp_path):
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg == AppConfig()


def test_missing_file_can_be_an_error(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml", allow_missing=False)


def test_partial_yaml_overrides(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text(
        "alignment:\n  min_overlap: 6\nparallel:\n  enabled: true\n  n_workers: 3\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.alignment.min_overlap == 6
    assert cfg.parallel.enabled is True
    assert cfg.parallel.n_workers == 3
    assert cfg.logging.level == "INFO"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


@pytest.mark.parametrize(
    "content",
    [
        "alignment:\n  min_overlap: 1\n",
        "logging:\n  level: LOUD\n",
        "parallel:\n  enabled: maybe\n",
    ],
)
def test_invalid_yaml_raises_value_error(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)
