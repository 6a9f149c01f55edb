# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from site_mapper.config import MapperConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com/\nworkers: 3", ".yaml", None),
        (json.dumps({"base_url": "http://example.com", "workers": 3}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yml", TypeError),
        ("base_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, MapperConfig)
        assert cfg.base_url == "http://example.com"
        assert cfg.workers == 3


def test_defaults():
    cfg = MapperConfig(base_url="https://example.com")
    assert cfg.idle_timeout == 5.0
    assert cfg.workers == 20
    assert cfg.queue_size == 1000
    assert cfg.completion == "idle"
    assert cfg.extractor == "regex"


def test_overrides_win_and_none_is_ignored(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: http://a.test\nidle_timeout: 9\nworkers: 4", ".yaml")

    cfg = load_config(cfg_path, base_url="http://b.test", idle_timeout=None, workers=2)

    assert cfg.base_url == "http://b.test"
    assert cfg.idle_timeout == 9
    assert cfg.workers == 2


def test_missing_default_file_means_empty_mapping(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None, base_url="http://example.com")
    assert cfg.base_url == "http://example.com"


def test_default_file_is_used(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "site_mapper.yaml").write_text("base_url: http://d.test\nworkers: 7", encoding="utf-8")

    cfg = load_config(None)

    assert cfg.workers == 7


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "field,value",
    [
        ("base_url", "example.com"),
        ("base_url", "ftp://example.com"),
        ("idle_timeout", 0),
        ("workers", 0),
        ("completion", "sometimes"),
        ("extractor", "lxml"),
        ("unknown", 1),
    ],
)
def test_invalid_values(field, value):
    data = {"base_url": "http://example.com", field: value}
    with pytest.raises(ValidationError):
        MapperConfig(**data)


def test_config_is_frozen():
    cfg = MapperConfig(base_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.workers = 3
