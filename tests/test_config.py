"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from mtojson.config import LoggingConfig, MtojsonConfig, RenderConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for name in (
        "MTOJSON_CONFIG",
        "MTOJSON_MAX_DEPTH",
        "MTOJSON_ENCODING",
        "MTOJSON_DEFAULT_CAPACITY",
        "MTOJSON_LOG_LEVEL",
        "MTOJSON_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    cfg = load_config()
    assert cfg == MtojsonConfig()
    assert cfg.render.max_depth == 256
    assert cfg.render.encoding == "utf-8"
    assert cfg.render.default_capacity == 4096
    assert cfg.logging.level == "WARNING"
    assert cfg.logging.json_logs is False


def test_missing_file_is_empty_config(tmp_path):
    cfg = load_config(str(tmp_path / "nope.yaml"))
    assert cfg.render.max_depth == 256


def test_yaml_file(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("render:\n  max_depth: 8\n  encoding: latin-1\nlogging:\n  level: DEBUG\n  json: true\n")
    cfg = load_config(str(path))
    assert cfg.render.max_depth == 8
    assert cfg.render.encoding == "iso8859-1"
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.json_logs is True


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "other.yaml"
    path.write_text("render:\n  default_capacity: 64\n")
    monkeypatch.setenv("MTOJSON_CONFIG", str(path))
    assert load_config().render.default_capacity == 64


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("render:\n  max_depth: 8\n")
    monkeypatch.setenv("MTOJSON_MAX_DEPTH", "16")
    monkeypatch.setenv("MTOJSON_DEFAULT_CAPACITY", "128")
    monkeypatch.setenv("MTOJSON_LOG_LEVEL", "INFO")
    monkeypatch.setenv("MTOJSON_LOG_JSON", "yes")
    cfg = load_config(str(path))
    assert cfg.render.max_depth == 16
    assert cfg.render.default_capacity == 128
    assert cfg.logging.level == "INFO"
    assert cfg.logging.json_logs is True


def test_non_mapping_root(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_unknown_encoding():
    with pytest.raises(ValidationError):
        RenderConfig(encoding="no-such-codec")


def test_max_depth_must_be_positive():
    with pytest.raises(ValidationError):
        RenderConfig(max_depth=0)


def test_logging_alias():
    assert LoggingConfig(json=True).json_logs is True
    assert LoggingConfig(json_logs=True).json_logs is True


@pytest.mark.parametrize("encoding", ["utf-16", "utf-32", "utf-8-sig", "cp500", "hex"])
def test_encoding_must_be_ascii_compatible(encoding):
    with pytest.raises(ValidationError):
        RenderConfig(encoding=encoding)


@pytest.mark.parametrize("encoding,name", [("ascii", "ascii"), ("latin-1", "iso8859-1"), ("UTF8", "utf-8")])
def test_ascii_compatible_encodings(encoding, name):
    assert RenderConfig(encoding=encoding).encoding == name


def test_env_encoding_rejected(monkeypatch):
    monkeypatch.setenv("MTOJSON_ENCODING", "utf-16")
    with pytest.raises(ValidationError):
        load_config()
