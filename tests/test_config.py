from pathlib import Path
import pytest
from pydantic import ValidationError
from puml_ld.config import DEFAULT_SHAPES_DIR, ServiceConfig


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "SHAPES_DIR", "LOG_LEVEL", "LOG_DIR"):
        monkeypatch.delenv(f"PUML_LD_{name}", raising=False)
    config = ServiceConfig.from_env()

    assert config.port == 4567
    assert config.host == "0.0.0.0"
    assert config.shapes_dir == DEFAULT_SHAPES_DIR
    assert config.log_dir is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PUML_LD_PORT", "8080")
    monkeypatch.setenv("PUML_LD_LOG_LEVEL", "debug")
    monkeypatch.setenv("PUML_LD_SHAPES_DIR", str(tmp_path))
    config = ServiceConfig.from_env()

    assert config.port == 8080
    assert config.log_level == "DEBUG"
    assert config.shapes_dir == Path(tmp_path)


def test_invalid_values(monkeypatch):
    monkeypatch.setenv("PUML_LD_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        ServiceConfig.from_env()
    with pytest.raises(ValidationError):
        ServiceConfig(port=70000)
