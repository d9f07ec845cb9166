from __future__ import annotations

import json
from pathlib import Path

from snapi.core.config import load_config


def test_defaults_when_file_missing(isolate_config: Path) -> None:
    config, meta = load_config()

    assert meta.path == isolate_config
    assert meta.file_loaded is False
    assert meta.error is None
    assert config.strict_types is False
    assert config.log_level == "INFO"
    assert config.capability_modules == []


def test_loads_toml_file(tmp_path: Path) -> None:
    cfg = tmp_path / "snapi.toml"
    cfg.write_text(
        'log_level = "debug"\nstrict_types = true\ncapability_modules = ["adventure_capabilities"]\n',
        encoding="utf-8",
    )

    config, meta = load_config(config_path=cfg)

    assert meta.file_loaded is True
    assert config.log_level == "DEBUG"
    assert config.strict_types is True
    assert config.capability_modules == ["adventure_capabilities"]


def test_loads_json_file(tmp_path: Path) -> None:
    cfg = tmp_path / "snapi.json"
    cfg.write_text(json.dumps({"schema_indent": 4}), encoding="utf-8")

    config, _ = load_config(config_path=cfg)

    assert config.schema_indent == 4


def test_env_overrides_file(tmp_path: Path) -> None:
    cfg = tmp_path / "snapi.toml"
    cfg.write_text("strict_types = false\n", encoding="utf-8")

    config, meta = load_config(config_path=cfg, env={"SNAPI_STRICT_TYPES": "true"})

    assert config.strict_types is True
    assert meta.env_overrides == {"strict_types"}


def test_syntax_error_falls_back_to_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "snapi.toml"
    cfg.write_text("strict_types = [", encoding="utf-8")

    config, meta = load_config(config_path=cfg)

    assert meta.error is not None
    assert "Syntax error" in meta.error
    assert config.strict_types is False
    assert config.schema_indent == 2


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "snapi.toml"
    cfg.write_text('log_level = "loud"\n', encoding="utf-8")

    config, meta = load_config(config_path=cfg)

    assert meta.error is not None
    assert config.log_level == "INFO"
