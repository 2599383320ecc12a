from pathlib import Path

import pytest

from errgen.config import GeneratorConfig, load_config
from errgen.errors import ConfigError


def test_load_yaml_config(tmp_path: Path) -> None:
    path = tmp_path / "errgen.yaml"
    path.write_text(
        "extension: .hpp\n"
        "count_type: uint32_t\n"
        "banner_lines:\n"
        "  - Copyright Example Corp\n"
        "emit_label: true\n"
        "timestamp: 2024-01-01\n"
    )
    cfg = load_config(path)
    assert cfg.extension == "hpp"
    assert cfg.count_type == "uint32_t"
    assert cfg.banner_lines == ("Copyright Example Corp",)
    assert cfg.emit_label is True
    assert cfg.timestamp == "2024-01-01"
    assert cfg.info_type == "heron::error::error_info_t"


def test_load_json_config(tmp_path: Path) -> None:
    path = tmp_path / "errgen.json"
    path.write_text('{"program": "gen-errors", "sentinel": "unknown"}')
    cfg = load_config(path)
    ctx = cfg.header_context("x.dat")
    assert ctx.program == "gen-errors"
    assert ctx.sentinel == "unknown"
    assert ctx.source == "x.dat"


def test_unknown_keys_rejected():
    with pytest.raises(ConfigError):
        GeneratorConfig.from_mapping({"extention": "h"})


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_config(path) == GeneratorConfig()
