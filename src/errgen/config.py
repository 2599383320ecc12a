from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from errgen.emit.common import HeaderContext
from errgen.errors import ConfigError


@dataclass
class GeneratorConfig:
    extension: str = "h"
    info_type: str = "heron::error::error_info_t"
    count_type: str = "sp_uint32"
    sentinel: str = "dummy error code"
    banner_lines: tuple[str, ...] = ()
    emit_label: bool = False
    timestamp: str | None = None
    program: str = "errgen"

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> GeneratorConfig:
        known = {f.name for f in fields(GeneratorConfig)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        banner = payload.get("banner_lines") or ()
        if isinstance(banner, str):
            banner = banner.splitlines()
        return GeneratorConfig(
            extension=str(payload.get("extension", "h")).lstrip("."),
            info_type=str(payload.get("info_type", "heron::error::error_info_t")),
            count_type=str(payload.get("count_type", "sp_uint32")),
            sentinel=str(payload.get("sentinel", "dummy error code")),
            banner_lines=tuple(str(line) for line in banner),
            emit_label=bool(payload.get("emit_label", False)),
            timestamp=str(payload["timestamp"]) if payload.get("timestamp") else None,
            program=str(payload.get("program", "errgen")),
        )

    def header_context(self, source: str) -> HeaderContext:
        ctx = HeaderContext(
            source=source,
            program=self.program,
            info_type=self.info_type,
            count_type=self.count_type,
            sentinel=self.sentinel,
            banner_lines=self.banner_lines,
            emit_label=self.emit_label,
        )
        if self.timestamp:
            ctx.timestamp = self.timestamp
        return ctx


def load_config(path: Path) -> GeneratorConfig:
    """Load a YAML (.yml/.yaml) or JSON config file."""
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigError(f"Couldn't open config {path}: {exc.strerror or exc}") from exc
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return GeneratorConfig.from_mapping(payload)
