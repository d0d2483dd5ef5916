from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
import json
import os

import yaml


PACKAGE_CONTENT_DIR = Path(__file__).parent / "content"


@dataclass(frozen=True)
class ContentConfig:
    content_roots: list[str] = field(default_factory=lambda: [str(PACKAGE_CONTENT_DIR)])
    file_extensions: list[str] = field(default_factory=lambda: [".md", ".markdown"])


@dataclass(frozen=True)
class LintConfig:
    required_fields: list[str] = field(
        default_factory=lambda: ["Title", "Date", "Category", "Slug"]
    )
    allowed_schemes: list[str] = field(default_factory=lambda: ["http", "https", "mailto"])
    allow_relative_links: bool = True
    strict: bool = False


@dataclass(frozen=True)
class OutputConfig:
    export_path: str = "build/documents.jsonl"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    content: ContentConfig = field(default_factory=ContentConfig)
    lint: LintConfig = field(default_factory=LintConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    "content": ContentConfig,
    "lint": LintConfig,
    "output": OutputConfig,
    "logging": LoggingConfig,
}


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _from_dict(data: dict[str, Any]) -> AppConfig:
    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown config section(s): {', '.join(sorted(unknown))}")

    sections = {}
    for name, section_cls in _SECTIONS.items():
        values = data.get(name) or {}
        if not isinstance(values, dict):
            raise ValueError(f"Config section '{name}' must be a mapping")
        allowed = {f.name for f in fields(section_cls)}
        extra = set(values) - allowed
        if extra:
            raise ValueError(f"Unknown key(s) in '{name}': {', '.join(sorted(extra))}")
        sections[name] = section_cls(**values)
    return AppConfig(**sections)


def load_config(path: str | Path | None) -> AppConfig:
    if path is None:
        return apply_env_overrides(AppConfig())

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".json"}:
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")

    # Relative paths are taken relative to the config file
    content = data.get("content")
    if isinstance(content, dict) and "content_roots" in content:
        roots = content["content_roots"]
        if not isinstance(roots, list) or not all(isinstance(root, str) for root in roots):
            raise ValueError("'content.content_roots' must be a list of paths")
        content["content_roots"] = [str(resolve_path(root, path.parent)) for root in roots]

    output = data.get("output")
    if isinstance(output, dict) and "export_path" in output:
        if not isinstance(output["export_path"], str):
            raise ValueError("'output.export_path' must be a path")
        output["export_path"] = str(resolve_path(output["export_path"], path.parent))

    defaults = asdict(AppConfig())
    merged = _coalesce(defaults, data)
    return apply_env_overrides(_from_dict(merged))


def apply_env_overrides(config: AppConfig) -> AppConfig:
    env_level = os.getenv("BLOG_LOG_LEVEL")
    if env_level:
        return AppConfig(
            content=config.content,
            lint=config.lint,
            output=config.output,
            logging=LoggingConfig(level=env_level),
        )
    return config


def resolve_path(value: str, base: Path | None = None) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    base = base or Path.cwd()
    return (base / path).resolve()
