"""
config_parser.py

Responsibility: Load the release-boss configuration into a deterministic, typed model.

The configuration is a YAML mapping (JSON works too, being YAML):

    release_branch: release
    version_files:
      - src/pkg/__init__.py
    template_files:
      - deploy/values.tpl.yaml
    update_files:
      - file: README.md
        findLine: "pip install pkg=="
        replaceLine: "pip install pkg=={{version}}"

Update entries are validated once, here; invalid ones are dropped and never reach
the processors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import yaml

from release_boss.content_source import DEFAULT_RELEASE_BRANCH

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class FileUpdateSpec:
    """Replace the first line of `file` containing `find_line` with rendered `replace_line`."""

    file: str
    find_line: str
    replace_line: str


@dataclass(frozen=True)
class ReleaseConfig:
    release_branch: str = DEFAULT_RELEASE_BRANCH
    version_files: tuple[str, ...] = ()
    template_files: tuple[str, ...] = ()
    update_files: tuple[FileUpdateSpec, ...] = ()


def _pick(entry: dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = entry.get(key)
        if value:
            return str(value)
    return ""


def _parse_update_entry(entry: Any) -> FileUpdateSpec | None:
    if isinstance(entry, FileUpdateSpec):
        return entry
    if not isinstance(entry, dict):
        return None
    file = _pick(entry, "file")
    find_line = _pick(entry, "findLine", "find_line")
    replace_line = _pick(entry, "replaceLine", "replace_line")
    if not (file and find_line and replace_line):
        return None
    return FileUpdateSpec(file=file, find_line=find_line, replace_line=replace_line)


def parse_update_specs(raw: Any) -> list[FileUpdateSpec]:
    """
    Validate update entries. Accepts a list of mappings/FileUpdateSpec, or a YAML/JSON
    string holding such a list (the shape of a GitHub Action input).
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError("`update_files` is not valid YAML/JSON.") from e
        if raw is None:
            return []
    if not isinstance(raw, list):
        raise ConfigError("`update_files` must be a list when provided.")

    specs: list[FileUpdateSpec] = []
    for entry in raw:
        spec = _parse_update_entry(entry)
        if spec is None:
            logger.info("Skipping invalid update file config: %r", entry)
            continue
        specs.append(spec)
    return specs


def _path_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    raw = data.get(key) or []
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ConfigError(f"`{key}` must be a list of paths when provided.")
    return tuple(str(p).strip() for p in raw if str(p).strip())


def parse_config(data: Any) -> ReleaseConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping/object at the top level.")

    release_branch = str(data.get("release_branch") or data.get("releaseBranch") or DEFAULT_RELEASE_BRANCH).strip()

    return ReleaseConfig(
        release_branch=release_branch or DEFAULT_RELEASE_BRANCH,
        version_files=_path_list(data, "version_files"),
        template_files=_path_list(data, "template_files"),
        update_files=tuple(parse_update_specs(data.get("update_files"))),
    )


def load_config(config_path: str | Path) -> ReleaseConfig:
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    return parse_config(data)


def merge_paths(*groups: Iterable[str]) -> tuple[str, ...]:
    """
    Concatenate path lists, keeping the first occurrence of each path.
    """
    seen: dict[str, None] = {}
    for group in groups:
        for p in group:
            seen.setdefault(p, None)
    return tuple(seen)
