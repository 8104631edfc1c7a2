"""
cli.py

Responsibility: CLI entrypoint for release-boss.

High-level flow (single command `apply`):
1) Load config (optional) and merge CLI overrides -> `ReleaseConfig`
2) Rewrite inline markers in version files
3) Render template files into their output paths
4) Apply line replacements in update files

This module should orchestrate behavior but keep concerns isolated:
- Config parsing: `config_parser.py`
- Content lookup (release branch, then local): `content_source.py`
- File rewriting: `processors.py`
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from release_boss.config_parser import ConfigError, ReleaseConfig, load_config, merge_paths, parse_update_specs
from release_boss.content_source import ContentSource
from release_boss.processors import (
    ProcessingError,
    process_template_files,
    process_update_files,
    process_version_files,
)
from release_boss.renderer import Version

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(message)s"


class CLIError(RuntimeError):
    pass


def _configure_logging(level_name: str | None) -> None:
    name = (level_name or os.environ.get("RELEASE_BOSS_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise CLIError(f"Unknown log level: {name}")
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def _resolve_config(args: argparse.Namespace) -> ReleaseConfig:
    base = load_config(args.config) if args.config else ReleaseConfig()
    return ReleaseConfig(
        release_branch=args.release_branch or base.release_branch,
        version_files=merge_paths(base.version_files, args.version_files),
        template_files=merge_paths(base.template_files, args.template_files),
        update_files=base.update_files + tuple(parse_update_specs(args.update_files)),
    )


def apply_cmd(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    version = Version.parse(args.version)

    if not (config.version_files or config.template_files or config.update_files):
        logger.warning("Nothing to do: no version, template or update files configured")
        return 0

    source = ContentSource.from_env(config.release_branch)

    changed: list[str] = []
    changed += process_version_files(config.version_files, version, source=source)
    changed += process_template_files(config.template_files, version)
    changed += process_update_files(config.update_files, version, source=source)

    for path in changed:
        print(path)
    logger.info("Done: %d file(s) written for version %s", len(changed), version.version)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="release-boss", description="Stamp a release version into project files")
    p.add_argument("--log-level", default=None, help="Log level (default: INFO, or env RELEASE_BOSS_LOG_LEVEL)")
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("apply", help="Rewrite version markers, render templates, update lines")
    a.add_argument("--version", dest="version", required=True, help="Release version, e.g. 1.2.3")
    a.add_argument("--config", default=None, help="Path to a YAML config file")
    a.add_argument(
        "--version-file",
        dest="version_files",
        action="append",
        default=[],
        help="File with %%%%release-boss: ... %%%% markers (repeatable)",
    )
    a.add_argument(
        "--template-file",
        dest="template_files",
        action="append",
        default=[],
        help="Template file to render to its output path (repeatable)",
    )
    a.add_argument(
        "--update-files",
        default=None,
        help="YAML/JSON list of {file, findLine, replaceLine} entries",
    )
    a.add_argument(
        "--release-branch",
        default=None,
        help="Branch to read files from before the local checkout (default: release)",
    )

    a.set_defaults(func=apply_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        _configure_logging(args.log_level)
        return int(args.func(args))
    except (CLIError, ConfigError, ProcessingError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
