"""
processors.py

Responsibility: Batch entry points that rewrite files for a release version.

- `process_version_files`: rewrite the generated content after inline markers (in place)
- `process_template_files`: render whole `.tpl` files into their output paths
- `process_update_files`: replace the first line matching a substring (in place)

Files are handled one at a time, in order. Missing files are logged and skipped;
any other read failure, and any write or verification failure, aborts the batch
with ProcessingError.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from release_boss.config_parser import FileUpdateSpec, parse_update_specs
from release_boss.content_source import DEFAULT_RELEASE_BRANCH, ContentSource
from release_boss.markers import rewrite_lines
from release_boss.renderer import RenderError, Version, read_text, transform_template_file, write_text

logger = logging.getLogger(__name__)


class ProcessingError(RuntimeError):
    pass


def _as_version(version: str | Version) -> Version:
    return version if isinstance(version, Version) else Version.parse(version)


def _fetch(src: ContentSource, path: str) -> str | None:
    try:
        return src.fetch(path)
    except OSError as e:
        logger.error("Failed reading %s: %s", path, e)
        raise ProcessingError(f"Failed reading file: {path}") from e


def _write_and_verify(path: str, content: str) -> None:
    try:
        write_text(path, content)
        verify = read_text(path)
    except OSError as e:
        logger.error("Failed saving %s: %s", path, e)
        raise ProcessingError(f"Failed writing file: {path}") from e
    logger.debug("Verification: %s is %d bytes after save", path, len(verify))


def process_version_files(
    files: Iterable[str],
    version: str | Version,
    *,
    source: ContentSource | None = None,
    release_branch: str = DEFAULT_RELEASE_BRANCH,
) -> list[str]:
    """
    Rewrite inline `%%release-boss:` markers in each file.

    Returns the absolute paths of the files written.
    """
    files = list(files)
    v = _as_version(version)
    src = source or ContentSource.from_env(release_branch)
    processed: list[str] = []

    logger.info("Processing %d version file(s) with version %s", len(files), v.version)
    logger.debug("Parsed version parts: major=%s, minor=%s, patch=%s", v.major, v.minor, v.patch)

    for file in files:
        logger.info("Processing version file: %s", file)
        content = _fetch(src, file)
        if content is None:
            logger.error("File does not exist on %s branch or locally, skipping: %s", src.release_branch, file)
            continue

        lines = content.split("\n")
        output = rewrite_lines(lines, v, source=file)
        _write_and_verify(file, "\n".join(output))

        abs_path = str(Path(file).resolve())
        processed.append(abs_path)
        logger.info("Updated version references in %s", abs_path)

    return processed


def process_template_files(files: Iterable[str], version: str | Version) -> list[str]:
    """
    Render each template file to its output path. Returns the absolute output paths.
    """
    files = list(files)
    v = _as_version(version)
    generated: list[str] = []

    logger.info("Processing %d template file(s) with version %s", len(files), v.version)

    for template_file in files:
        try:
            out = transform_template_file(template_file, v)
        except FileNotFoundError:
            logger.error("Template file does not exist, skipping: %s", template_file)
            continue
        except OSError as e:
            logger.error("Failed reading template %s: %s", template_file, e)
            raise ProcessingError(f"Failed reading file: {template_file}") from e
        except RenderError as e:
            logger.error("%s", e)
            raise ProcessingError(str(e)) from e
        generated.append(out)
        logger.info("Processed template file: %s -> %s", template_file, out)

    return generated


def update_line(lines: list[str], find_line: str, replacement: str) -> int | None:
    """
    Replace the first line containing `find_line`. Returns its index, or None.
    """
    for i, line in enumerate(lines):
        if find_line in line:
            lines[i] = replacement
            return i
    return None


def process_update_files(
    specs: Iterable[FileUpdateSpec | dict[str, Any]] | None,
    version: str | Version,
    *,
    source: ContentSource | None = None,
    release_branch: str = DEFAULT_RELEASE_BRANCH,
) -> list[str]:
    """
    Apply line replacements. Returns the paths (as given) of the files written.
    """
    updates = parse_update_specs(list(specs) if specs else [])
    if not updates:
        logger.info("No update files to process")
        return []

    v = _as_version(version)
    src = source or ContentSource.from_env(release_branch)
    processed: list[str] = []

    logger.info("Processing %d update file(s) with version %s", len(updates), v.version)

    for spec in updates:
        logger.info("Processing update file: %s", spec.file)
        content = _fetch(src, spec.file)
        if content is None:
            logger.info("%s doesn't exist, starting from empty content", spec.file)
            content = ""

        replacement = v.render(spec.replace_line)
        lines = content.split("\n")
        index = update_line(lines, spec.find_line, replacement)
        if index is None:
            logger.warning("Could not find line containing %r in %s", spec.find_line, spec.file)
            continue
        logger.debug("Replaced line %d of %s with: %s", index + 1, spec.file, replacement)

        _write_and_verify(spec.file, "\n".join(lines))
        processed.append(spec.file)
        logger.info("Updated %s with new version information", spec.file)

    return processed
