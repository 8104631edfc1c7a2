"""
markers.py

Responsibility: Find `%%release-boss: ... %%` markers in a file's lines and rewrite
the generated content that follows each one.

A marker is either single-line:

    # %%release-boss: __version__ = "{{version}}" %%
    __version__ = "1.2.3"

or spans several lines, closing at the first `%%` on a later line:

    <!-- %%release-boss:
    Install v{{version}}
    %% -->
    Install v1.2.3

Marker lines are never modified. The lines right after a marker are treated as
the previous render and replaced; how many is inferred from the new render's
length, stopping early at the next marker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from release_boss.renderer import Version

logger = logging.getLogger(__name__)

START_TOKEN = "%%release-boss:"
END_TOKEN = "%%"


@dataclass(frozen=True)
class Marker:
    """Inclusive 0-based line span of the marker syntax plus its template text."""

    start_line: int
    end_line: int
    raw_template: str


def _scan_one(lines: Sequence[str], i: int) -> Marker | None:
    line = lines[i]
    body_start = line.index(START_TOKEN) + len(START_TOKEN)

    end = line.find(END_TOKEN, body_start)
    if end != -1:
        return Marker(i, i, line[body_start:end].strip())

    fragments = [line[body_start:].strip()]
    for j in range(i + 1, len(lines)):
        end = lines[j].find(END_TOKEN)
        if end != -1:
            fragments.append(lines[j][:end].strip())
            return Marker(i, j, "\n".join(fragments).strip())
        fragments.append(lines[j].strip())
    return None


def scan_markers(lines: Sequence[str], *, source: str = "<string>") -> list[Marker]:
    """
    Return markers in line order.

    An unterminated marker is reported and skipped; scanning resumes on the line
    after its start.
    """
    markers: list[Marker] = []
    i = 0
    while i < len(lines):
        if START_TOKEN not in lines[i]:
            i += 1
            continue
        marker = _scan_one(lines, i)
        if marker is None:
            logger.warning("No template end marker found starting at line %d in %s", i + 1, source)
            i += 1
            continue
        logger.debug("Found template marker at line %d in %s: %s", i + 1, source, lines[i])
        markers.append(marker)
        i = marker.end_line + 1
    return markers


def plan_skip(rendered_lines: Sequence[str], following_lines: Sequence[str]) -> int:
    """
    Number of lines after a marker that hold the previous render.

    Bounded by the new render's length; never consumes a line holding another marker.
    """
    consumed = 0
    for line in following_lines:
        if consumed >= len(rendered_lines) or START_TOKEN in line:
            break
        consumed += 1
    return min(len(rendered_lines), consumed)


def rewrite_lines(lines: Sequence[str], version: Version, *, source: str = "<string>") -> list[str]:
    out: list[str] = []
    cursor = 0
    for marker in scan_markers(lines, source=source):
        out.extend(lines[cursor : marker.end_line + 1])
        rendered = version.render(marker.raw_template).split("\n")
        following = lines[marker.end_line + 1 :]
        cursor = marker.end_line + 1 + plan_skip(rendered, following)
        out.extend(rendered)
    out.extend(lines[cursor:])
    return out
