"""
renderer.py

Responsibility: Render version placeholders into text and render whole template files.

Rules:
- Placeholders are literal: `{{version}}`, `{{major}}`, `{{minor}}`, `{{patch}}`.
- No whitespace tolerance inside braces; anything else in the text is left as-is.
- A component missing from the version (e.g. no patch in "1.2") leaves its placeholder
  unrendered instead of substituting a literal such as "undefined".
- Files are decoded as UTF-8; undecodable bytes become U+FFFD rather than failing.
- Template files are rendered to a sibling output path; the input is never modified.

This module intentionally does NOT know about GitHub, markers, or CLI parsing.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tpl"
NEW_SUFFIX = ".new"


class RenderError(RuntimeError):
    pass


@dataclass(frozen=True)
class Version:
    """A version string and the components taken verbatim from splitting it on `.`."""

    version: str
    major: str | None = None
    minor: str | None = None
    patch: str | None = None

    @classmethod
    def parse(cls, version: str) -> Version:
        parts = version.split(".")
        major, minor, patch = (parts + [None, None, None])[:3]
        return cls(version=version, major=major, minor=minor, patch=patch)

    def render(self, template: str) -> str:
        return render_template(template, self.version, self.major, self.minor, self.patch)


def render_template(
    template: str,
    version: str,
    major: str | None,
    minor: str | None,
    patch: str | None,
) -> str:
    """
    Substitute the four version placeholders, in order.

    A component that is None (e.g. "1.2" has no patch) leaves its placeholder untouched.
    """
    for token, value in (
        ("{{version}}", version),
        ("{{major}}", major),
        ("{{minor}}", minor),
        ("{{patch}}", patch),
    ):
        if value is not None:
            template = template.replace(token, value)
    return template


def derive_output_path(path: str) -> str:
    """
    `config.tpl.yaml` -> `config.yaml`; `config.yaml` -> `config.new.yaml`.
    """
    if TEMPLATE_SUFFIX in path:
        return path.replace(TEMPLATE_SUFFIX, "")
    head, tail = os.path.split(path)
    stem, ext = os.path.splitext(tail)
    return os.path.join(head, f"{stem}{NEW_SUFFIX}{ext}")


def read_text(path: str | Path) -> str:
    # newline="" keeps CRLF files byte-for-byte when split on "\n".
    with open(path, encoding="utf-8", errors="replace", newline="") as fh:
        return fh.read()


def write_text(path: str | Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(text)


def transform_template_file(path: str | Path, version: Version) -> str:
    """
    Render the whole content of `path` and write it to the derived output path.

    Returns the absolute output path. Raises FileNotFoundError if `path` is missing,
    RenderError if the output cannot be written or verified.
    """
    src = str(path)
    content = read_text(src)
    logger.debug("Read template %s (%d bytes)", src, len(content))

    out_path = derive_output_path(src)
    abs_out = str(Path(out_path).resolve())
    logger.info("Rendering template %s -> %s", src, abs_out)

    rendered = version.render(content)
    try:
        write_text(out_path, rendered)
        verify = read_text(out_path)
    except OSError as e:
        raise RenderError(f"Failed writing rendered template: {out_path}") from e
    logger.debug("Verification: %s is %d bytes", out_path, len(verify))
    return abs_out
