"""
release_boss package

This package stamps a release version into project files as a CLI-first utility.

Key responsibilities are split across modules:
- `renderer.py`: `{{version}}`-style placeholder rendering and whole-file templates
- `markers.py`: `%%release-boss: ... %%` marker scanning and generated-content rewrite
- `github_client.py`: isolated GitHub REST API interactions (file content lookup)
- `content_source.py`: release-branch-first, local-fallback file resolution
- `config_parser.py`: YAML config and update-file entries into typed models
- `processors.py`: per-file batch processing (version, template, update files)
- `cli.py`: CLI entrypoint and orchestration (config -> processors)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
