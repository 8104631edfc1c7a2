"""
github_client.py

Responsibility: Isolate all direct GitHub REST API interaction.

This module must be the only place that:
- Constructs GitHub REST endpoints
- Sends HTTP requests to api.github.com
- Interprets GitHub API responses / error payloads

Everything else (content resolution, processors, CLI behavior) should use this client.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests


class GitHubError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class RepoRef:
    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> RepoRef:
        """
        Parse `owner/name`, the format of GITHUB_REPOSITORY.
        """
        owner, sep, name = full_name.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise GitHubError(f"Invalid repository name (expected owner/name): {full_name!r}")
        return cls(owner=owner, name=name)


class GitHubClient:
    """Read-only access to repository contents, one requests session per client."""

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.github.com",
        *,
        timeout: float = 30,
    ) -> None:
        if not token.strip():
            raise GitHubError("GitHub token is required.")
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "release-boss",
        })

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            return str(payload.get("message", payload))
        return str(payload)

    def _get_json(self, path: str, params: dict[str, str]) -> Any:
        response = self.session.request("GET", f"{self._api_base}{path}", params=params, timeout=self._timeout)
        if response.status_code >= 400:
            raise GitHubError(
                f"GitHub API error {response.status_code} GET {path}: {self._error_message(response)}",
                status_code=response.status_code,
            )
        return response.json()

    def get_file_content(self, repo: RepoRef, path: str, *, ref: str) -> str | None:
        """
        Return the UTF-8 text of `path` at `ref`, or None if the path does not exist there.
        """
        api_path = f"/repos/{repo.owner}/{repo.name}/contents/{quote(path.lstrip('/'))}"
        try:
            data = self._get_json(api_path, {"ref": ref})
        except GitHubError as e:
            if e.status_code == 404:
                return None
            raise
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise GitHubError(f"Not a file on {ref}: {path}")
        encoded = data.get("content") or ""
        if data.get("encoding", "base64") != "base64":
            raise GitHubError(f"Unsupported content encoding for {path}: {data.get('encoding')}")
        return base64.b64decode(encoded).decode("utf-8", errors="replace")
