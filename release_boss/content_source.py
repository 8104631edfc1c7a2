"""
content_source.py

Responsibility: Resolve the current text of a file before it is rewritten.

A release branch may already carry updates that the local checkout has not seen yet,
so the file is looked up on that branch first and only then on the local filesystem.
Remote problems are never fatal: they are logged and the local file is used.
"""

from __future__ import annotations

import logging
import os

import requests

from release_boss.github_client import GitHubClient, GitHubError, RepoRef
from release_boss.renderer import read_text

logger = logging.getLogger(__name__)

DEFAULT_RELEASE_BRANCH = "release"


class ContentSource:
    def __init__(
        self,
        *,
        client: GitHubClient | None = None,
        repo: RepoRef | None = None,
        release_branch: str = DEFAULT_RELEASE_BRANCH,
    ) -> None:
        self._client = client
        self._repo = repo
        self.release_branch = release_branch or DEFAULT_RELEASE_BRANCH

    @property
    def has_remote(self) -> bool:
        return self._client is not None and self._repo is not None

    @classmethod
    def from_env(cls, release_branch: str = DEFAULT_RELEASE_BRANCH, env: dict[str, str] | None = None) -> ContentSource:
        """
        Build a source from GitHub Actions style environment variables.

        Without a token (GITHUB_TOKEN / INPUT_TOKEN) or GITHUB_REPOSITORY, files are read locally only.
        """
        env = os.environ if env is None else env
        token = env.get("GITHUB_TOKEN") or env.get("INPUT_TOKEN") or ""
        full_name = env.get("GITHUB_REPOSITORY") or ""
        if not token or not full_name:
            logger.debug("No GitHub token or repository configured; reading files locally")
            return cls(release_branch=release_branch)
        try:
            client = GitHubClient(token, api_base=env.get("GITHUB_API_URL") or "https://api.github.com")
            repo = RepoRef.parse(full_name)
        except GitHubError as e:
            logger.info("GitHub client unavailable, reading files locally: %s", e)
            return cls(release_branch=release_branch)
        logger.info("GitHub API client initialized; checking %s branch first to avoid conflicts", release_branch)
        return cls(client=client, repo=repo, release_branch=release_branch)

    def fetch_remote(self, path: str) -> str | None:
        if self._client is None or self._repo is None:
            return None
        logger.info("Trying to fetch %s from %s branch first to avoid conflicts", path, self.release_branch)
        try:
            content = self._client.get_file_content(self._repo, path, ref=self.release_branch)
        except (GitHubError, requests.RequestException, ValueError) as e:
            logger.info("Couldn't get %s from %s branch: %s; using local file", path, self.release_branch, e)
            return None
        if not content:
            logger.info("%s not found on %s branch; using local file", path, self.release_branch)
            return None
        logger.info("Retrieved %s from %s branch", path, self.release_branch)
        return content

    def fetch_local(self, path: str) -> str | None:
        """
        None only when nothing exists at `path`; any other OSError propagates.
        """
        try:
            content = read_text(path)
        except FileNotFoundError:
            return None
        logger.debug("Read %s from local filesystem (%d bytes)", path, len(content))
        return content

    def fetch(self, path: str) -> str | None:
        """
        Return the file's text, preferring the release branch. None if it exists nowhere.
        """
        content = self.fetch_remote(path)
        if content is not None:
            return content
        return self.fetch_local(path)
