"""Shared test fixtures for release-boss."""

from __future__ import annotations

import logging

import pytest

from release_boss.content_source import ContentSource
from release_boss.github_client import GitHubError, RepoRef
from release_boss.renderer import Version


class FakeGitHubClient:
    """Stands in for GitHubClient; `files` maps (ref, path) to content or an exception."""

    def __init__(self, files=None):
        self.files = files or {}
        self.calls = []

    def get_file_content(self, repo, path, *, ref):
        self.calls.append((repo, path, ref))
        value = self.files.get((ref, path))
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def version():
    return Version.parse("1.2.3")


@pytest.fixture
def local_source():
    return ContentSource()


@pytest.fixture
def fake_client():
    return FakeGitHubClient()


@pytest.fixture
def remote_source(fake_client):
    return ContentSource(client=fake_client, repo=RepoRef("acme", "widget"), release_branch="release")


@pytest.fixture(autouse=True)
def _no_github_env(monkeypatch):
    for name in ("GITHUB_TOKEN", "INPUT_TOKEN", "GITHUB_REPOSITORY", "GITHUB_API_URL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def github_error():
    return GitHubError("GitHub API error 500 GET /x: boom", status_code=500)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    # The CLI reconfigures the root logger; keep that from leaking between tests.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
