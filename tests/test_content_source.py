"""Tests for release-branch-first content resolution."""

from __future__ import annotations

import pytest
import requests

from release_boss.content_source import ContentSource
from release_boss.github_client import GitHubClient, RepoRef


class TestFetch:
    def test_local_only(self, tmp_path, local_source):
        f = tmp_path / "a.txt"
        f.write_bytes(b"one\r\ntwo\n")
        assert local_source.has_remote is False
        assert local_source.fetch(str(f)) == "one\r\ntwo\n"

    def test_missing_everywhere(self, tmp_path, local_source):
        assert local_source.fetch(str(tmp_path / "missing.txt")) is None

    def test_directory_is_not_treated_as_missing(self, tmp_path, local_source):
        with pytest.raises(IsADirectoryError):
            local_source.fetch(str(tmp_path))

    def test_prefers_release_branch(self, tmp_path, remote_source, fake_client):
        f = tmp_path / "a.txt"
        f.write_text("local", encoding="utf-8")
        fake_client.files[("release", str(f))] = "remote"

        assert remote_source.fetch(str(f)) == "remote"
        assert fake_client.calls == [(RepoRef("acme", "widget"), str(f), "release")]

    def test_falls_back_on_github_error(self, tmp_path, remote_source, fake_client, github_error):
        f = tmp_path / "a.txt"
        f.write_text("local", encoding="utf-8")
        fake_client.files[("release", str(f))] = github_error
        assert remote_source.fetch(str(f)) == "local"

    def test_falls_back_on_network_error(self, tmp_path, remote_source, fake_client):
        f = tmp_path / "a.txt"
        f.write_text("local", encoding="utf-8")
        fake_client.files[("release", str(f))] = requests.ConnectionError("offline")
        assert remote_source.fetch(str(f)) == "local"

    def test_falls_back_when_absent_or_empty_remotely(self, tmp_path, remote_source, fake_client):
        f = tmp_path / "a.txt"
        f.write_text("local", encoding="utf-8")
        assert remote_source.fetch(str(f)) == "local"
        fake_client.files[("release", str(f))] = ""
        assert remote_source.fetch(str(f)) == "local"


class TestFromEnv:
    def test_without_token_is_local_only(self):
        source = ContentSource.from_env("release", env={"GITHUB_REPOSITORY": "acme/widget"})
        assert source.has_remote is False

    def test_with_token_and_repository(self):
        env = {"INPUT_TOKEN": "tok", "GITHUB_REPOSITORY": "acme/widget"}
        source = ContentSource.from_env("rel/1.x", env=env)
        assert source.has_remote is True
        assert source.release_branch == "rel/1.x"
        assert isinstance(source._client, GitHubClient)

    def test_bad_repository_degrades_to_local(self):
        source = ContentSource.from_env("release", env={"GITHUB_TOKEN": "tok", "GITHUB_REPOSITORY": "widget"})
        assert source.has_remote is False

    def test_default_branch(self):
        assert ContentSource.from_env("", env={}).release_branch == "release"
