"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest
import structlog

from fakes import REPO_URL, FakeTFS
from tfsgit.config.settings import Settings
from tfsgit.remote.client import TFSClient


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every test in an empty directory with no TFS* variables set."""
    for name in list(os.environ):
        if name.upper().startswith("TFS"):
            monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield workdir
    structlog.reset_defaults()


@pytest.fixture
def workdir(isolated_env: Path) -> Path:
    return isolated_env


@pytest.fixture
def remote_files() -> dict[str, bytes]:
    """A small remote tree three levels deep below /docs."""
    return {
        "/docs/readme.txt": b"hello\n",
        "/docs/guide.md": b"# Guide\n",
        "/docs/api/index.md": b"# API\n",
        "/docs/api/v1/users.md": b"users\n",
        "/docs/api/v1/deep/leaf.md": b"leaf\n",
        "/docs/images/logo.png": b"\x89PNG\r\n",
        "/other/skip.txt": b"not mirrored\n",
    }


@pytest.fixture
def fake_tfs(remote_files: dict[str, bytes]) -> FakeTFS:
    return FakeTFS(remote_files)


@pytest.fixture
def settings() -> Settings:
    return Settings(cred="user:token", repo=REPO_URL, path="/docs")


@pytest.fixture
def client(fake_tfs: FakeTFS):
    with TFSClient("user:token", transport=fake_tfs.transport) as tfs_client:
        yield tfs_client
