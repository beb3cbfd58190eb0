"""Tests for the tree walker."""

from pathlib import Path

import httpx
import pytest
from structlog.testing import capture_logs

from factories import SettingsFactory
from fakes import FakeTFS
from tfsgit.core.exceptions import MatchPatternError, RemoteAPIError
from tfsgit.mirror.context import WalkContext
from tfsgit.mirror.walker import TreeWalker
from tfsgit.remote.client import TFSClient


def local_files(root: Path) -> set[str]:
    return {str(path.relative_to(root)) for path in root.rglob("*") if path.is_file()}


def local_dirs(root: Path) -> set[str]:
    return {str(path.relative_to(root)) for path in root.rglob("*") if path.is_dir()}


@pytest.mark.unit
class TestTreeWalker:
    """Tests for TreeWalker."""

    def test_mirror_full_tree(self, workdir: Path, client: TFSClient, fake_tfs: FakeTFS) -> None:
        walker = TreeWalker(SettingsFactory(), client)

        stats = walker.walk("/docs")

        assert local_files(workdir) == {
            "readme.txt",
            "guide.md",
            "api/index.md",
            "api/v1/users.md",
            "api/v1/deep/leaf.md",
            "images/logo.png",
        }
        assert (workdir / "api" / "v1" / "deep" / "leaf.md").read_bytes() == b"leaf\n"
        assert (workdir / "images" / "logo.png").read_bytes() == b"\x89PNG\r\n"
        assert stats.files_downloaded == 6
        assert stats.directories_created == 4
        assert stats.listings_fetched == 5
        assert "/other/skip.txt" not in fake_tfs.downloaded_paths

    def test_working_directory_restored(self, workdir: Path, client: TFSClient) -> None:
        TreeWalker(SettingsFactory(), client).walk("/docs")
        assert Path.cwd() == workdir

    @pytest.mark.parametrize(
        ("depth", "expected_dirs", "expected_listings"),
        [
            (0, {"api", "images"}, ["/docs"]),
            (1, {"api", "images", "api/v1"}, ["/docs", "/docs/api", "/docs/images"]),
            (
                2,
                {"api", "images", "api/v1", "api/v1/deep"},
                ["/docs", "/docs/api", "/docs/api/v1", "/docs/images"],
            ),
        ],
    )
    def test_depth_limit(
        self,
        workdir: Path,
        client: TFSClient,
        fake_tfs: FakeTFS,
        depth: int,
        expected_dirs: set[str],
        expected_listings: list[str],
    ) -> None:
        TreeWalker(SettingsFactory(depth=depth), client).walk("/docs")

        assert local_dirs(workdir) == expected_dirs
        assert fake_tfs.listed_paths == expected_listings
        # Directories at the limit are created but left empty
        for name in expected_dirs:
            if name.count("/") == depth:
                assert not any((workdir / name).iterdir())

    def test_depth_zero_downloads_root_files(self, workdir: Path, client: TFSClient) -> None:
        TreeWalker(SettingsFactory(depth=0), client).walk("/docs")
        assert local_files(workdir) == {"readme.txt", "guide.md"}

    def test_explicit_context_depth(self, workdir: Path, client: TFSClient, fake_tfs: FakeTFS) -> None:
        context = WalkContext(max_depth=1)
        TreeWalker(SettingsFactory(depth=10), client).walk("/docs", context)
        assert "/docs/api/v1" not in fake_tfs.listed_paths
        assert context.depth == 0

    def test_sibling_directories(self, workdir: Path) -> None:
        fake = FakeTFS({"/a/sub1/x.txt": b"x", "/a/sub2/y.txt": b"y"})
        with TFSClient("user:token", transport=fake.transport) as client:
            TreeWalker(SettingsFactory(path="/a"), client).walk("/a")

        assert (workdir / "sub1").is_dir()
        assert (workdir / "sub2").is_dir()
        assert fake.listed_paths == ["/a", "/a/sub1", "/a/sub2"]
        assert (workdir / "sub1" / "x.txt").read_bytes() == b"x"
        assert (workdir / "sub2" / "y.txt").read_bytes() == b"y"

    def test_existing_directory_is_reused(self, workdir: Path, client: TFSClient) -> None:
        (workdir / "api").mkdir()
        (workdir / "api" / "local.txt").write_text("keep")

        stats = TreeWalker(SettingsFactory(), client).walk("/docs")

        assert (workdir / "api" / "local.txt").read_text() == "keep"
        assert (workdir / "api" / "index.md").exists()
        assert stats.directories_created == 3

    def test_directory_creation_failure_is_tolerated(self, workdir: Path, client: TFSClient) -> None:
        # A plain file blocks the "api" directory
        (workdir / "api").write_text("in the way")

        with capture_logs() as logs:
            stats = TreeWalker(SettingsFactory(), client).walk("/docs")

        assert Path.cwd() == workdir
        assert (workdir / "api").read_text() == "in the way"
        assert (workdir / "images" / "logo.png").exists()
        assert (workdir / "readme.txt").exists()
        assert stats.directories_skipped == 1
        assert any(
            log["log_level"] == "warning" and log.get("directory") == "api" for log in logs
        )

    def test_match_filter(self, workdir: Path, client: TFSClient, fake_tfs: FakeTFS) -> None:
        settings = SettingsFactory(match=r"\.md$")
        assert settings.depth == 0

        stats = TreeWalker(settings, client).walk("/docs")

        assert local_files(workdir) == {"guide.md"}
        assert local_dirs(workdir) == set()
        assert fake_tfs.listed_paths == ["/docs"]
        assert stats.files_skipped == 1

    def test_match_is_tested_against_file_name_only(self, workdir: Path, client: TFSClient) -> None:
        TreeWalker(SettingsFactory(match="^docs"), client).walk("/docs")
        assert local_files(workdir) == set()

    def test_match_is_unanchored(self, workdir: Path, client: TFSClient) -> None:
        TreeWalker(SettingsFactory(match="eadm"), client).walk("/docs")
        assert local_files(workdir) == {"readme.txt"}

    def test_invalid_match_pattern(self, workdir: Path, client: TFSClient) -> None:
        with pytest.raises(MatchPatternError, match="invalid match pattern"):
            TreeWalker(SettingsFactory(match="([a-z"), client).walk("/docs")

    def test_unknown_entry_type(self, workdir: Path, fake_tfs: FakeTFS) -> None:
        fake_tfs.extra_entries["/docs"] = [
            {"gitObjectType": "commit", "path": "/docs/submodule", "url": ""},
        ]
        with TFSClient("user:token", transport=fake_tfs.transport) as client:
            with capture_logs() as logs:
                stats = TreeWalker(SettingsFactory(depth=0), client).walk("/docs")

        assert stats.unknown_entries == 1
        assert not (workdir / "submodule").exists()
        assert local_files(workdir) == {"readme.txt", "guide.md"}
        warnings = [log for log in logs if log["log_level"] == "warning"]
        assert warnings == [
            {
                "event": "Unknown type",
                "type": "commit",
                "path": "/docs/submodule",
                "log_level": "warning",
            }
        ]

    def test_remote_error_propagates(self, workdir: Path, client: TFSClient) -> None:
        with pytest.raises(RemoteAPIError, match="TF401174"):
            TreeWalker(SettingsFactory(), client).walk("/missing")
        assert Path.cwd() == workdir

    def test_error_in_subtree_restores_working_directory(
        self, workdir: Path, fake_tfs: FakeTFS
    ) -> None:
        fake_tfs.errors["/docs/api/v1"] = httpx.Response(
            401, text="<html><head><title>Access Denied</title></head></html>"
        )
        with TFSClient("user:token", transport=fake_tfs.transport) as client:
            with pytest.raises(RemoteAPIError, match="Access Denied"):
                TreeWalker(SettingsFactory(), client).walk("/docs")

        assert Path.cwd() == workdir
        # Nothing is rolled back
        assert (workdir / "api" / "v1").is_dir()

    def test_download_urls(self, workdir: Path, client: TFSClient, fake_tfs: FakeTFS) -> None:
        TreeWalker(SettingsFactory(depth=0, branch="release"), client).walk("/docs")

        downloads = [
            request for request in fake_tfs.requests if request.url.params.get("download") == "true"
        ]
        assert {request.url.params["path"] for request in downloads} == {
            "docs/readme.txt",
            "docs/guide.md",
        }
        for request in downloads:
            assert request.url.params["versionDescriptor[version]"] == "release"
            assert request.url.params["resolveLfs"] == "true"
            assert request.url.params["api-version"] == "5.0"
            assert "versionType" not in request.url.params
