"""Recursive walk of a remote tree into the local filesystem."""

import re
from pathlib import Path

import structlog

from tfsgit.config.settings import Settings
from tfsgit.core.exceptions import MatchPatternError
from tfsgit.core.models.entry import ObjectKind, RemoteEntry
from tfsgit.core.models.stats import MirrorStats
from tfsgit.mirror.context import WalkContext
from tfsgit.mirror.materializer import FileMaterializer
from tfsgit.remote.classifier import classify
from tfsgit.remote.client import TFSClient
from tfsgit.remote.urls import download_url, listing_url

logger = structlog.get_logger(__name__)


class TreeWalker:
    """Mirrors a remote directory listing into the working directory.

    Each call to ``walk`` fetches one level of the remote tree, creates
    local directories for ``tree`` entries, recurses into them while the
    context allows it, and downloads ``blob`` entries through the
    materializer. Any error other than a failed directory creation
    propagates to the caller.
    """

    def __init__(
        self,
        settings: Settings,
        client: TFSClient,
        materializer: FileMaterializer | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._materializer = materializer or FileMaterializer(client)
        self._pattern: re.Pattern[str] | None = None
        self.stats = MirrorStats()

    def walk(self, scope_path: str, context: WalkContext | None = None) -> MirrorStats:
        """Mirror ``scope_path`` and everything below it up to the max depth."""
        if context is None:
            context = WalkContext(max_depth=self._settings.depth)

        url = listing_url(self._settings.repo, scope_path, self._settings.branch)
        logger.debug("Listing", url=url, depth=context.depth)

        response = self._client.fetch(url)
        self.stats.listings_fetched += 1
        if self._settings.verbosity > 1:
            logger.debug("Listing response", body=response.text)

        for entry in classify(response.text):
            if self._settings.verbosity > 1:
                logger.debug("Scan", entry=entry.model_dump(by_alias=True))

            kind = entry.kind
            if kind is ObjectKind.TREE:
                self._visit_tree(entry, scope_path, context)
            elif kind is ObjectKind.BLOB:
                self._visit_blob(entry)
            else:
                self.stats.unknown_entries += 1
                logger.warning("Unknown type", type=entry.git_object_type, path=entry.path)

        return self.stats

    def _visit_tree(self, entry: RemoteEntry, scope_path: str, context: WalkContext) -> None:
        logger.debug("Folder", path=entry.path)
        # The listing includes the requested folder itself
        if entry.path == scope_path or self._settings.match:
            return

        dirname = entry.name
        if not Path(dirname).exists():
            logger.info("Creating directory", directory=dirname)
            try:
                Path(dirname).mkdir()
                self.stats.directories_created += 1
            except OSError as e:
                logger.warning("Cannot create directory", directory=dirname, error=str(e))

        if not context.can_descend:
            return

        if not Path(dirname).is_dir():
            self.stats.directories_skipped += 1
            logger.warning("Cannot enter directory", directory=dirname, path=entry.path)
            return

        with context.descend(dirname):
            self.walk(entry.path, context)

    def _visit_blob(self, entry: RemoteEntry) -> None:
        filename = entry.name
        logger.debug("File", path=entry.path)

        if self._settings.match and not self._matches(filename):
            self.stats.files_skipped += 1
            return

        logger.info("Downloading file", file=filename)
        self._materializer.download(download_url(entry.url, self._settings.branch), filename)
        self.stats.files_downloaded += 1

    def _matches(self, filename: str) -> bool:
        if self._pattern is None:
            try:
                self._pattern = re.compile(self._settings.match)
            except re.error as e:
                raise MatchPatternError(
                    f"invalid match pattern {self._settings.match!r}: {e}",
                    details={"pattern": self._settings.match},
                ) from e
        return self._pattern.search(filename) is not None
