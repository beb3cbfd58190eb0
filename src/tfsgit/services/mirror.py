"""Mirror service."""

import httpx
import structlog

from tfsgit.config.settings import Settings
from tfsgit.core.models.stats import MirrorStats
from tfsgit.mirror.context import WalkContext
from tfsgit.mirror.materializer import FileMaterializer
from tfsgit.mirror.walker import TreeWalker
from tfsgit.remote.client import TFSClient

logger = structlog.get_logger(__name__)


class MirrorService:
    """Runs one mirror of ``settings.scope_path`` into the working directory."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    def mirror(self) -> MirrorStats:
        """Walk the configured root path and return what was done."""
        settings = self._settings
        scope_path = settings.scope_path
        logger.info(
            "Mirror started",
            repo=settings.repo,
            branch=settings.branch,
            path=scope_path,
            depth=settings.depth,
            match=settings.match or None,
        )

        with TFSClient(settings.cred, timeout=settings.timeout, transport=self._transport) as client:
            walker = TreeWalker(settings, client, FileMaterializer(client))
            stats = walker.walk(scope_path, WalkContext(max_depth=settings.depth))

        logger.info("Mirror finished", **stats.model_dump())
        return stats
