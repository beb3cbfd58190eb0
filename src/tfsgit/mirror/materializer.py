"""Writes downloaded blobs to local files."""

from pathlib import Path

import structlog

from tfsgit.core.exceptions import LocalFilesystemError
from tfsgit.remote.client import TFSClient

logger = structlog.get_logger(__name__)


class FileMaterializer:
    """Streams a blob into a new file in the current directory."""

    def __init__(self, client: TFSClient, chunk_size: int = 64 * 1024) -> None:
        self._client = client
        self._chunk_size = chunk_size

    def download(self, url: str, local_name: str) -> int:
        """Download ``url`` into ``local_name`` and return the bytes written.

        An existing file is truncated. Nothing is removed when the transfer
        fails halfway.
        """
        target = Path(local_name)
        written = 0
        with self._client.stream(url) as response:
            try:
                out = target.open("wb")
            except OSError as e:
                raise LocalFilesystemError(
                    f"cannot create file {local_name}: {e.strerror or e}",
                    details={"path": str(target.resolve())},
                ) from e
            with out:
                for chunk in response.iter_bytes(self._chunk_size):
                    try:
                        out.write(chunk)
                    except OSError as e:
                        raise LocalFilesystemError(
                            f"cannot write file {local_name}: {e.strerror or e}",
                            details={"path": str(target.resolve())},
                        ) from e
                    written += len(chunk)

        logger.debug("File written", file=local_name, bytes=written)
        return written
