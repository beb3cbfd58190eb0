"""Walk result counters."""

from pydantic import BaseModel


class MirrorStats(BaseModel):
    """What a walk did to the local tree."""

    listings_fetched: int = 0
    directories_created: int = 0
    directories_skipped: int = 0
    files_downloaded: int = 0
    files_skipped: int = 0
    unknown_entries: int = 0
