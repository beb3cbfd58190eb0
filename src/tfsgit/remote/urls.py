"""URL builders for the TFS items API."""

from urllib.parse import quote_plus

LFS_PATH_MARKER = "items//"
LFS_PATH_QUERY = "items?path="
VERSION_TYPE_MARKER = "?versionType"

BRANCH_PARAMS = (
    "&versionDescriptor%5BversionOptions%5D=0"
    "&versionDescriptor%5BversionType%5D=0"
    "&versionDescriptor%5Bversion%5D="
)
DOWNLOAD_PARAMS = "&resolveLfs=true&api-version=5.0&download=true"


def listing_url(repo: str, scope_path: str, branch: str) -> str:
    """Build the one-level listing URL for ``scope_path`` on ``branch``."""
    return (
        f"{repo}/items?scopePath={quote_plus(scope_path)}/"
        f"&recursionLevel=OneLevel&versionDescriptor.versionType=branch"
        f"&version={quote_plus(branch)}"
    )


def download_url(entry_url: str, branch: str) -> str:
    """Rewrite a listing entry URL into a blob download URL.

    The ``items//<path>`` form does not resolve LFS-backed blobs, so the
    path moves into the ``path`` query parameter and the original version
    query is replaced by an explicit branch descriptor.
    """
    url = entry_url.replace(LFS_PATH_MARKER, LFS_PATH_QUERY)
    url = url.split(VERSION_TYPE_MARKER, 1)[0]
    return url + BRANCH_PARAMS + branch + DOWNLOAD_PARAMS
