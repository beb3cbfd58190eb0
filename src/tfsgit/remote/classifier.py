"""Classification of listing responses into entries or errors."""

import json
from typing import Any

from bs4 import BeautifulSoup
from pydantic import ValidationError

from tfsgit.core.exceptions import RemoteAPIError
from tfsgit.core.models.entry import RemoteEntry

NOT_FOUND_MESSAGE = "api response not found"


def extract_title(body: str) -> str:
    """Return the text of every HTML ``<title>`` in ``body``, or an empty string.

    Whitespace is kept; a title made of blanks still counts as an error page.
    """
    if "<" not in body:
        return ""
    soup = BeautifulSoup(body, "html.parser")
    return "".join(title.get_text() for title in soup.find_all("title"))


def _load_json(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        return None


def classify(body: str) -> list[RemoteEntry]:
    """Turn a listing response body into entries.

    The API answers errors either as an HTML page or as JSON with a
    ``message`` field, so the checks run in this order:

    1. a non-empty HTML ``<title>`` is the error message;
    2. a non-empty top-level ``message`` field is the error message;
    3. a missing or empty ``value`` array is an error;
    4. otherwise the ``value`` items are the listing.

    Raises:
        RemoteAPIError: for any of the error cases above.
    """
    title = extract_title(body)
    if title:
        raise RemoteAPIError(title, details={"source": "html"})

    payload = _load_json(body)
    if not isinstance(payload, dict):
        raise RemoteAPIError(NOT_FOUND_MESSAGE)

    message = payload.get("message")
    if message:
        raise RemoteAPIError(str(message), details={"source": "json"})

    value = payload.get("value")
    if not value or not isinstance(value, list):
        raise RemoteAPIError(NOT_FOUND_MESSAGE)

    try:
        return [RemoteEntry.model_validate(item) for item in value if isinstance(item, dict)]
    except ValidationError as e:
        raise RemoteAPIError(f"malformed listing entry: {e.errors()[0]['msg']}") from e
