"""Song text over HTTP(S).

Fetches a raw song sheet (``.txt`` / ``.cho``) served as plain text, e.g.
from a static site or a raw file on a git host.  The song id is the last
path segment without its extension.
"""

from urllib.parse import urlparse

import httpx

from ..exceptions import FetchError
from .base import SongSource

_FETCH_HEADERS = {
    "Accept": "text/plain, text/*;q=0.9, */*;q=0.8",
}


class HttpSource(SongSource):
    """Fetches song text from http:// and https:// URLs."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return location.startswith(("http://", "https://"))

    def fetch(self, location: str) -> str:
        try:
            resp = httpx.get(
                location,
                headers=_FETCH_HEADERS,
                follow_redirects=True,
                timeout=15,
            )
        except httpx.RequestError as exc:
            raise FetchError(location, 0, str(exc)) from exc
        if resp.status_code != 200:
            raise FetchError(location, resp.status_code)
        return resp.text

    def song_id(self, location: str) -> str:
        slug = urlparse(location).path.rstrip("/").split("/")[-1]
        return slug.rsplit(".", 1)[0] or location
