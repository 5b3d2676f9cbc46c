"""
Embed URL construction.

The query string is a closed list: nothing supplied by the caller is
interpolated apart from the validated reference.
"""

from typing import Any, Dict
from urllib.parse import urlencode

from focusguard.core.security.constants import DEFAULT_APP_ORIGIN, EMBED_BASE_URL
from focusguard.core.security.exceptions import InvalidReferenceError
from focusguard.core.security.locator import is_valid_reference


class EmbedUrlBuilder:
    """Builds safety-constrained embed URLs for validated references."""

    def __init__(self, embed_base_url: str = EMBED_BASE_URL, app_origin: str = DEFAULT_APP_ORIGIN):
        self._base = embed_base_url if embed_base_url.endswith("/") else embed_base_url + "/"
        self._params = self._embed_params(app_origin)
        self._query = urlencode(self._params)

    @staticmethod
    def _embed_params(origin: str) -> Dict[str, str]:
        return {
            "autoplay": "1",
            "rel": "0",  # no related-video suggestions
            "modestbranding": "1",
            "controls": "1",
            "showinfo": "0",
            "iv_load_policy": "3",
            "fs": "0",
            "disablekb": "1",  # no keyboard control
            "playsinline": "1",
            "origin": origin,
            "enablejsapi": "0",  # no script API access
            "widget_referrer": origin,
        }

    @property
    def params(self) -> Dict[str, str]:
        return dict(self._params)

    def build_embed_url(self, reference: Any) -> str:
        """
        Return the embed URL for ``reference``.

        Raises:
            InvalidReferenceError: If ``reference`` is not an 11 character
                ``[a-zA-Z0-9_-]`` identifier.
        """
        if not isinstance(reference, str) or not reference:
            raise InvalidReferenceError("Invalid video ID provided")
        if not is_valid_reference(reference):
            raise InvalidReferenceError("Invalid video ID format")
        return f"{self._base}{reference}?{self._query}"
