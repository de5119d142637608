from typing import Optional
from urllib.parse import urlencode, urlparse

from docscout.core.errors import InvalidRequestError
from docscout.core.models.document import DocumentContent, SearchResult
from docscout.core.models.source import Source
from docscout.core.protocols.cache import ContentCacheProtocol
from docscout.infrastructure.converters import AppleDocJSONConverter
from docscout.infrastructure.http import DocsHttpClient
from docscout.infrastructure.parsers import AppleSearchResultParser

from .base import BaseRetriever

APPLE_HOST = "developer.apple.com"
SEARCH_URL = f"https://{APPLE_HOST}/search/"
DATA_URL = f"https://{APPLE_HOST}/tutorials/data"


def documentation_json_url(url: str) -> str:
    """Map a documentation page URL to its JSON data endpoint.

    ``/documentation/swift`` -> ``/tutorials/data/index/swift``
    ``/documentation/swift/array`` -> ``/tutorials/data/documentation/swift/array.json``

    Raises:
        InvalidRequestError: Not a developer.apple.com documentation URL.
    """
    parsed = urlparse(url)
    if parsed.hostname != APPLE_HOST:
        raise InvalidRequestError(f"URL must be from {APPLE_HOST}: {url}")

    parts = [p for p in parsed.path.split("/") if p]
    if len(parts) < 2 or parts[0] != "documentation":
        raise InvalidRequestError(f"Invalid documentation URL format: {url}")

    if len(parts) == 2:
        return f"{DATA_URL}/index/{parts[1]}"
    return f"{DATA_URL}/documentation/{'/'.join(parts[1:])}.json"


class AppleDocsRetriever(BaseRetriever):
    """Apple Developer Documentation: HTML search, JSON documents."""

    source = Source.APPLE_DOCS

    def __init__(
        self,
        http: DocsHttpClient,
        cache: Optional[ContentCacheProtocol] = None,
        parser: Optional[AppleSearchResultParser] = None,
        converter: Optional[AppleDocJSONConverter] = None,
    ):
        super().__init__(http, cache)
        self._parser = parser or AppleSearchResultParser()
        self._converter = converter or AppleDocJSONConverter()

    @staticmethod
    def search_url(query: str) -> str:
        return f"{SEARCH_URL}?{urlencode({'q': query})}"

    async def _search(self, query: str) -> list[SearchResult]:
        response = await self._http.get(self.search_url(query), headers={"Accept": "text/html"})
        return self._parser.parse(response.text)

    async def _fetch(self, result: SearchResult) -> DocumentContent:
        json_url = documentation_json_url(result.url)
        response = await self._http.get(
            json_url,
            headers={"Accept": "application/json", "Cache-Control": "no-cache"},
        )
        raw = response.content
        markdown = self._converter.convert(raw, source_url=result.url)
        return DocumentContent(search_result=result, markdown=markdown, raw_data=raw)
