from typing import Optional
from urllib.parse import quote

from docscout.core.markdown import compose_document
from docscout.core.models.document import DocumentContent, SearchResult
from docscout.core.models.source import Source
from docscout.core.protocols.cache import ContentCacheProtocol
from docscout.infrastructure.cleanup import HWS_CLEANUP_RULES, CleanupRuleEngine
from docscout.infrastructure.converters import HTMLMarkdownConverter
from docscout.infrastructure.http import DocsHttpClient
from docscout.infrastructure.parsers import HWSSearchResultParser

from .base import BaseRetriever

SEARCH_URL = "https://www.hackingwithswift.com/search/"


class HackingWithSwiftRetriever(BaseRetriever):
    """Hacking with Swift: HTML search, HTML articles."""

    source = Source.HACKING_WITH_SWIFT

    def __init__(
        self,
        http: DocsHttpClient,
        cache: Optional[ContentCacheProtocol] = None,
        parser: Optional[HWSSearchResultParser] = None,
        skip_cleaning: bool = False,
    ):
        """Initialize retriever.

        Args:
            http: Shared HTTP client.
            cache: Optional document cache.
            parser: Search page parser.
            skip_cleaning: Return raw converted markdown without boilerplate
                removal, for debugging the cleanup rules.
        """
        super().__init__(http, cache)
        self._parser = parser or HWSSearchResultParser()
        cleanup = None if skip_cleaning else CleanupRuleEngine(HWS_CLEANUP_RULES)
        self._converter = HTMLMarkdownConverter(cleanup=cleanup)

    @staticmethod
    def search_url(query: str) -> str:
        return SEARCH_URL + quote(query, safe="")

    async def _search(self, query: str) -> list[SearchResult]:
        response = await self._http.get(self.search_url(query), headers={"Accept": "text/html"})
        return self._parser.parse(response.text)

    async def _fetch(self, result: SearchResult) -> DocumentContent:
        response = await self._http.get(result.url, headers={"Accept": "text/html"})
        body = self._converter.convert(response.text)
        markdown = compose_document(result.title, result.url, body)
        return DocumentContent(search_result=result, markdown=markdown)
