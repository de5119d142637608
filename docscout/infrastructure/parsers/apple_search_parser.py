import re
from typing import Optional
from urllib.parse import urlparse

from docscout.core.models.document import SearchResult
from docscout.core.models.source import Source
from docscout.infrastructure.html_text import html_to_text

from .base import RegexSearchResultParser

_FLAGS = re.IGNORECASE

_BLOCK_START = re.compile(r'<li[^>]*class="[^"]*search-result[^"]*"[^>]*>', _FLAGS)
_ANCHOR = re.compile(r"<a\b([^>]*)>([\s\S]*?)</a>", _FLAGS)
_RESULT_LINK_CLASS = re.compile(r'class="[^"]*click-analytics-result[^"]*"', _FLAGS)
_HREF = re.compile(r'href="([^"]+)"', _FLAGS)
_RESULT_TYPE = re.compile(r'data-result-type="([^"]+)"', _FLAGS)
_BREADCRUMBS = re.compile(r'<ul[^>]*class="[^"]*breadcrumb-list[^"]*"[^>]*>([\s\S]*?)</ul>', _FLAGS)
_BREADCRUMB_ITEM = re.compile(r"<(?:li|a)[^>]*>([\s\S]*?)</(?:li|a)>", _FLAGS)
_TAGS = re.compile(r'<ul[^>]*class="[^"]*tag-list[^"]*"[^>]*>([\s\S]*?)</ul>', _FLAGS)
_TAG_ITEM = re.compile(r"<(?:li|span)[^>]*>([\s\S]*?)</(?:li|span)>", _FLAGS)
_DESCRIPTION = re.compile(r'<p[^>]*class="[^"]*result-description[^"]*"[^>]*>([\s\S]*?)</p>', _FLAGS)


class AppleSearchResultParser(RegexSearchResultParser):
    """Parses developer.apple.com/search result pages.

    Expected block shape::

        <li class="search-result">
          <a class="click-analytics-result" data-result-type="symbol"
             href="/documentation/swift/array">Array</a>
          <p class="result-description">An ordered collection.</p>
          <ul class="breadcrumb-list"><li>Swift</li></ul>
          <ul class="tag-list"><li><span>Swift</span></li></ul>
        </li>
    """

    source = Source.APPLE_DOCS
    origin = "https://developer.apple.com"
    allowed_prefixes = ("/documentation/",)
    block_start = _BLOCK_START

    def parse_block(self, block: str) -> Optional[SearchResult]:
        anchor = next(
            (m for m in _ANCHOR.finditer(block) if _RESULT_LINK_CLASS.search(m.group(1))),
            None,
        )
        if anchor is None:
            return None

        attrs, label = anchor.group(1), anchor.group(2)
        href = self.first_group(_HREF, attrs)
        url = self.absolute_url(href) if href else None
        title = html_to_text(label)
        if not url or not title:
            return None

        summary = self.first_group(_DESCRIPTION, block)
        summary = html_to_text(summary) if summary else None

        path_parts = [p for p in urlparse(url).path.split("/") if p]
        metadata = {"framework": path_parts[1]} if len(path_parts) > 1 else {}

        return SearchResult(
            title=title,
            url=url,
            source=self.source,
            summary=summary or None,
            breadcrumbs=self.list_items(_BREADCRUMBS, _BREADCRUMB_ITEM, block),
            tags=self.list_items(_TAGS, _TAG_ITEM, block),
            result_type=self.first_group(_RESULT_TYPE, attrs),
            metadata=metadata,
        )
