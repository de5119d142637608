import re
from typing import Optional
from urllib.parse import urlparse

from docscout.core.models.document import SearchResult
from docscout.core.models.source import Source
from docscout.infrastructure.html_text import html_to_text

from .base import RegexSearchResultParser

_FLAGS = re.IGNORECASE | re.DOTALL

_BLOCK_START = re.compile(r'<div[^>]*class="(?:[^"]*\s)?result(?:\s[^"]*)?"[^>]*>', _FLAGS)
_LINK = re.compile(r'<a\s+[^>]*href="([^"]+)"[^>]*>(.*?)</a>', _FLAGS)
_FLAT_LINK = re.compile(r'<a\s+[^>]*href="(/[^"]+)"[^>]*>(.*?)</a>', _FLAGS)
_SUMMARY_PATTERNS = (
    re.compile(r'<p[^>]*class="[^"]*summary[^"]*"[^>]*>(.*?)</p>', _FLAGS),
    re.compile(r"<p[^>]*>(.*?)</p>", _FLAGS),
    re.compile(r'<div[^>]*class="[^"]*snippet[^"]*"[^>]*>(.*?)</div>', _FLAGS),
)

CONTENT_TYPES = {
    "/articles/": "article",
    "/example-code/": "example-code",
    "/quick-start/": "quick-start",
    "/100/": "100-days",
    "/books/": "book",
    "/plus/": "hws-plus",
    "/forums/": "forum",
    "/swift/": "swift-version",
    "/interview/": "interview-question",
}

CONTENT_PREFIXES = (
    "/articles/",
    "/example-code/",
    "/quick-start/",
    "/100/",
    "/books/",
    "/plus/",
    "/swift/",
    "/interview/",
)


def content_type_for(path: str) -> Optional[str]:
    for prefix, content_type in CONTENT_TYPES.items():
        if path.startswith(prefix):
            return content_type
    return None


def _title_case(segment: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in segment.split("-") if word)


def breadcrumbs_for(path: str) -> list[str]:
    """``/example-code/uikit/how-to-x`` -> ["Example Code", "Uikit", "How To X"]."""
    segments = [s for s in path.split("?")[0].split("/") if s and not s.isdigit()]
    return [_title_case(s) for s in segments]


class HWSSearchResultParser(RegexSearchResultParser):
    """Parses hackingwithswift.com/search pages.

    Falls back to scanning every site-relative link when the page has no
    result blocks, since the search layout changes more often than the
    content URLs do.
    """

    source = Source.HACKING_WITH_SWIFT
    origin = "https://www.hackingwithswift.com"
    allowed_prefixes = CONTENT_PREFIXES
    block_start = _BLOCK_START

    def parse_block(self, block: str) -> Optional[SearchResult]:
        link = _LINK.search(block)
        if not link:
            return None

        summary = None
        for pattern in _SUMMARY_PATTERNS:
            text = self.first_group(pattern, block)
            if text and html_to_text(text):
                summary = html_to_text(text)
                break

        return self._build(link.group(1), link.group(2), summary)

    def parse_fallback(self, html: str) -> Optional[list[SearchResult]]:
        links = _FLAT_LINK.findall(html)
        if not links:
            return None

        results: list[SearchResult] = []
        seen: set[str] = set()
        for href, label in links:
            result = self._build(href, label, None)
            if result is None or result.url in seen:
                continue
            seen.add(result.url)
            results.append(result)
        return results

    def _build(self, href: str, label: str, summary: Optional[str]) -> Optional[SearchResult]:
        url = self.absolute_url(href)
        title = html_to_text(label)
        if not url or not title:
            return None

        path = urlparse(url).path
        content_type = content_type_for(path)

        return SearchResult(
            title=title,
            url=url,
            source=self.source,
            summary=summary,
            breadcrumbs=breadcrumbs_for(path),
            tags=[content_type] if content_type else [],
            result_type=content_type,
        )
