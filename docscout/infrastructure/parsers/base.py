import logging
import re
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urljoin, urlparse

from docscout.core.errors import NoResultsError, ParsingError
from docscout.core.models.document import SearchResult
from docscout.core.models.source import Source
from docscout.infrastructure.html_text import html_to_text

logger = logging.getLogger(__name__)


class RegexSearchResultParser(ABC):
    """Two-stage pattern extractor for search result pages.

    Stage one cuts the page into blocks at every ``block_start`` match; stage
    two pulls a link and optional details out of each block. Blocks that do
    not yield a usable link are dropped.
    """

    source: Source
    origin: str
    allowed_prefixes: tuple[str, ...]
    block_start: re.Pattern

    def parse(self, html: str) -> list[SearchResult]:
        """Extract canonical results from a search page.

        Raises:
            ParsingError: No block markers (and no fallback links) at all.
            NoResultsError: Nothing survived link extraction and filtering.
        """
        blocks = self.split_blocks(html)

        if blocks:
            candidates = []
            for index, block in enumerate(blocks):
                result = self.parse_block(block)
                if result is None:
                    logger.debug(f"[{self.source.value}] block #{index}: no usable link")
                    continue
                candidates.append(result)
        else:
            candidates = self.parse_fallback(html)
            if candidates is None:
                raise ParsingError(
                    f"{self.source.display_name}: no search result blocks found"
                )

        results = [r for r in candidates if self.is_allowed(r.url)]
        dropped = len(candidates) - len(results)

        logger.info(
            f"[{self.source.value}] parsed {len(blocks)} blocks -> "
            f"{len(results)} results ({dropped} outside allowed paths)"
        )

        if not results:
            raise NoResultsError()
        return results

    def split_blocks(self, html: str) -> list[str]:
        starts = [m.start() for m in self.block_start.finditer(html)]
        return [
            html[start:end]
            for start, end in zip(starts, starts[1:] + [len(html)])
        ]

    @abstractmethod
    def parse_block(self, block: str) -> Optional[SearchResult]:
        """Turn one block into a result, or None if it has no usable link."""
        ...

    def parse_fallback(self, html: str) -> Optional[list[SearchResult]]:
        """Called when no block marker matched; None means nothing to fall back to."""
        return None

    def absolute_url(self, href: str) -> Optional[str]:
        href = href.strip()
        if not href or href.startswith(("#", "javascript:", "mailto:")):
            return None
        try:
            url = urljoin(self.origin + "/", href)
            parsed = urlparse(url)
        except ValueError:
            logger.debug(f"[{self.source.value}] malformed href: {href[:100]!r}")
            return None
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return None
        return url

    def is_allowed(self, url: str) -> bool:
        parsed = urlparse(url)
        if parsed.netloc != urlparse(self.origin).netloc:
            return False
        return any(parsed.path.startswith(prefix) for prefix in self.allowed_prefixes)

    @staticmethod
    def first_group(pattern: re.Pattern, text: str) -> Optional[str]:
        match = pattern.search(text)
        return match.group(1) if match else None

    @staticmethod
    def list_items(pattern: re.Pattern, item_pattern: re.Pattern, block: str) -> list[str]:
        container = pattern.search(block)
        if not container:
            return []
        items = (html_to_text(m.group(1)) for m in item_pattern.finditer(container.group(1)))
        return [item for item in items if item]
