import logging
import re
from typing import Optional

from docscout.infrastructure.cleanup import CleanupRuleEngine
from docscout.infrastructure.html_text import decode_entities, strip_tags

logger = logging.getLogger(__name__)

_DOTALL = re.DOTALL
_NOCASE = re.IGNORECASE | re.DOTALL

_CHROME = tuple(
    re.compile(rf"<{tag}\b[^>]*>.*?</{tag}>", _NOCASE)
    for tag in ("nav", "header", "footer", "aside")
)

# Greedy on purpose: the last closing tag wins so nested divs stay inside.
_MAIN_CONTENT = (
    re.compile(r'<div[^>]*class="[^"]*article-body[^"]*"[^>]*>(.*)</div>', _DOTALL),
    re.compile(r'<div[^>]*class="[^"]*post-content[^"]*"[^>]*>(.*)</div>', _DOTALL),
    re.compile(r'<div[^>]*class="[^"]*entry-content[^"]*"[^>]*>(.*)</div>', _DOTALL),
    re.compile(r"<article[^>]*>(.*)</article>", _DOTALL),
    re.compile(r"<main[^>]*>(.*)</main>", _DOTALL),
    re.compile(r'<div[^>]*id="[^"]*content[^"]*"[^>]*>(.*)</div>', _DOTALL),
    re.compile(r'<div[^>]*class="[^"]*content[^"]*"[^>]*>(.*)</div>', _DOTALL),
)

_HEADINGS = tuple(
    (re.compile(rf"<h{level}\b[^>]*>(.*?)</h{level}>", _NOCASE), "#" * level)
    for level in range(1, 7)
)

_CODE_LANG = re.compile(
    r'<pre[^>]*>\s*<code[^>]*class="[^"]*language-([^"\s]+)[^"]*"[^>]*>(.*?)</code>\s*</pre>', _NOCASE
)
_CODE_PLAIN = re.compile(r"<pre[^>]*>\s*<code[^>]*>(.*?)</code>\s*</pre>", _NOCASE)
_PRE = re.compile(r"<pre\b[^>]*>(.*?)</pre>", _NOCASE)

_ORDERED_LIST = re.compile(r"<ol\b[^>]*>(.*?)</ol>", _NOCASE)
_LIST_ITEM = re.compile(r"<li\b[^>]*>(.*?)</li>", _NOCASE)
_LIST_TAG = re.compile(r"</?(?:ul|ol)\b[^>]*>", re.IGNORECASE)
_BLOCKQUOTE = re.compile(r"<blockquote\b[^>]*>(.*?)</blockquote>", _NOCASE)
_PARAGRAPH = re.compile(r"<p\b[^>]*>(.*?)</p>", _NOCASE)
_HR = re.compile(r"<hr\b[^>]*>", re.IGNORECASE)

_LINK = re.compile(r'<a\b[^>]*href="([^"]+)"[^>]*>(.*?)</a>', _NOCASE)
_IMAGE_ALT = re.compile(r'<img\b[^>]*src="([^"]+)"[^>]*alt="([^"]*)"[^>]*>', re.IGNORECASE)
_IMAGE = re.compile(r'<img\b[^>]*src="([^"]+)"[^>]*>', re.IGNORECASE)
_STRONG = re.compile(r"<(strong|b)\b[^>]*>(.*?)</\1>", _NOCASE)
_EMPHASIS = re.compile(r"<(em|i)\b[^>]*>(.*?)</\1>", _NOCASE)
_INLINE_CODE = re.compile(r"<code\b[^>]*>(.*?)</code>", _NOCASE)

_SCRIPT_STYLE = re.compile(r"<(script|style)\b[^>]*>.*?</\1>", _NOCASE)
_MULTI_SPACE = re.compile(r" {2,}")
_BLANK_RUNS = re.compile(r"\n{3,}")

_PLACEHOLDER = "\x00CODE{}\x00"
_PLACEHOLDER_PATTERN = re.compile(r"\x00CODE(\d+)\x00")


class HTMLMarkdownConverter:
    """Best-effort HTML to markdown conversion using ordered regex passes.

    Not a DOM parser: malformed markup degrades the output but never raises.
    Fenced code blocks are set aside before the inline passes and restored at
    the end so their whitespace survives.
    """

    def __init__(self, cleanup: Optional[CleanupRuleEngine] = None):
        self.cleanup = cleanup

    def convert(self, html: str) -> str:
        code_blocks: list[str] = []

        result = self.strip_chrome(html)
        result = self.extract_main_content(result)

        result = self._convert_headings(result)
        result = self._convert_code_blocks(result, code_blocks)
        result = self._convert_lists(result)
        result = _BLOCKQUOTE.sub(lambda m: f"\n\n> {m.group(1).strip()}\n\n", result)
        result = _PARAGRAPH.sub(r"\n\n\1\n\n", result)
        result = _HR.sub("\n\n---\n\n", result)

        result = _LINK.sub(r"[\2](\1)", result)
        result = _IMAGE_ALT.sub(r"![\2](\1)", result)
        result = _IMAGE.sub(r"![](\1)", result)
        result = _STRONG.sub(r"**\2**", result)
        result = _EMPHASIS.sub(r"*\2*", result)
        result = _INLINE_CODE.sub(r"`\1`", result)

        result = _SCRIPT_STYLE.sub("", result)
        result = strip_tags(result, " ")
        result = _MULTI_SPACE.sub(" ", result)
        result = decode_entities(result)
        result = self._cleanup_whitespace(result)
        result = _PLACEHOLDER_PATTERN.sub(lambda m: code_blocks[int(m.group(1))], result)

        if self.cleanup is not None:
            result = self.cleanup.clean(result)
        return result

    @staticmethod
    def strip_chrome(html: str) -> str:
        """Drop nav, header, footer and aside elements."""
        for pattern in _CHROME:
            html = pattern.sub("", html)
        return html

    @staticmethod
    def extract_main_content(html: str) -> str:
        for pattern in _MAIN_CONTENT:
            matches = list(pattern.finditer(html))
            if matches:
                return matches[-1].group(1)
        logger.debug("No main content container found, converting whole document")
        return html

    @staticmethod
    def _convert_headings(html: str) -> str:
        for pattern, hashes in _HEADINGS:
            html = pattern.sub(lambda m, h=hashes: f"\n\n{h} {m.group(1).strip()}\n\n", html)
        return html

    @staticmethod
    def _convert_code_blocks(html: str, code_blocks: list[str]) -> str:
        def stash(language: str, code: str) -> str:
            code = decode_entities(strip_tags(code)).strip("\n")
            code_blocks.append(f"```{language}\n{code}\n```")
            return "\n\n" + _PLACEHOLDER.format(len(code_blocks) - 1) + "\n\n"

        html = _CODE_LANG.sub(lambda m: stash(m.group(1), m.group(2)), html)
        html = _CODE_PLAIN.sub(lambda m: stash("", m.group(1)), html)
        return _PRE.sub(lambda m: stash("", m.group(1)), html)

    @staticmethod
    def _convert_lists(html: str) -> str:
        def number_items(match: re.Match) -> str:
            items = _LIST_ITEM.findall(match.group(1))
            lines = "".join(f"\n{n}. {item.strip()}" for n, item in enumerate(items, start=1))
            return f"\n{lines}\n"

        html = _ORDERED_LIST.sub(number_items, html)
        html = _LIST_ITEM.sub(lambda m: f"\n- {m.group(1).strip()}", html)
        return _LIST_TAG.sub("\n", html)

    @staticmethod
    def _cleanup_whitespace(text: str) -> str:
        lines = [line.strip() for line in text.split("\n")]
        return _BLANK_RUNS.sub("\n\n", "\n".join(lines)).strip()
