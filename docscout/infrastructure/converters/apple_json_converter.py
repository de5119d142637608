import logging
from datetime import datetime
from typing import Optional, Union

from pydantic import ValidationError

from docscout.core.errors import ConversionError
from docscout.core.markdown import compose_document

from .apple_json_models import (
    AppleDocJSON,
    ContentNode,
    InlineNode,
    PrimaryContentSection,
    Reference,
    SeeAlsoSection,
    TopicSection,
)

logger = logging.getLogger(__name__)

MAX_BLOCK_DEPTH = 50
MAX_INLINE_DEPTH = 20
DEFAULT_TITLE = "Apple Documentation"


def error_path(loc: tuple) -> str:
    """``("primaryContentSections", 0, "kind")`` -> ``primaryContentSections[0].kind``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<root>"


class _Renderer:
    """Markdown renderer bound to one document's reference table."""

    def __init__(self, references: Optional[dict[str, Reference]]):
        self.references = references or {}

    def blocks(self, nodes: list[ContentNode], depth: int = 0) -> str:
        if depth >= MAX_BLOCK_DEPTH:
            return ""
        return "".join(self.block(node, depth) for node in nodes)

    def block(self, node: ContentNode, depth: int) -> str:
        kind = node.type

        if kind == "text":
            return node.text or ""

        if kind == "codeVoice":
            code = node.code_text or node.text
            return f"`{code}`" if code else ""

        if kind == "paragraph":
            return self.inline(node.inline_content or []) + "\n\n"

        if kind == "codeListing":
            code = node.code_text
            if code is None:
                return ""
            return f"```{node.syntax or 'swift'}\n{code}\n```\n\n"

        if kind == "heading":
            text = node.text or self.inline(node.inline_content or [])
            if not text:
                return ""
            return f"{'#' * (node.level or 2)} {text}\n\n"

        if kind in ("unorderedList", "orderedList"):
            return self._list(node, depth)

        if kind == "aside":
            return self._aside(node, depth)

        # Untyped or unknown block: render whatever children it has.
        if node.content is not None:
            return self.blocks(node.content, depth + 1)
        if node.inline_content is not None:
            return self.inline(node.inline_content)
        if kind is None and node.text:
            return node.text
        return ""

    def _list(self, node: ContentNode, depth: int) -> str:
        if not node.items:
            return ""
        ordered = node.type == "orderedList"
        lines = []
        for number, item in enumerate(node.items, start=1):
            if item.content is None:
                continue
            text = self.blocks(item.content, depth + 1).strip()
            marker = f"{number}." if ordered else "-"
            lines.append(f"{marker} {text}\n")
        return "".join(lines) + "\n"

    def _aside(self, node: ContentNode, depth: int) -> str:
        style = (node.style or "note").upper()
        result = f"> [!{style}]\n"
        if node.content:
            body = self.blocks(node.content, depth + 1)
            result += "".join(f"> {line}\n" for line in body.split("\n") if line)
        return result + "\n"

    def inline(self, nodes: list[InlineNode], depth: int = 0) -> str:
        if depth >= MAX_INLINE_DEPTH:
            return ""
        return "".join(self._inline_node(node, depth) for node in nodes)

    def _inline_node(self, node: InlineNode, depth: int) -> str:
        kind = node.type

        if kind == "codeVoice":
            code = node.code_text or node.text
            return f"`{code}`" if code else ""

        if kind in ("emphasis", "strong"):
            text = node.text or self.inline(node.inline_content or [], depth + 1)
            if not text:
                return ""
            return f"_{text}_" if kind == "emphasis" else f"**{text}**"

        if kind == "reference":
            if not node.identifier:
                return ""
            return f"`{self.reference_title(node.identifier)}`"

        return node.text or ""

    def reference_title(self, identifier: str) -> str:
        reference = self.references.get(identifier)
        if reference is not None and reference.title:
            return reference.title
        return identifier.rstrip("/").split("/")[-1]


class AppleDocJSONConverter:
    """Converts Apple documentation JSON into markdown with front-matter."""

    def convert(
        self,
        raw: Union[bytes, str],
        source_url: str,
        fetched: Optional[datetime] = None,
    ) -> str:
        """Render one documentation page.

        Args:
            raw: JSON payload as served by ``/tutorials/data/...``.
            source_url: Human-facing page URL recorded in the front-matter.
            fetched: Timestamp for the front-matter, defaults to now.

        Raises:
            ConversionError: Payload is not JSON or does not have the
                expected structure; the message names the failing path.
        """
        doc = self._decode(raw)
        renderer = _Renderer(doc.references)
        metadata = doc.metadata

        body = ""
        title = metadata.title if metadata else None
        if title:
            body += f"# {title}\n\n"

        if metadata and metadata.role_heading:
            body += f"_{metadata.role_heading}_\n\n"

        if metadata and metadata.platforms:
            platforms = [
                f"{p.name} {p.introduced_at}+" if p.introduced_at else p.name
                for p in metadata.platforms
                if p.name
            ]
            if platforms:
                body += f"**Platforms:** {', '.join(platforms)}\n\n"

        if doc.abstract:
            body += renderer.inline(doc.abstract) + "\n\n"

        for section in doc.primary_content_sections or []:
            body += self._primary_section(section, renderer)

        for topic in doc.topic_sections or []:
            body += self._topic_section(topic, renderer)

        for see_also in doc.see_also_sections or []:
            body += self._see_also_section(see_also, renderer)

        logger.debug(f"Converted {source_url} ({len(body)} chars)")
        return compose_document(title or DEFAULT_TITLE, source_url, body.rstrip() + "\n", fetched)

    def render_content(self, nodes: list[ContentNode], references: Optional[dict[str, Reference]] = None) -> str:
        """Render a bare block list, without front-matter."""
        return _Renderer(references).blocks(nodes)

    @staticmethod
    def _decode(raw: Union[bytes, str]) -> AppleDocJSON:
        try:
            return AppleDocJSON.model_validate_json(raw)
        except ValidationError as e:
            first = e.errors()[0]
            path = error_path(tuple(first["loc"]))
            raise ConversionError(
                f"Failed to decode Apple documentation JSON: {first['msg']} at '{path}'"
            ) from e

    @staticmethod
    def _primary_section(section: PrimaryContentSection, renderer: _Renderer) -> str:
        if section.kind == "declarations":
            result = "## Declaration\n\n"
            for declaration in section.declarations or []:
                code = "".join(token.text for token in declaration.tokens)
                result += f"```swift\n{code}\n```\n\n"
            return result

        if section.kind == "parameters":
            result = "## Parameters\n\n"
            for parameter in section.parameters or []:
                text = renderer.blocks(parameter.content or []).strip()
                result += f"- **{parameter.name}**: {text}\n"
            return result + "\n"

        if section.kind in ("content", "discussion"):
            return renderer.blocks(section.content or [])

        if section.content is None:
            return ""
        heading = section.kind[:1].upper() + section.kind[1:].lower()
        return f"## {heading}\n\n" + renderer.blocks(section.content)

    @staticmethod
    def _topic_section(section: TopicSection, renderer: _Renderer) -> str:
        result = f"## {section.title}\n\n"
        for identifier in section.identifiers or []:
            reference = renderer.references.get(identifier)
            if reference is None or not reference.title:
                continue
            line = f"- `{reference.title}`"
            if reference.abstract:
                abstract = renderer.inline(reference.abstract).strip()
                if abstract:
                    line += f" - {abstract}"
            result += line + "\n"
        return result + "\n"

    @staticmethod
    def _see_also_section(section: SeeAlsoSection, renderer: _Renderer) -> str:
        result = "## See Also\n\n"
        for identifier in section.identifiers:
            reference = renderer.references.get(identifier)
            if reference is not None and reference.title:
                result += f"- `{reference.title}`\n"
        return result + "\n"
