"""Front-matter and admonition helpers for converted markdown."""

import re
from datetime import datetime, timezone
from typing import Optional

FRONTMATTER_DELIMITER = "---"

_LEADING_RULES = re.compile(r"\A(?:\s*\n)?(?:[^\S\n]*-{3,}[^\S\n]*(?:\n|\Z)(?:\s*\n)?)+")

_CALLOUT_LABELS = {
    "NOTE": "Note",
    "WARNING": "Warning",
    "TIP": "Tip",
    "IMPORTANT": "Important",
    "CAUTION": "Caution",
}


def _single_line(value: str) -> str:
    return " ".join(value.split())


def build_frontmatter(title: str, source: str, fetched: Optional[datetime] = None) -> str:
    """Render the front-matter block, including the blank line after it."""
    fetched = fetched or datetime.now(timezone.utc)
    return (
        f"{FRONTMATTER_DELIMITER}\n"
        f"title: {_single_line(title)}\n"
        f"source: {source}\n"
        f"fetched: {fetched.isoformat(timespec='seconds')}\n"
        f"{FRONTMATTER_DELIMITER}\n\n"
    )


def compose_document(
    title: str, source: str, body: str, fetched: Optional[datetime] = None
) -> str:
    """Prefix a body with front-matter.

    Leading horizontal rules are dropped from the body so the result never
    holds two delimiter-looking blocks in a row.
    """
    body = _LEADING_RULES.sub("", body)
    return build_frontmatter(title, source, fetched) + body


def _closing_index(lines: list[str]) -> int:
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return -1
    for index in range(1, len(lines)):
        if lines[index].strip() == FRONTMATTER_DELIMITER:
            return index
    return -1


def strip_frontmatter(markdown: str) -> str:
    """Return the body without its leading front-matter block.

    Markdown without a closed block comes back unchanged.
    """
    lines = markdown.split("\n")
    closing = _closing_index(lines)
    if closing == -1:
        return markdown
    return "\n".join(lines[closing + 1:]).strip()


def extract_frontmatter(markdown: str) -> dict[str, str]:
    """Parse ``key: value`` lines of the front-matter block."""
    lines = markdown.split("\n")
    closing = _closing_index(lines)
    if closing == -1:
        return {}

    metadata: dict[str, str] = {}
    for line in lines[1:closing]:
        key, sep, value = line.partition(":")
        if not sep:
            continue
        metadata[key.strip()] = value.strip()
    return metadata


def _format_callout(kind: str, lines: list[str]) -> str:
    label = _CALLOUT_LABELS.get(kind.upper(), kind[:1].upper() + kind[1:].lower())
    return f"_**{label}:** {' '.join(lines)}_"


def render_callouts(markdown: str) -> str:
    """Flatten ``> [!NOTE]`` admonitions into a single emphasized line.

    Useful for renderers without GitHub-style alert support.
    """
    result: list[str] = []
    kind: Optional[str] = None
    body: list[str] = []

    for line in markdown.split("\n"):
        stripped = line.strip()

        if stripped.startswith("> [!") and stripped.endswith("]"):
            if kind is not None and body:
                result.append(_format_callout(kind, body))
                result.append("")
            kind = stripped[4:-1]
            body = []
            continue

        if kind is not None and stripped.startswith(">"):
            content = stripped[1:].strip()
            if content:
                body.append(content)
            continue

        if kind is not None:
            if body:
                result.append(_format_callout(kind, body))
                if stripped:
                    result.append("")
            kind = None
            body = []

        result.append(line)

    if kind is not None and body:
        result.append(_format_callout(kind, body))

    return "\n".join(result)
