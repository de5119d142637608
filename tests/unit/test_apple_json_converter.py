"""Tests for the Apple documentation JSON converter."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from docscout.core.errors import ConversionError
from docscout.core.markdown import extract_frontmatter
from docscout.infrastructure.converters import AppleDocJSONConverter
from docscout.infrastructure.converters.apple_json_converter import error_path
from docscout.infrastructure.converters.apple_json_models import ContentNode, Reference

URL = "https://developer.apple.com/documentation/swift/array"
FETCHED = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def nodes(*raw: dict) -> list[ContentNode]:
    return [ContentNode.model_validate(node) for node in raw]


def paragraph(text: str) -> dict:
    return {"type": "paragraph", "inlineContent": [{"type": "text", "text": text}]}


@pytest.fixture
def converter():
    return AppleDocJSONConverter()


class TestRenderContent:
    def test_heading_and_code_listing(self, converter):
        result = converter.render_content(
            nodes(
                {"type": "heading", "text": "Overview", "level": 2},
                {"type": "codeListing", "syntax": "swift", "code": ["let x = 1"]},
            )
        )
        assert result == "## Overview\n\n```swift\nlet x = 1\n```\n\n"

    def test_code_listing_defaults_to_swift(self, converter):
        result = converter.render_content(nodes({"type": "codeListing", "code": "a\nb"}))
        assert result == "```swift\na\nb\n```\n\n"

    def test_lists(self, converter):
        ordered = {"type": "orderedList", "items": [{"content": [paragraph("One")]}, {"content": [paragraph("Two")]}]}
        unordered = {"type": "unorderedList", "items": [{"content": [paragraph("Item")]}]}
        assert converter.render_content(nodes(ordered)) == "1. One\n2. Two\n\n"
        assert converter.render_content(nodes(unordered)) == "- Item\n\n"

    def test_aside_becomes_callout(self, converter):
        aside = {"type": "aside", "style": "warning", "content": [paragraph("Careful.")]}
        assert converter.render_content(nodes(aside)) == "> [!WARNING]\n> Careful.\n\n"

    def test_inline_styles(self, converter):
        node = {
            "type": "paragraph",
            "inlineContent": [
                {"type": "emphasis", "inlineContent": [{"type": "text", "text": "very"}]},
                {"type": "text", "text": " "},
                {"type": "strong", "text": "bold"},
                {"type": "text", "text": " "},
                {"type": "codeVoice", "code": "count"},
            ],
        }
        assert converter.render_content(nodes(node)) == "_very_ **bold** `count`\n\n"

    def test_reference_uses_table_title_or_last_segment(self, converter):
        node = {
            "type": "paragraph",
            "inlineContent": [
                {"type": "reference", "identifier": "doc://swift/documentation/swift/array/append(_:)"},
                {"type": "text", "text": " and "},
                {"type": "reference", "identifier": "doc://swift/documentation/swift/array/remove(at:)"},
            ],
        }
        references = {
            "doc://swift/documentation/swift/array/append(_:)": Reference(title="append(_:)"),
        }
        assert converter.render_content(nodes(node), references) == "`append(_:)` and `remove(at:)`\n\n"

    def test_unknown_block_renders_children(self, converter):
        node = {"type": "tabNavigator", "content": [paragraph("Inside")]}
        assert converter.render_content(nodes(node)) == "Inside\n\n"

    def test_block_depth_is_capped(self, converter):
        shallow: dict = {"type": "text", "text": "deep"}
        for _ in range(10):
            shallow = {"type": "group", "content": [shallow]}
        assert converter.render_content(nodes(shallow)) == "deep"

        deep: dict = {"type": "text", "text": "deep"}
        for _ in range(60):
            deep = {"type": "group", "content": [deep]}
        assert converter.render_content(nodes(deep)) == ""


class TestConvert:
    def test_full_document(self, converter):
        payload = {
            "metadata": {
                "title": "Array",
                "roleHeading": "Generic Structure",
                "platforms": [{"name": "iOS", "introducedAt": "8.0"}, {"name": "macOS"}],
            },
            "abstract": [{"type": "text", "text": "An ordered collection."}],
            "primaryContentSections": [
                {
                    "kind": "declarations",
                    "declarations": [
                        {
                            "tokens": [
                                {"kind": "keyword", "text": "struct"},
                                {"kind": "text", "text": " "},
                                {"kind": "identifier", "text": "Array"},
                            ]
                        }
                    ],
                },
                {
                    "kind": "content",
                    "content": [
                        {
                            "type": "paragraph",
                            "inlineContent": [
                                {"type": "text", "text": "Use "},
                                {"type": "reference", "identifier": "doc://s/append"},
                                {"type": "text", "text": " to add."},
                            ],
                        }
                    ],
                },
            ],
            "topicSections": [{"title": "Creating", "identifiers": ["doc://s/init", "doc://s/missing"]}],
            "seeAlsoSections": [{"title": "Related", "identifiers": ["doc://s/set"]}],
            "references": {
                "doc://s/append": {"title": "append(_:)"},
                "doc://s/init": {
                    "title": "init()",
                    "abstract": [{"type": "text", "text": "Creates an empty array."}],
                },
                "doc://s/set": {"title": "Set"},
            },
        }

        result = converter.convert(json.dumps(payload).encode(), URL, FETCHED)

        assert result == (
            "---\n"
            "title: Array\n"
            f"source: {URL}\n"
            "fetched: 2025-01-02T03:04:05+00:00\n"
            "---\n\n"
            "# Array\n\n"
            "_Generic Structure_\n\n"
            "**Platforms:** iOS 8.0+, macOS\n\n"
            "An ordered collection.\n\n"
            "## Declaration\n\n"
            "```swift\nstruct Array\n```\n\n"
            "Use `append(_:)` to add.\n\n"
            "## Creating\n\n"
            "- `init()` - Creates an empty array.\n\n"
            "## See Also\n\n"
            "- `Set`\n"
        )

    def test_parameters_and_other_sections(self, converter):
        payload = {
            "metadata": {"title": "insert(_:at:)"},
            "primaryContentSections": [
                {"kind": "parameters", "parameters": [{"name": "index", "content": [paragraph("The position.")]}]},
                {"kind": "mentions", "content": [paragraph("Elsewhere.")]},
            ],
        }
        result = converter.convert(json.dumps(payload), URL, FETCHED)
        assert "## Parameters\n\n- **index**: The position.\n\n" in result
        assert result.endswith("## Mentions\n\nElsewhere.\n")

    def test_missing_title_uses_default(self, converter):
        result = converter.convert(b"{}", URL, FETCHED)
        assert extract_frontmatter(result)["title"] == "Apple Documentation"

    def test_missing_required_field_names_path(self, converter):
        payload = {"primaryContentSections": [{"content": []}]}
        with pytest.raises(ConversionError, match=r"at 'primaryContentSections\[0\]\.kind'"):
            converter.convert(json.dumps(payload), URL)

    def test_invalid_json(self, converter):
        with pytest.raises(ConversionError, match="<root>"):
            converter.convert(b"<html>not json</html>", URL)


class TestErrorPath:
    def test_formats_indices(self):
        assert error_path(("topicSections", 2, "title")) == "topicSections[2].title"

    def test_empty(self):
        assert error_path(()) == "<root>"
