"""Pydantic models for the Apple documentation render JSON.

Only the fields the markdown renderer reads are modelled; everything else in
the payload is ignored.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AppleModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _join_code(code: Union[str, list[str], None]) -> Optional[str]:
    if code is None:
        return None
    if isinstance(code, list):
        return "\n".join(code)
    return code


class InlineNode(AppleModel):
    type: Optional[str] = None
    text: Optional[str] = None
    code: Union[str, list[str], None] = None
    identifier: Optional[str] = None
    is_active: Optional[bool] = None
    inline_content: Optional[list["InlineNode"]] = None

    @property
    def code_text(self) -> Optional[str]:
        return _join_code(self.code)


class ContentNode(AppleModel):
    type: Optional[str] = None
    text: Optional[str] = None
    code: Union[str, list[str], None] = None
    syntax: Optional[str] = None
    content: Optional[list["ContentNode"]] = None
    inline_content: Optional[list[InlineNode]] = None
    header: Optional[str] = None
    items: Optional[list["ContentNode"]] = None
    style: Optional[str] = None
    name: Optional[str] = None
    level: Optional[int] = None
    anchor: Optional[str] = None

    @property
    def code_text(self) -> Optional[str]:
        return _join_code(self.code)


class Platform(AppleModel):
    name: Optional[str] = None
    introduced_at: Optional[str] = None


class Module(AppleModel):
    name: Optional[str] = None


class Metadata(AppleModel):
    title: Optional[str] = None
    role_heading: Optional[str] = None
    role: Optional[str] = None
    platforms: Optional[list[Platform]] = None
    modules: Optional[list[Module]] = None


class Token(AppleModel):
    kind: str
    text: str
    identifier: Optional[str] = None


class Declaration(AppleModel):
    tokens: list[Token]
    languages: Optional[list[str]] = None
    platforms: Optional[list[str]] = None


class Parameter(AppleModel):
    name: str
    content: Optional[list[ContentNode]] = None


class PrimaryContentSection(AppleModel):
    kind: str
    content: Optional[list[ContentNode]] = None
    declarations: Optional[list[Declaration]] = None
    parameters: Optional[list[Parameter]] = None


class TopicSection(AppleModel):
    title: str
    identifiers: Optional[list[str]] = None
    generated: Optional[bool] = None


class SeeAlsoSection(AppleModel):
    title: Optional[str] = None
    identifiers: list[str]


class Reference(AppleModel):
    title: Optional[str] = None
    url: Optional[str] = None
    identifier: Optional[str] = None
    type: Optional[str] = None
    kind: Optional[str] = None
    role: Optional[str] = None
    abstract: Optional[list[InlineNode]] = None


class Identifier(AppleModel):
    url: Optional[str] = None
    interface_language: Optional[str] = None


class AppleDocJSON(AppleModel):
    identifier: Optional[Identifier] = None
    metadata: Optional[Metadata] = None
    abstract: Optional[list[InlineNode]] = None
    primary_content_sections: Optional[list[PrimaryContentSection]] = None
    topic_sections: Optional[list[TopicSection]] = None
    see_also_sections: Optional[list[SeeAlsoSection]] = None
    references: Optional[dict[str, Reference]] = None


InlineNode.model_rebuild()
ContentNode.model_rebuild()
