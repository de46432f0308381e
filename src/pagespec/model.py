# src/pagespec/model.py
"""
Data models for the PageSpec layer.

Records are serialized with camelCase keys (the persisted PageSpec shape)
and accept snake_case field names on input. Sections and patterns are
frozen: once the pipeline emits them they are never mutated.
"""
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SPEC_VERSION = "1.0.0"

SectionType = Literal[
    "header",
    "hero",
    "featureGrid",
    "gallery",
    "testimonial",
    "pricing",
    "faq",
    "cta",
    "contactForm",
    "richText",
    "footer",
    "grid",
    "list",
    "unknown",
]

TemplateHint = Literal["home", "landing", "content", "contact", "blogIndex", "generic"]


class SpecModel(BaseModel):
    """Base for every persisted record: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class FrozenSpecModel(SpecModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# --- Section parts ---

class Cta(FrozenSpecModel):
    text: str
    href: Optional[str] = None


class Media(FrozenSpecModel):
    type: Literal["image", "video"]
    src: Optional[str] = None
    alt: Optional[str] = None
    local_asset: Optional[str] = None


class FormField(FrozenSpecModel):
    label: Optional[str] = None
    type: str
    required: bool = False


class Form(FrozenSpecModel):
    name: Optional[str] = None
    fields: List[FormField] = Field(default_factory=list)
    submit_text: Optional[str] = None


class DomAnchor(FrozenSpecModel):
    strategy: Literal["selector", "path"]
    value: str


class StyleHints(FrozenSpecModel):
    background_color: Optional[str] = None
    layout: Optional[Literal["fullWidth", "contained"]] = None

    @property
    def is_empty(self) -> bool:
        return not self.background_color and not self.layout


class LinkCounts(FrozenSpecModel):
    internal: int = Field(default=0, ge=0)
    external: int = Field(default=0, ge=0)


class Section(FrozenSpecModel):
    """
    One typed region of a page, in document order.
    `id` is 'sec_NNN', 1-based and contiguous across header, body and footer.
    """
    id: str = Field(pattern=r"^sec_\d{3,}$")
    type: SectionType
    heading: Optional[str] = None
    text_blocks: List[str] = Field(default_factory=list)
    ctas: List[Cta] = Field(default_factory=list)
    media: List[Media] = Field(default_factory=list)
    dom_anchor: Optional[DomAnchor] = None
    forms: List[Form] = Field(default_factory=list)
    links: Optional[LinkCounts] = None
    notes: List[str] = Field(default_factory=list)
    style_hints: Optional[StyleHints] = None
    structural_hash: Optional[str] = None


# --- Page level ---

class OpenGraph(SpecModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None


class PageMeta(SpecModel):
    title: str = ""
    description: Optional[str] = None
    canonical: Optional[str] = None
    og: Optional[OpenGraph] = None


class PageLinks(SpecModel):
    internal: List[str] = Field(default_factory=list)
    external: List[str] = Field(default_factory=list)


class PageSpec(SpecModel):
    version: Literal["1.0.0"] = SPEC_VERSION
    base_url: str
    url: str
    slug: str
    template_hint: TemplateHint
    meta: PageMeta
    sections: List[Section]
    links: PageLinks
    forms: List[Form]
    notes: List[str] = Field(default_factory=list)


# --- Patterns ---

class PatternStats(FrozenSpecModel):
    count: int = Field(ge=1)
    heading_count: int = Field(default=0, ge=0)
    text_count: int = Field(default=0, ge=0)
    media_count: int = Field(default=0, ge=0)
    cta_count: int = Field(default=0, ge=0)
    has_form: bool = False


class Pattern(FrozenSpecModel):
    pattern_id: str
    type: str
    signature: str
    examples: List[str]
    stats: PatternStats


class LayoutPatterns(SpecModel):
    patterns: List[Pattern] = Field(default_factory=list)


# --- Run summary ---

class PageStatus(SpecModel):
    slug: str
    url: str
    status: Literal["success", "failed"]
    section_count: Optional[int] = Field(default=None, ge=0)
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class SummaryStats(SpecModel):
    pages_processed: int = Field(ge=0)
    pages_succeeded: int = Field(ge=0)
    pages_failed: int = Field(ge=0)
    total_sections: int = Field(ge=0)
    total_patterns: int = Field(ge=0)


class SpecSummary(SpecModel):
    version: Literal["1.0.0"] = SPEC_VERSION
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    base_url: str
    stats: SummaryStats
    pages: List[PageStatus] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


# --- Crawl input ---

class ManifestPage(SpecModel):
    url: str
    path: str = "/"


class Manifest(SpecModel):
    pages: List[ManifestPage] = Field(default_factory=list)
