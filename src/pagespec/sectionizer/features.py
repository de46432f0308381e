# src/pagespec/sectionizer/features.py
import logging
from typing import Optional

from bs4 import Tag
from pydantic import BaseModel, ConfigDict

from pagespec.dom.query import (
    FORM_CONTROL_TAGS,
    Region,
    element_text,
    is_heading,
    is_link,
    is_media,
    role_of,
    tag_name,
)
from pagespec.sectionizer.settings import SectionizerSettings, compile_pattern, resolve_settings
from pagespec.sectionizer.signature import detect_repeated_siblings

logger = logging.getLogger(__name__)


class BlockFeatures(BaseModel):
    """
    Fixed feature vector of one block candidate, derived only from its subtree.
    """
    model_config = ConfigDict(frozen=True)

    heading_count: int
    text_density: float
    word_count: int
    media_count: int
    link_count: int
    cta_like_count: int
    has_form: bool
    repeated_siblings: bool
    tag: str
    role: Optional[str] = None
    classes: str = ""


def is_clickable(node: Tag) -> bool:
    """Matches `a[href], button, [role=button]`."""
    return is_link(node) or tag_name(node) == "button" or role_of(node) == "button"


def compute_block_features(region: Region, settings: Optional[SectionizerSettings] = None) -> BlockFeatures:
    settings = resolve_settings(settings)
    cta_re = compile_pattern(settings.keywords.cta)

    text = region.spaced_text()
    words = text.split(" ") if text else []
    word_count = len(words)

    heading_count = media_count = link_count = cta_like_count = 0
    has_form = False
    for el in region.elements():
        heading_count += is_heading(el)
        media_count += is_media(el)
        link_count += is_link(el)
        has_form = has_form or tag_name(el) in FORM_CONTROL_TAGS
        if is_clickable(el) and cta_re.search(element_text(el)):
            cta_like_count += 1

    return BlockFeatures(
        heading_count=heading_count,
        text_density=(len(text) / word_count) if word_count else 0.0,
        word_count=word_count,
        media_count=media_count,
        link_count=link_count,
        cta_like_count=cta_like_count,
        has_form=has_form,
        repeated_siblings=bool(detect_repeated_siblings(region.children(), settings)),
        tag=region.tag or "div",
        role=region.role,
        classes=region.classes,
    )
