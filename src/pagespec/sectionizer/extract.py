# src/pagespec/sectionizer/extract.py
"""
PASS 3: content extraction.

Pulls the heading, text blocks, calls-to-action, media, forms, link counts
and style hints out of a classified region.
"""
import logging
from typing import List, Optional

from bs4 import Tag

from pagespec.dom.query import (
    Region,
    background_color,
    closest,
    element_text,
    find_all,
    find_first,
    get_attr,
    has_attr,
    inline_style,
    is_heading,
    is_link,
    is_navigation,
    parse_int_prefix,
    role_of,
    tag_name,
)
from pagespec.model import Cta, Form, FormField, LinkCounts, Media, StyleHints
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings
from pagespec.utils.text_utils import normalize_whitespace
from pagespec.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

TEXT_BLOCK_TAGS = frozenset({"p", "li", "blockquote"})
FIELD_TAGS = frozenset({"input", "textarea", "select"})
NON_FIELD_INPUT_TYPES = frozenset({"submit", "button"})


# -------- Heading --------

def extract_heading(region: Region, settings: Optional[SectionizerSettings] = None) -> Optional[str]:
    """
    First non-empty h1-h6 in document order; otherwise a short text styled
    with an inline font-size above the threshold (20px by default).
    """
    t = resolve_settings(settings).thresholds
    for el in region.select(is_heading):
        text = element_text(el)
        if text:
            return text

    large = region.first(
        lambda el: (parse_int_prefix(inline_style(el, "font-size")) or 0) > t.heading_min_font_px
    )
    if large is not None:
        text = element_text(large)
        if text and len(text) < t.heading_max_chars:
            return text
    return None


# -------- Text blocks --------

def _is_text_block(node: Tag) -> bool:
    name = tag_name(node)
    if name in TEXT_BLOCK_TAGS:
        return True
    return name == "div" and "text" in (get_attr(node, "class") or "").split()


def extract_text_blocks(region: Region, settings: Optional[SectionizerSettings] = None) -> List[str]:
    t = resolve_settings(settings).thresholds
    blocks: List[str] = []
    for el in region.select(_is_text_block):
        if len(blocks) >= t.max_text_blocks:
            break
        text = element_text(el)
        if len(text) > t.text_block_min_chars:
            blocks.append(text)
    return blocks


# -------- CTAs --------

def _is_cta_candidate(node: Tag) -> bool:
    """Matches `a[href], button, [role=button], [data-testid*=button]`."""
    return (
        is_link(node)
        or tag_name(node) == "button"
        or role_of(node) == "button"
        or "button" in (get_attr(node, "data-testid") or "")
    )


def extract_ctas(region: Region, exclude_nav: bool = False, settings: Optional[SectionizerSettings] = None) -> List[Cta]:
    """
    Calls-to-action in document order. With `exclude_nav` (header/footer
    sections) anything inside a nav / [role=navigation] is skipped.
    """
    t = resolve_settings(settings).thresholds
    ctas: List[Cta] = []
    for el in region.select(_is_cta_candidate):
        if exclude_nav and closest(el, is_navigation) is not None:
            continue
        text = element_text(el)
        if 0 < len(text) < t.cta_max_chars:
            ctas.append(Cta(text=text, href=get_attr(el, "href")))
    return ctas


# -------- Media --------

def _video_src(video: Tag) -> Optional[str]:
    src = get_attr(video, "src")
    if src:
        return src
    source = find_first(video, lambda el: tag_name(el) == "source")
    return (get_attr(source, "src") or None) if source is not None else None


def extract_media(region: Region) -> List[Media]:
    """Images first, then videos, each in document order. Elements without a source are skipped."""
    media: List[Media] = []
    for img in region.select(lambda el: tag_name(el) == "img"):
        src = get_attr(img, "src")
        if src:
            media.append(Media(type="image", src=src, alt=get_attr(img, "alt") or None))
    for video in region.select(lambda el: tag_name(el) == "video"):
        src = _video_src(video)
        if src:
            media.append(Media(type="video", src=src))
    return media


# -------- Forms --------

def _field_label(form: Tag, field: Tag, max_parent_chars: int) -> Optional[str]:
    field_id = get_attr(field, "id")
    if field_id:
        label = find_first(form, lambda el: tag_name(el) == "label" and get_attr(el, "for") == field_id)
        if label is not None:
            text = element_text(label)
            if text:
                return text

    hint = get_attr(field, "placeholder") or get_attr(field, "aria-label")
    if hint:
        return hint

    parent = field.parent
    if isinstance(parent, Tag):
        parent_text = element_text(parent)
        if parent_text and len(parent_text) < max_parent_chars:
            return parent_text
    return None


def _submit_text(form: Tag) -> Optional[str]:
    submit = find_first(
        form,
        lambda el: tag_name(el) in ("button", "input") and (get_attr(el, "type") or "").lower() == "submit",
    )
    if submit is None:
        return None
    return normalize_whitespace(element_text(submit) or get_attr(submit, "value") or "") or None


def extract_form(form: Tag, settings: Optional[SectionizerSettings] = None) -> Form:
    """One <form>: its name, its data fields (submit/button inputs excluded) and its submit label."""
    t = resolve_settings(settings).thresholds
    fields: List[FormField] = []
    for field in find_all(form, lambda el: tag_name(el) in FIELD_TAGS):
        field_type = (get_attr(field, "type") or tag_name(field) or "text").lower()
        if field_type in NON_FIELD_INPUT_TYPES:
            continue
        fields.append(FormField(
            label=_field_label(form, field, t.label_parent_max_chars),
            type=field_type,
            required=has_attr(field, "required") or get_attr(field, "aria-required") == "true",
        ))
    return Form(
        name=get_attr(form, "name") or get_attr(form, "id") or None,
        fields=fields,
        submit_text=_submit_text(form),
    )


def extract_forms(region: Region, settings: Optional[SectionizerSettings] = None) -> List[Form]:
    return [extract_form(form, settings) for form in region.select(lambda el: tag_name(el) == "form")]


# -------- Links --------

def extract_link_counts(region: Region, base_url: str) -> LinkCounts:
    """Counts navigable links by origin; fragments and script/mail/phone links are ignored."""
    internal = external = 0
    for link in region.select(is_link):
        href = get_attr(link, "href")
        if not UrlUtils.is_navigable_href(href):
            continue
        resolved = UrlUtils.resolve(base_url, href)
        if resolved is None:
            continue
        if UrlUtils.is_internal_url(resolved, base_url):
            internal += 1
        else:
            external += 1
    return LinkCounts(internal=internal, external=external)


# -------- Style hints --------

def extract_style_hints(region: Region, settings: Optional[SectionizerSettings] = None) -> Optional[StyleHints]:
    t = resolve_settings(settings).thresholds
    node = region.anchor

    layout = None
    width = (inline_style(node, "width") or "").replace(" ", "").lower()
    max_width = inline_style(node, "max-width")
    if width in ("100%", "100vw"):
        layout = "fullWidth"
    elif max_width and max_width.lower() != "none":
        max_width_px = parse_int_prefix(max_width)
        if max_width_px is not None and 0 < max_width_px < t.contained_max_width_px:
            layout = "contained"

    hints = StyleHints(background_color=background_color(node), layout=layout)
    return None if hints.is_empty else hints
