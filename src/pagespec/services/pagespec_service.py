# src/pagespec/services/pagespec_service.py
"""
PageSpec inference.

Combines the sectionizer output with page-level facts (template hint,
links, forms, meta) into the PageSpec record persisted per page.
"""
import logging
import re
from typing import List, Optional, Tuple

from pagespec.dom.builder import parse_html
from pagespec.dom.models import HTMLDocument
from pagespec.dom.query import element_text, find_all, get_attr, is_link, tag_name
from pagespec.model import Form, PageLinks, PageMeta, PageSpec, TemplateHint
from pagespec.sectionizer.extract import extract_form
from pagespec.sectionizer.pipeline import sectionize_document
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings
from pagespec.sectionizer.trace import PipelineTrace
from pagespec.services.meta_parse_service import MetaParseService
from pagespec.utils.url_utils import UrlUtils

logger = logging.getLogger(__name__)

NO_SECTIONS_NOTE = "Warning: No sections could be extracted from the page"

HOME_SLUGS = frozenset({"", "index", "home"})
CONTACT_SLUG_RE = re.compile(r"contact|reach|touch", re.IGNORECASE)
BLOG_SLUG_RE = re.compile(r"blog|news|articles", re.IGNORECASE)
LANDING_CTA_RE = re.compile(r"sign|buy|get|start|join|subscribe")

BLOG_MIN_ARTICLES = 3
LANDING_MAX_CTAS = 3
CONTENT_MIN_PARAGRAPHS = 5


def _count(doc: HTMLDocument, name: str) -> int:
    return len(find_all(doc.soup, lambda el: tag_name(el) == name))


def infer_template_hint(slug: str, doc: HTMLDocument) -> TemplateHint:
    if slug in HOME_SLUGS:
        return "home"
    if CONTACT_SLUG_RE.search(slug):
        return "contact"
    if doc.is_empty:
        return "generic"
    if BLOG_SLUG_RE.search(slug) and _count(doc, "article") >= BLOG_MIN_ARTICLES:
        return "blogIndex"

    cta_count = sum(
        1 for el in find_all(doc.soup, lambda el: tag_name(el) == "button" or is_link(el))
        if LANDING_CTA_RE.search(element_text(el).lower())
    )
    if _count(doc, "h1") == 1 and 1 <= cta_count <= LANDING_MAX_CTAS:
        return "landing"

    if _count(doc, "p") >= CONTENT_MIN_PARAGRAPHS:
        return "content"
    return "generic"


def extract_page_links(doc: HTMLDocument, base_url: str) -> PageLinks:
    """Every navigable link on the page, resolved, de-duplicated in first-seen order."""
    links = PageLinks()
    if doc.is_empty:
        return links

    seen = set()
    for el in find_all(doc.soup, is_link):
        href = get_attr(el, "href")
        if not UrlUtils.is_navigable_href(href):
            continue
        resolved = UrlUtils.resolve(base_url, href)
        if resolved is None or resolved in seen:
            continue
        seen.add(resolved)
        if UrlUtils.is_internal_url(resolved, base_url):
            links.internal.append(resolved)
        else:
            links.external.append(resolved)
    return links


def extract_page_forms(doc: HTMLDocument, settings: Optional[SectionizerSettings] = None) -> List[Form]:
    if doc.is_empty:
        return []
    return [extract_form(form, settings) for form in find_all(doc.soup, lambda el: tag_name(el) == "form")]


def infer_page_spec(
        url: str,
        slug: str,
        base_url: str,
        html: str,
        meta: Optional[PageMeta] = None,
        debug: bool = False,
        settings: Optional[SectionizerSettings] = None,
) -> Tuple[PageSpec, Optional[PipelineTrace]]:
    """
    Builds the PageSpec of one rendered page.

    Args:
        url: The page's own URL.
        slug: Stable page identifier used in pattern references.
        base_url: Site root used for link resolution.
        meta: Metadata captured with the page; read from the HTML head when omitted.
        debug: Also return the sectionizer's pipeline trace.

    Returns:
        (PageSpec, PipelineTrace or None)
    """
    settings = resolve_settings(settings)
    doc = parse_html(html, url)

    sections, trace = sectionize_document(doc, base_url, settings, collect_trace=debug)

    notes: List[str] = []
    if not sections:
        logger.warning("No sections extracted for page '%s' (%s).", slug, url)
        notes.append(NO_SECTIONS_NOTE)

    if meta is None:
        meta = MetaParseService(html).extract_page_meta()

    spec = PageSpec(
        base_url=base_url,
        url=url,
        slug=slug,
        template_hint=infer_template_hint(slug, doc),
        meta=meta,
        sections=sections,
        links=extract_page_links(doc, base_url),
        forms=extract_page_forms(doc, settings),
        notes=notes,
    )
    logger.debug("PageSpec for '%s': template=%s, %d sections.", slug, spec.template_hint, len(sections))
    return spec, trace
