# src/pagespec/sectionizer/landmarks.py
"""
PASS 0: page landmarks (header/nav, footer, main content).
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Tuple

from bs4 import Tag

from pagespec.dom.models import HTMLDocument
from pagespec.dom.query import (
    SKIPPED_TEXT_TAGS,
    element_children,
    iter_descendants,
    raw_text,
    role_of,
    tag_name,
)

logger = logging.getLogger(__name__)

LandmarkKind = Literal["header", "footer", "main"]


@dataclass(frozen=True)
class Landmark:
    kind: LandmarkKind
    node: Tag
    selector_hint: str


@dataclass(frozen=True)
class Landmarks:
    header: Optional[Landmark] = None
    footer: Optional[Landmark] = None
    main: Optional[Landmark] = None


def _by_tag(name: str) -> Callable[[Tag], bool]:
    return lambda node: tag_name(node) == name


def _by_role(role: str) -> Callable[[Tag], bool]:
    return lambda node: role_of(node) == role


# Preference order: earlier entries win even when a later one appears first in the document.
HEADER_MATCHERS: Tuple[Callable[[Tag], bool], ...] = (
    _by_tag("header"), _by_role("banner"), _by_tag("nav"), _by_role("navigation"),
)
FOOTER_MATCHERS: Tuple[Callable[[Tag], bool], ...] = (_by_tag("footer"), _by_role("contentinfo"))
MAIN_MATCHERS: Tuple[Callable[[Tag], bool], ...] = (_by_tag("main"), _by_role("main"))


def _selector_hint(node: Tag) -> str:
    role = role_of(node)
    if role:
        return f'[role="{role}"]'
    return tag_name(node) or "div"


def _first_match(elements: List[Tag], matchers) -> Optional[Tag]:
    for matcher in matchers:
        for el in elements:
            if matcher(el):
                return el
    return None


def _largest_body_child(root: Tag, exclude: Tuple[Optional[Tag], ...]) -> Optional[Tag]:
    """Direct child of the body with the most text, skipping landmarks and non-content tags."""
    largest: Optional[Tag] = None
    largest_size = -1
    for child in element_children(root):
        if any(child is other for other in exclude if other is not None):
            continue
        if tag_name(child) in SKIPPED_TEXT_TAGS:
            continue
        size = len(raw_text(child).strip())
        if size > largest_size:
            largest, largest_size = child, size
    return largest


def detect_landmarks(doc: HTMLDocument) -> Landmarks:
    """
    Locates at most one header, footer and main region. Missing landmarks are None.
    """
    root = doc.root
    if root is None:
        return Landmarks()

    elements = list(iter_descendants(doc.soup))

    header_node = _first_match(elements, HEADER_MATCHERS)
    footer_node = _first_match(elements, FOOTER_MATCHERS)
    main_node = _first_match(elements, MAIN_MATCHERS)

    header = Landmark("header", header_node, _selector_hint(header_node)) if header_node is not None else None
    footer = Landmark("footer", footer_node, _selector_hint(footer_node)) if footer_node is not None else None

    if main_node is not None:
        main = Landmark("main", main_node, _selector_hint(main_node))
    else:
        fallback = _largest_body_child(root, (header_node, footer_node))
        main = Landmark("main", fallback, "body > *") if fallback is not None else None

    logger.debug(
        "Landmarks: header=%s footer=%s main=%s",
        header.selector_hint if header else None,
        footer.selector_hint if footer else None,
        main.selector_hint if main else None,
    )
    return Landmarks(header=header, footer=footer, main=main)


def main_content_area(doc: HTMLDocument, landmarks: Landmarks) -> Optional[Tag]:
    """The node to segment: the main landmark, else the body itself."""
    if landmarks.main is not None:
        return landmarks.main.node
    return doc.root
