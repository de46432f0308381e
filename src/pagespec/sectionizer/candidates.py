# src/pagespec/sectionizer/candidates.py
"""
PASS 1: block candidate generation.

Splits the main content area into ordered DOM regions. Semantic containers
are used directly when present; otherwise direct children are grouped
between visual boundaries (headings, background changes, media blocks).
"""
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from bs4 import Tag

from pagespec.dom.query import (
    FORM_CONTROL_TAGS,
    SKIPPED_TEXT_TAGS,
    Region,
    background_color,
    class_string,
    element_children,
    is_heading,
    is_link,
    is_media,
    raw_text,
    tag_name,
)
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings

logger = logging.getLogger(__name__)

SEMANTIC_CONTAINER_TAGS = frozenset({"section", "article", "aside"})


@dataclass(frozen=True)
class BlockCandidate:
    """A DOM region proposed as one prospective section."""
    region: Region
    index: int
    source: Literal["semantic", "structural"]

    @property
    def node(self) -> Tag:
        return self.region.anchor


def is_semantic_container(node: Tag) -> bool:
    """Matches `section, article, aside, div[class*=section]`."""
    name = tag_name(node)
    if name in SEMANTIC_CONTAINER_TAGS:
        return True
    return name == "div" and "section" in class_string(node)


def _is_low_text_media(node: Tag, max_chars: int) -> bool:
    has_media = is_media(node) or any(is_media(el) for el in node.find_all(True))
    return has_media and len(raw_text(node).strip()) < max_chars


def is_boundary(node: Tag, settings: SectionizerSettings) -> bool:
    """True when `node` should open a new structural group."""
    return (
        is_heading(node)
        or background_color(node) is not None
        or _is_low_text_media(node, settings.thresholds.low_text_media_chars)
    )


def _segment_children(children: Sequence[Tag], settings: SectionizerSettings) -> List[BlockCandidate]:
    candidates: List[BlockCandidate] = []
    current: List[Tag] = []

    def close_group():
        if current:
            candidates.append(BlockCandidate(Region.group(current), len(candidates), "structural"))
            current.clear()

    for child in children:
        if is_boundary(child, settings):
            close_group()
        current.append(child)
    close_group()
    return candidates


def generate_block_candidates(
        container: Optional[Tag],
        settings: Optional[SectionizerSettings] = None,
        exclude: Sequence[Optional[Tag]] = (),
) -> List[BlockCandidate]:
    """
    Produces candidates for `container` in document order.

    Args:
        container: The main content region.
        settings: Rule-table configuration (defaults when None).
        exclude: Nodes emitted elsewhere (header/footer landmarks); never part of a candidate.
    """
    if container is None:
        return []
    settings = resolve_settings(settings)

    all_children = element_children(container)
    children = [
        child for child in all_children
        if tag_name(child) not in SKIPPED_TEXT_TAGS
        and not any(child is other for other in exclude if other is not None)
    ]

    semantic = [child for child in children if is_semantic_container(child)]
    if semantic:
        candidates = [BlockCandidate(Region.of(node), i, "semantic") for i, node in enumerate(semantic)]
    elif not all_children:
        candidates = [BlockCandidate(Region.of(container), 0, "structural")]
    else:
        candidates = _segment_children(children, settings)

    logger.debug("Generated %d block candidates from <%s>.", len(candidates), tag_name(container))
    return candidates


def has_content(region: Region) -> bool:
    """A region contributes something when it has text, a heading, media, a form control or a link."""
    if region.text():
        return True
    return region.first(
        lambda el: is_heading(el) or is_media(el) or tag_name(el) in FORM_CONTROL_TAGS or is_link(el)
    ) is not None


def filter_block_candidates(candidates: Sequence[BlockCandidate]) -> List[BlockCandidate]:
    """Drops pure whitespace/decoration candidates, keeping order."""
    kept = [candidate for candidate in candidates if has_content(candidate.region)]
    if len(kept) != len(candidates):
        logger.debug("Dropped %d empty block candidates.", len(candidates) - len(kept))
    return kept
