# src/pagespec/sectionizer/anchor.py
"""
PASS 4: stable anchors.

Serializes a re-locatable reference to the node a section came from,
ignoring identifiers that site builders regenerate on every publish.
"""
import logging
from typing import List, Literal, Optional

from bs4 import Tag

from pagespec.dom.query import class_list, get_attr, role_of, same_tag_position, tag_name
from pagespec.model import DomAnchor
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings

logger = logging.getLogger(__name__)

LANDMARK_TAGS = frozenset({"header", "footer", "main"})
NTH_OF_TYPE_TAGS = frozenset({"section", "article", "aside", "header", "footer", "main"})


def stable_data_attributes(node: Tag, settings: Optional[SectionizerSettings] = None) -> List[str]:
    """`[data-x="v"]` selectors for data attributes that are not framework state or hashes."""
    volatility = resolve_settings(settings).volatility
    selectors = []
    for name in node.attrs:
        if not name.startswith("data-"):
            continue
        value = get_attr(node, name) or ""
        if volatility.is_volatile_data_attribute(name, value):
            continue
        selectors.append(f'[{name}="{value}"]')
    return selectors


def stable_classes(node: Tag, settings: Optional[SectionizerSettings] = None) -> List[str]:
    volatility = resolve_settings(settings).volatility
    return [cls for cls in class_list(node) if not volatility.is_volatile(cls)]


def generate_dom_anchor(
        node: Tag,
        index: int,
        landmark: Optional[Literal["header", "footer", "main"]] = None,
        settings: Optional[SectionizerSettings] = None,
) -> DomAnchor:
    """
    Args:
        node: The section's originating element (first node of a structural group).
        index: 0-based position of the section in the final ordered list.
        landmark: Set when the section is a page landmark.
    """
    settings = resolve_settings(settings)
    tag = tag_name(node)

    if landmark is not None:
        role = role_of(node)
        if role:
            return DomAnchor(strategy="selector", value=f'[role="{role}"]')
        if tag in LANDMARK_TAGS:
            return DomAnchor(strategy="selector", value=tag)

    element_id = get_attr(node, "id")
    if element_id and not settings.volatility.is_volatile(element_id):
        return DomAnchor(strategy="selector", value=f"#{element_id}")

    data_selectors = stable_data_attributes(node, settings)
    if data_selectors:
        return DomAnchor(strategy="selector", value=data_selectors[0])

    if tag in NTH_OF_TYPE_TAGS:
        position, _ = same_tag_position(node)
        return DomAnchor(strategy="selector", value=f"{tag}:nth-of-type({position})")

    classes = stable_classes(node, settings)
    if classes:
        return DomAnchor(strategy="selector", value=f".{classes[0]}")

    return DomAnchor(strategy="path", value=f"section-{index}")


def css_path(node: Tag) -> str:
    """Full `tag:nth-of-type(n) > ...` path from below <body> down to `node`."""
    parts: List[str] = []
    current = node
    while isinstance(current, Tag) and tag_name(current) not in ("body", "html", "[document]"):
        position, count = same_tag_position(current)
        name = tag_name(current)
        parts.insert(0, f"{name}:nth-of-type({position})" if count > 1 else name)
        current = current.parent
    return " > ".join(parts)
