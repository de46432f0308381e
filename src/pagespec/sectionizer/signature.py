# src/pagespec/sectionizer/signature.py
"""
Structural signatures: per-node fingerprints used to spot repeated sibling
structures (grids) and to hash a section's DOM shape for change detection.
"""
import hashlib
import json
import logging
from typing import Dict, List, Optional, Sequence

from bs4 import Tag
from pydantic import BaseModel, ConfigDict

from pagespec.dom.query import Region, is_heading, is_link, is_media, tag_name
from pagespec.sectionizer.settings import SectionizerSettings, SimilaritySettings, resolve_settings

logger = logging.getLogger(__name__)


class NodeSignature(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag_histogram: Dict[str, int]
    has_media: bool
    link_count: int
    text_length_bucket: str
    heading_count: int

    def to_json(self) -> str:
        """Compact JSON with camelCase keys and histogram keys in first-seen order."""
        return json.dumps(
            {
                "tagHistogram": self.tag_histogram,
                "hasMedia": self.has_media,
                "linkCount": self.link_count,
                "textLengthBucket": self.text_length_bucket,
                "headingCount": self.heading_count,
            },
            separators=(",", ":"),
        )


def text_length_bucket(length: int, similarity: SimilaritySettings) -> str:
    if length <= 0:
        return "empty"
    if length <= similarity.text_short_max:
        return "short"
    if length <= similarity.text_medium_max:
        return "medium"
    return "long"


def region_signature(region: Region, settings: Optional[SectionizerSettings] = None) -> NodeSignature:
    settings = resolve_settings(settings)
    histogram: Dict[str, int] = {}
    has_media = False
    link_count = 0
    heading_count = 0

    for el in region.elements():
        name = tag_name(el)
        histogram[name] = histogram.get(name, 0) + 1
        has_media = has_media or is_media(el)
        link_count += is_link(el)
        heading_count += is_heading(el)

    return NodeSignature(
        tag_histogram=histogram,
        has_media=has_media,
        link_count=link_count,
        text_length_bucket=text_length_bucket(len(region.text()), settings.similarity),
        heading_count=heading_count,
    )


def node_signature(node: Tag, settings: Optional[SectionizerSettings] = None) -> NodeSignature:
    """Signature of a single node's subtree (its descendants)."""
    return region_signature(Region.of(node), settings)


def signatures_match(
        first: NodeSignature,
        second: NodeSignature,
        settings: Optional[SectionizerSettings] = None,
) -> bool:
    similarity = resolve_settings(settings).similarity

    if first.text_length_bucket != second.text_length_bucket:
        return False
    if first.has_media != second.has_media:
        return False
    if abs(first.link_count - second.link_count) > similarity.link_tolerance:
        return False
    if abs(first.heading_count - second.heading_count) > similarity.heading_tolerance:
        return False

    all_tags = set(first.tag_histogram) | set(second.tag_histogram)
    matching = sum(
        1 for tag in all_tags
        if abs(first.tag_histogram.get(tag, 0) - second.tag_histogram.get(tag, 0)) <= similarity.tag_count_tolerance
    )
    return matching >= len(all_tags) * similarity.tag_match_ratio


def group_similar(signatures: Sequence[NodeSignature], settings: Optional[SectionizerSettings] = None) -> List[List[int]]:
    """
    First-fit grouping: each signature joins the first group whose founding
    member it matches, else starts a new group. Returns index lists in order.
    """
    groups: List[List[int]] = []
    for index, signature in enumerate(signatures):
        for group in groups:
            if signatures_match(signature, signatures[group[0]], settings):
                group.append(index)
                break
        else:
            groups.append([index])
    return groups


def detect_repeated_siblings(nodes: Sequence[Tag], settings: Optional[SectionizerSettings] = None) -> List[Tag]:
    """
    Returns the members of the largest group of mutually similar siblings when it
    reaches the grid threshold (3 by default), else an empty list.
    """
    settings = resolve_settings(settings)
    min_group = settings.thresholds.grid_min_group
    if len(nodes) < min_group:
        return []

    signatures = [node_signature(node, settings) for node in nodes]
    largest: List[int] = []
    for group in group_similar(signatures, settings):
        if len(group) > len(largest):
            largest = group

    if len(largest) >= min_group:
        logger.debug("Repeated sibling group of %d out of %d children.", len(largest), len(nodes))
        return [nodes[i] for i in largest]
    return []


def structural_hash(region: Region, settings: Optional[SectionizerSettings] = None) -> str:
    """
    First 16 hex chars of the MD5 of the region's signature JSON.
    A single node hashes over its descendants whichever way it was segmented.
    """
    if not region.is_group:
        region = Region.of(region.anchor)
    payload = region_signature(region, settings).to_json()
    return hashlib.md5(payload.encode("utf-8")).hexdigest()[:16]
