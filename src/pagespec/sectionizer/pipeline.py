# src/pagespec/sectionizer/pipeline.py
"""
Sectionizer - multi-pass pipeline.

Turns one rendered HTML document into ordered, typed sections:

- PASS 0: landmarks (header, footer, main)
- PASS 1: block candidates inside the main area
- PASS 2: feature extraction and rule-table classification
- PASS 3: content extraction
- PASS 4: stable anchors and structural hashes

The run is a pure function of (html, base_url, settings): nothing is
cached between calls, so pages can be processed in parallel and the same
input always yields the same sections, ids included.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pagespec.dom.builder import parse_html
from pagespec.dom.models import HTMLDocument
from pagespec.dom.query import Region
from pagespec.model import Section, SectionType
from pagespec.sectionizer.anchor import generate_dom_anchor
from pagespec.sectionizer.candidates import filter_block_candidates, generate_block_candidates
from pagespec.sectionizer.classifier import classify_block
from pagespec.sectionizer.extract import (
    extract_ctas,
    extract_forms,
    extract_heading,
    extract_link_counts,
    extract_media,
    extract_style_hints,
    extract_text_blocks,
)
from pagespec.sectionizer.features import compute_block_features
from pagespec.sectionizer.landmarks import detect_landmarks, main_content_area
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings
from pagespec.sectionizer.signature import structural_hash
from pagespec.sectionizer.trace import CandidateTrace, FeatureTrace, PipelineTrace

logger = logging.getLogger(__name__)

NAV_EXCLUDING_TYPES = frozenset({"header", "footer"})


def section_id(index: int) -> str:
    """0-based position -> 'sec_001'."""
    return f"sec_{index + 1:03d}"


@dataclass
class _Draft:
    region: Region
    type: SectionType
    notes: List[str] = field(default_factory=list)
    landmark: Optional[str] = None


def _build_section(
        draft: _Draft,
        index: int,
        base_url: str,
        settings: SectionizerSettings,
) -> Optional[Section]:
    region = draft.region
    heading = extract_heading(region, settings)
    text_blocks = extract_text_blocks(region, settings)
    ctas = extract_ctas(region, exclude_nav=draft.type in NAV_EXCLUDING_TYPES, settings=settings)
    media = extract_media(region)
    forms = extract_forms(region, settings)

    if draft.landmark is None and not (heading or text_blocks or ctas or media or forms):
        return None

    return Section(
        id=section_id(index),
        type=draft.type,
        heading=heading,
        text_blocks=text_blocks,
        ctas=ctas,
        media=media,
        dom_anchor=generate_dom_anchor(region.anchor, index, draft.landmark, settings),
        forms=forms,
        links=extract_link_counts(region, base_url) if base_url else None,
        notes=list(draft.notes),
        style_hints=extract_style_hints(region, settings),
        structural_hash=structural_hash(region, settings),
    )


def sectionize_document(
        doc: HTMLDocument,
        base_url: str = "",
        settings: Optional[SectionizerSettings] = None,
        collect_trace: bool = False,
) -> Tuple[List[Section], Optional[PipelineTrace]]:
    """
    Runs every pass over a parsed document.

    Returns:
        The ordered sections, and the pipeline trace when `collect_trace` is set (else None).
    """
    settings = resolve_settings(settings)
    trace = PipelineTrace() if collect_trace else None
    if doc.is_empty:
        return [], trace

    landmarks = detect_landmarks(doc)
    header_node = landmarks.header.node if landmarks.header else None
    footer_node = landmarks.footer.node if landmarks.footer else None

    drafts: List[_Draft] = []

    if header_node is not None:
        region = Region.of(header_node)
        result = classify_block(compute_block_features(region, settings), "header", settings)
        drafts.append(_Draft(region, result.type, list(result.notes), "header"))

    container = main_content_area(doc, landmarks)
    candidates = filter_block_candidates(
        generate_block_candidates(container, settings, exclude=(header_node, footer_node))
    )
    for candidate in candidates:
        features = compute_block_features(candidate.region, settings)
        result = classify_block(features, None, settings)
        drafts.append(_Draft(candidate.region, result.type, list(result.notes)))
        if trace is not None:
            trace.block_candidates.append(CandidateTrace.from_candidate(candidate))
            trace.features.append(FeatureTrace.from_stage(candidate, features, result))

    if footer_node is not None:
        region = Region.of(footer_node)
        result = classify_block(compute_block_features(region, settings), "footer", settings)
        drafts.append(_Draft(region, result.type, list(result.notes), "footer"))

    sections: List[Section] = []
    for draft in drafts:
        section = _build_section(draft, len(sections), base_url, settings)
        if section is not None:
            sections.append(section)

    logger.debug(
        "Sectionized %s: %d candidates -> %d sections.",
        doc.raw_url or "<html>", len(candidates), len(sections),
    )
    return sections, trace


def sectionize_html(
        html: str,
        base_url: str = "",
        settings: Optional[SectionizerSettings] = None,
) -> List[Section]:
    """Convert HTML to ordered sections."""
    sections, _ = sectionize_document(parse_html(html, base_url), base_url, settings)
    return sections


def sectionize_html_with_trace(
        html: str,
        base_url: str = "",
        settings: Optional[SectionizerSettings] = None,
) -> Tuple[List[Section], PipelineTrace]:
    """Convert HTML to ordered sections and return the intermediate pipeline state too."""
    sections, trace = sectionize_document(parse_html(html, base_url), base_url, settings, collect_trace=True)
    return sections, trace
