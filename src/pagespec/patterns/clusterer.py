# src/pagespec/patterns/clusterer.py
import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from pagespec.model import Pattern, PatternStats, Section
from pagespec.patterns.signatures import generate_signature, section_ref
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings

logger = logging.getLogger(__name__)


def group_by_signature(pages_sections: Mapping[str, Sequence[Section]]) -> Dict[str, List[Tuple[str, Section]]]:
    """Buckets every section of every page by signature. Dict order is discovery order."""
    groups: Dict[str, List[Tuple[str, Section]]] = {}
    for slug, sections in pages_sections.items():
        for section in sections:
            groups.setdefault(generate_signature(section), []).append((slug, section))
    return groups


def _pattern_stats(first: Section, count: int) -> PatternStats:
    return PatternStats(
        count=count,
        heading_count=1 if first.heading else 0,
        text_count=len(first.text_blocks),
        media_count=len(first.media),
        cta_count=len(first.ctas),
        has_form=bool(first.forms),
    )


def detect_patterns(
        pages_sections: Mapping[str, Sequence[Section]],
        settings: Optional[SectionizerSettings] = None,
) -> List[Pattern]:
    """
    Finds section layouts that recur across the site.

    Args:
        pages_sections: page slug -> that page's sections, in page order.

    Returns:
        One Pattern per signature seen at least `min_count` times, most frequent first.
    """
    cfg = resolve_settings(settings).patterns
    patterns: List[Pattern] = []

    for signature, members in group_by_signature(pages_sections).items():
        if len(members) < cfg.min_count:
            continue
        first = members[0][1]
        patterns.append(Pattern(
            pattern_id=f"pat_{first.type}_{len(patterns) + 1:03d}",
            type=first.type,
            signature=signature,
            examples=[section_ref(slug, section.id) for slug, section in members[:cfg.max_examples]],
            stats=_pattern_stats(first, len(members)),
        ))

    patterns.sort(key=lambda p: p.stats.count, reverse=True)
    logger.info("Detected %d layout patterns across %d pages.", len(patterns), len(pages_sections))
    return patterns
