# src/pagespec/patterns/signatures.py
"""
Cross-page section signatures.

A signature is a coarse, pipe-joined fingerprint of a section's shape:
`type:<type>|h:<0|1>|txt:<bucket>|med:<bucket>|cta:<bucket>`. Two sections
are considered the same layout block when their signatures are equal.
"""
from pagespec.model import Section


def count_bucket(count: int, many_from: int) -> str:
    """0 -> '0', 1 -> '1', up to `many_from - 1` -> 'few', beyond -> 'many'."""
    if count <= 0:
        return "0"
    if count == 1:
        return "1"
    if count < many_from:
        return "few"
    return "many"


def generate_signature(section: Section) -> str:
    parts = [
        f"type:{section.type}",
        f"h:{1 if section.heading else 0}",
        f"txt:{count_bucket(len(section.text_blocks), 5)}",
        f"med:{count_bucket(len(section.media), 5)}",
        f"cta:{count_bucket(len(section.ctas), 3)}",
    ]
    return "|".join(parts)


def sections_match(a: Section, b: Section) -> bool:
    return generate_signature(a) == generate_signature(b)


def section_ref(slug: str, section_id: str) -> str:
    return f"{slug}#{section_id}"
