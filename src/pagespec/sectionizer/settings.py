# src/pagespec/sectionizer/settings.py
"""
Immutable rule-table configuration for the sectionizer.

Every keyword list, volatility pattern and numeric threshold used by the
pipeline lives here, so a run can be reproduced from one value and the
rule table can be unit-tested with injected overrides.
"""
import logging
import re
from functools import lru_cache
from typing import Any, Dict, Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field

from pagespec.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def compile_pattern(pattern: str, ignore_case: bool = True) -> Pattern:
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class KeywordSettings(_FrozenModel):
    cta: str = r"\b(buy|sign|get|start|join|subscribe|learn|contact|download|try|demo|request|book)\b"
    contact_classes: str = "contact|reach|touch"
    faq_classes: str = "faq|question|accordion"
    pricing_classes: str = "pricing|plan|package"
    testimonial_classes: str = "testimonial|review|quote"
    hero_classes: str = "hero|banner|jumbotron"

    def matches(self, name: str, value: str) -> bool:
        """Case-insensitive search of the named keyword pattern inside `value`."""
        return bool(compile_pattern(getattr(self, name)).search(value or ""))


class VolatilitySettings(_FrozenModel):
    identifier: str = r"^(comp|wixui|style__|uniqueId|_)[A-Za-z0-9_-]+$"
    hex: str = r"^[a-fA-F0-9]{8,}$"
    data_attribute: str = r"data-(hook|aid|state|reactid|reactroot)"

    def is_volatile(self, token: str) -> bool:
        """True for site-builder generated ids/classes (comp-xxx, long hex strings, ...)."""
        return bool(
            compile_pattern(self.identifier, False).match(token)
            or compile_pattern(self.hex, False).match(token)
        )

    def is_volatile_data_attribute(self, name: str, value: str) -> bool:
        return bool(
            compile_pattern(self.data_attribute).search(name)
            or compile_pattern(self.hex, False).match(value or "")
        )


class ThresholdSettings(_FrozenModel):
    rich_text_min_words: int = 100
    hero_max_text_density: float = 100
    cta_min_count: int = 2
    cta_max_text_density: float = 50
    gallery_min_media: int = 3
    gallery_max_words: int = 100
    list_min_headings: int = 3
    grid_min_group: int = 3
    low_text_media_chars: int = 100
    heading_min_font_px: int = 20
    heading_max_chars: int = 100
    text_block_min_chars: int = 10
    max_text_blocks: int = 10
    cta_max_chars: int = 100
    label_parent_max_chars: int = 50
    contained_max_width_px: int = 1400


class SimilaritySettings(_FrozenModel):
    link_tolerance: int = 2
    heading_tolerance: int = 1
    tag_count_tolerance: int = 1
    tag_match_ratio: float = 0.7
    text_short_max: int = 49
    text_medium_max: int = 199


class PatternSettings(_FrozenModel):
    min_count: int = 2
    max_examples: int = 5


class SectionizerSettings(_FrozenModel):
    keywords: KeywordSettings = Field(default_factory=KeywordSettings)
    volatility: VolatilitySettings = Field(default_factory=VolatilitySettings)
    thresholds: ThresholdSettings = Field(default_factory=ThresholdSettings)
    similarity: SimilaritySettings = Field(default_factory=SimilaritySettings)
    patterns: PatternSettings = Field(default_factory=PatternSettings)


DEFAULT_SETTINGS = SectionizerSettings()


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> SectionizerSettings:
    """
    Builds the settings from the 'sectionizer' block of settings.json.
    `overrides` is merged on top (one level deep per group) before validation.
    """
    raw = dict(config_manager.get_nested("sectionizer", {}) or {})
    for group, values in (overrides or {}).items():
        merged = dict(raw.get(group) or {})
        merged.update(values)
        raw[group] = merged
    settings = SectionizerSettings.model_validate(raw)
    logger.debug("Sectionizer settings loaded (%d override groups).", len(overrides or {}))
    return settings


_loaded: Tuple[int, Optional[SectionizerSettings]] = (-1, None)


def resolve_settings(settings: Optional[SectionizerSettings]) -> SectionizerSettings:
    """The given settings, or the ones loaded from the current configuration (rebuilt when it changes)."""
    global _loaded
    if settings is not None:
        return settings
    revision, cached = _loaded
    if cached is None or revision != config_manager.revision:
        cached = load_settings()
        _loaded = (config_manager.revision, cached)
    return cached
