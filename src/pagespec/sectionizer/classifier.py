# src/pagespec/sectionizer/classifier.py
"""
PASS 2: block classification.

An ordered rule table maps a feature vector to one section type. The first
rule that returns a result wins; the last rule always matches, so
classification never fails. The order is load-bearing (e.g. long text is
richText even when it also looks like a grid).
"""
import logging
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pagespec.model import SectionType
from pagespec.sectionizer.features import BlockFeatures
from pagespec.sectionizer.settings import SectionizerSettings, resolve_settings

logger = logging.getLogger(__name__)

LandmarkHint = Optional[Literal["header", "footer"]]

GRID_NOTE = "Detected repeated sibling structures"
UNKNOWN_NOTE = "Could not confidently classify section type"


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SectionType
    confidence: float
    notes: List[str] = Field(default_factory=list)


Rule = Callable[[BlockFeatures, LandmarkHint, SectionizerSettings], Optional[Classification]]


def rule_spec(types: List[str]):
    """
    Decorator to declare which section types a classification rule can return.
    Lets the rule table report every type it is able to produce.
    """
    def decorator(func):
        func.defined_types = types
        return func
    return decorator


# --- RULES ---

@rule_spec(types=["header", "footer"])
def landmark_rule(features, landmark, settings):
    if landmark is not None:
        return Classification(type=landmark, confidence=1.0)
    return None


@rule_spec(types=["header", "footer"])
def semantic_tag_rule(features, landmark, settings):
    if features.tag == "header" or features.role == "banner":
        return Classification(type="header", confidence=0.9)
    if features.tag == "footer" or features.role == "contentinfo":
        return Classification(type="footer", confidence=0.9)
    return None


@rule_spec(types=["contactForm"])
def form_rule(features, landmark, settings):
    if not features.has_form:
        return None
    confidence = 0.9 if settings.keywords.matches("contact_classes", features.classes) else 0.8
    return Classification(type="contactForm", confidence=confidence)


@rule_spec(types=["faq"])
def faq_rule(features, landmark, settings):
    if settings.keywords.matches("faq_classes", features.classes):
        return Classification(type="faq", confidence=0.9)
    return None


@rule_spec(types=["pricing"])
def pricing_rule(features, landmark, settings):
    if settings.keywords.matches("pricing_classes", features.classes):
        return Classification(type="pricing", confidence=0.9)
    return None


@rule_spec(types=["testimonial"])
def testimonial_rule(features, landmark, settings):
    if settings.keywords.matches("testimonial_classes", features.classes):
        return Classification(type="testimonial", confidence=0.9)
    return None


@rule_spec(types=["richText"])
def rich_text_rule(features, landmark, settings):
    if features.word_count > settings.thresholds.rich_text_min_words:
        return Classification(type="richText", confidence=0.8)
    return None


@rule_spec(types=["grid"])
def grid_rule(features, landmark, settings):
    if features.repeated_siblings:
        return Classification(type="grid", confidence=0.75, notes=[GRID_NOTE])
    return None


@rule_spec(types=["hero"])
def hero_rule(features, landmark, settings):
    if (
        features.heading_count > 0
        and features.cta_like_count > 0
        and features.text_density < settings.thresholds.hero_max_text_density
        and settings.keywords.matches("hero_classes", features.classes)
    ):
        return Classification(type="hero", confidence=0.85)
    return None


@rule_spec(types=["cta"])
def cta_rule(features, landmark, settings):
    t = settings.thresholds
    if features.cta_like_count >= t.cta_min_count and features.text_density < t.cta_max_text_density:
        return Classification(type="cta", confidence=0.8)
    return None


@rule_spec(types=["gallery"])
def gallery_rule(features, landmark, settings):
    t = settings.thresholds
    if features.media_count >= t.gallery_min_media and features.word_count < t.gallery_max_words:
        return Classification(type="gallery", confidence=0.8)
    return None


@rule_spec(types=["list"])
def list_rule(features, landmark, settings):
    if features.heading_count >= settings.thresholds.list_min_headings:
        return Classification(type="list", confidence=0.7)
    return None


@rule_spec(types=["unknown"])
def fallback_rule(features, landmark, settings):
    return Classification(type="unknown", confidence=0.5, notes=[UNKNOWN_NOTE])


RULE_TABLE: List[Rule] = [
    landmark_rule,
    semantic_tag_rule,
    form_rule,
    faq_rule,
    pricing_rule,
    testimonial_rule,
    rich_text_rule,
    grid_rule,
    hero_rule,
    cta_rule,
    gallery_rule,
    list_rule,
    fallback_rule,
]


def possible_types() -> List[str]:
    """Every section type the rule table can produce."""
    found = set()
    for rule in RULE_TABLE:
        found.update(getattr(rule, "defined_types", []))
    return sorted(found)


def classify_block(
        features: BlockFeatures,
        landmark: LandmarkHint = None,
        settings: Optional[SectionizerSettings] = None,
) -> Classification:
    settings = resolve_settings(settings)
    for rule in RULE_TABLE:
        result = rule(features, landmark, settings)
        if result is not None:
            logger.debug("Classified <%s class=%r> as %s via %s.", features.tag, features.classes, result.type, rule.__name__)
            return result
    return fallback_rule(features, landmark, settings)
