# src/pagespec/sectionizer/trace.py
from typing import List, Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from pagespec.dom.query import element_children
from pagespec.model import SectionType, SpecModel
from pagespec.sectionizer.anchor import css_path
from pagespec.sectionizer.candidates import BlockCandidate
from pagespec.sectionizer.classifier import Classification
from pagespec.sectionizer.features import BlockFeatures
from pagespec.utils.text_utils import truncate

TEXT_PREVIEW_CHARS = 100


class CandidateTrace(SpecModel):
    """Serializable summary of one block candidate (no live DOM references)."""
    index: int
    source: str
    tag: str
    classes: str = ""
    id: Optional[str] = None
    path: str = ""
    text_preview: str = ""
    child_count: int = 0
    group_size: int = 1

    @classmethod
    def from_candidate(cls, candidate: BlockCandidate) -> "CandidateTrace":
        region = candidate.region
        return cls(
            index=candidate.index,
            source=candidate.source,
            tag=region.tag or "div",
            classes=region.classes,
            id=region.element_id,
            path=css_path(region.anchor),
            text_preview=region.text()[:TEXT_PREVIEW_CHARS],
            child_count=len(element_children(region.anchor)),
            group_size=len(region.nodes),
        )


class FeatureTrace(BlockFeatures):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    block_index: int
    type: SectionType
    confidence: float

    @classmethod
    def from_stage(cls, candidate: BlockCandidate, features: BlockFeatures, result: Classification) -> "FeatureTrace":
        return cls(
            **features.model_dump(),
            block_index=candidate.index,
            type=result.type,
            confidence=result.confidence,
        )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class PipelineTrace(SpecModel):
    """Intermediate pipeline state for one page, returned alongside the sections on request."""
    block_candidates: List[CandidateTrace] = Field(default_factory=list)
    features: List[FeatureTrace] = Field(default_factory=list)

    def summary(self) -> str:
        kinds = ", ".join(f"{f.block_index}:{f.type}" for f in self.features)
        return truncate(f"{len(self.block_candidates)} candidates [{kinds}]", 200)
