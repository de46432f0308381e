# src/pagespec/services/debug_artifact_service.py
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from pagespec.model import Section
from pagespec.sectionizer.trace import PipelineTrace
from pagespec.utils.json_service import write_json_file
from pagespec.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

PREVIEW_TEXT_BLOCKS = 3
PREVIEW_TEXT_CHARS = 80


class DebugArtifactService:
    """
    Writes the sectionizer's intermediate state next to the spec output, so a
    wrong segmentation on a new layout can be diagnosed without re-running it:

        spec-debug/<slug>/blockCandidates.json
        spec-debug/<slug>/features.json
        spec-debug/<slug>/sections-preview.md
    """

    @staticmethod
    def render_sections_preview(sections: Sequence[Section], generated_at: Optional[datetime] = None) -> str:
        generated_at = generated_at or datetime.now(timezone.utc)
        lines: List[str] = [
            "# Sections Preview\n",
            f"Generated: {generated_at.isoformat()}\n",
            f"Total Sections: {len(sections)}\n",
            "---\n",
        ]

        for section in sections:
            lines.append(f"## Section: {section.id}")
            lines.append(f"- **Type:** {section.type}")
            lines.append(f"- **Heading:** {section.heading or '(none)'}")
            lines.append(f"- **Text Blocks:** {len(section.text_blocks)}")
            lines.append(f"- **CTAs:** {len(section.ctas)}")
            lines.append(f"- **Media:** {len(section.media)}")
            lines.append(f"- **Forms:** {len(section.forms)}")

            if section.links is not None:
                lines.append(f"- **Links:** {section.links.internal} internal, {section.links.external} external")

            if section.notes:
                lines.append("- **Notes:**")
                lines.extend(f"  - {note}" for note in section.notes)

            lines.append(f"- **DOM Anchor:** {section.dom_anchor.strategy} = `{section.dom_anchor.value}`")

            if section.style_hints is not None:
                lines.append("- **Style Hints:**")
                if section.style_hints.background_color:
                    lines.append(f"  - Background: {section.style_hints.background_color}")
                if section.style_hints.layout:
                    lines.append(f"  - Layout: {section.style_hints.layout}")

            if section.structural_hash:
                lines.append(f"- **Structural Hash:** {section.structural_hash}")

            if section.text_blocks:
                lines.append("\n**Text Preview:**")
                for block in section.text_blocks[:PREVIEW_TEXT_BLOCKS]:
                    ellipsis = "..." if len(block) > PREVIEW_TEXT_CHARS else ""
                    lines.append(f"> {block[:PREVIEW_TEXT_CHARS]}{ellipsis}")

            lines.append("\n---\n")

        return "\n".join(lines)

    def write(self, slug: str, out_dir: Path, trace: PipelineTrace, sections: Sequence[Section]) -> Optional[Path]:
        """
        Returns the debug directory, or None when writing failed.
        Failures are logged, never raised: debug output must not fail a spec run.
        """
        debug_dir = PathUtils.get_debug_dir(out_dir, slug)
        try:
            write_json_file(debug_dir / "blockCandidates.json", [c.to_dict() for c in trace.block_candidates])
            write_json_file(debug_dir / "features.json", [f.to_dict() for f in trace.features])
            preview = PathUtils.ensure_parent(debug_dir / "sections-preview.md")
            preview.write_text(self.render_sections_preview(sections), encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to generate debug artifacts for '%s': %s", slug, e)
            return None

        logger.debug("Debug artifacts written to %s (%s)", debug_dir, trace.summary())
        return debug_dir
