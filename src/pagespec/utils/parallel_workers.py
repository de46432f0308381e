# file: src/pagespec/utils/parallel_workers.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from pagespec.sectionizer.settings import SectionizerSettings
from pagespec.services.meta_parse_service import page_meta_from_record
from pagespec.services.pagespec_service import infer_page_spec
from pagespec.utils.json_service import read_json_file

logger = logging.getLogger(__name__)


class PageTask(BaseModel):
    """Everything one worker needs to build one page's spec."""
    index: int
    url: str
    slug: str
    page_dir: Path
    base_url: str
    debug: bool = False


def _load_page_inputs(task: PageTask):
    html = (task.page_dir / "html" / "rendered.html").read_text(encoding="utf-8")
    meta_path = task.page_dir / "meta" / "meta.json"
    meta = page_meta_from_record(read_json_file(meta_path)) if meta_path.exists() else None
    return html, meta


def spec_page_worker(task: PageTask, settings: Optional[SectionizerSettings] = None) -> str:
    """
    Worker function building the PageSpec of one crawled page.
    Returns a JSON string; failures are reported in the payload, not raised.
    """
    out: Dict[str, Any] = {"index": task.index, "slug": task.slug, "url": task.url}
    try:
        html, meta = _load_page_inputs(task)
        spec, trace = infer_page_spec(
            url=task.url,
            slug=task.slug,
            base_url=task.base_url,
            html=html,
            meta=meta,
            debug=task.debug,
            settings=settings,
        )
        out["pageSpec"] = spec.to_dict()
        out["trace"] = trace.to_dict() if trace is not None else None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.error("WORKER ERROR building spec for page %s (%s): %s", task.slug, task.url, e)
        out["error"] = str(e)

    # Serialize to JSON to avoid complex pickling on Windows spawn
    return json.dumps(out, ensure_ascii=False, default=str)
