from __future__ import annotations

import json
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError
from tqdm.auto import tqdm

from pagespec.managers.config_manager import config_manager
from pagespec.model import (
    LayoutPatterns,
    Manifest,
    PageSpec,
    PageStatus,
    Section,
    SpecSummary,
    SummaryStats,
)
from pagespec.patterns.clusterer import detect_patterns
from pagespec.sectionizer.settings import SectionizerSettings, load_settings
from pagespec.sectionizer.trace import PipelineTrace
from pagespec.services.debug_artifact_service import DebugArtifactService
from pagespec.utils.json_service import read_json_file, write_json_file
from pagespec.utils.parallel_workers import PageTask, spec_page_worker
from pagespec.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class SpecRunConfig(BaseModel):
    base_url: str
    in_dir: Path
    out_dir: Path
    max_pages: Optional[int] = None
    debug: bool = False
    workers: Optional[int] = None
    show_progress: Optional[bool] = None


def derive_slug(path: str) -> str:
    """'/about/team' -> 'about-team', '/' -> 'index'."""
    return path.lstrip("/").replace("/", "-") or "index"


def _error_payload(task: PageTask, error: Exception) -> str:
    return json.dumps({"index": task.index, "slug": task.slug, "url": task.url, "error": str(error)})


class SpecController:
    """
    Orchestrates PageSpec generation over a crawl output directory.
    Pages are sectionized in a process pool; clustering and summary writing
    run once all pages are back, in manifest order.
    """

    def __init__(self, *, default_workers: Optional[int] = None,
                 settings: Optional[SectionizerSettings] = None) -> None:
        self.default_workers = default_workers or config_manager.get_nested("spec.workers") or (os.cpu_count() or 4)
        self.settings = settings or load_settings()
        self.debug_service = DebugArtifactService()

    # --- Inputs

    @staticmethod
    def _load_manifest(in_dir: Path) -> Manifest:
        manifest_path = Path(in_dir) / "manifest.json"
        manifest = Manifest.model_validate(read_json_file(manifest_path))
        logger.info("Loaded %d pages from manifest %s", len(manifest.pages), manifest_path)
        return manifest

    @staticmethod
    def _load_page_slugs(pages_dir: Path) -> Dict[str, str]:
        """Maps page URL -> slug from every pages/<dir>/page.json that has both."""
        slug_map: Dict[str, str] = {}
        if not pages_dir.is_dir():
            logger.warning("Pages directory %s does not exist.", pages_dir)
            return slug_map

        for entry in sorted(pages_dir.iterdir()):
            page_json = entry / "page.json"
            if not page_json.is_file():
                continue
            try:
                record = read_json_file(page_json)
            except (OSError, json.JSONDecodeError) as e:
                logger.debug("Could not read %s, skipping: %s", page_json, e)
                continue
            if isinstance(record, dict) and record.get("url") and record.get("slug"):
                slug_map[record["url"]] = record["slug"]
        logger.info("Loaded %d page slugs from %s", len(slug_map), pages_dir)
        return slug_map

    def _build_tasks(self, config: SpecRunConfig) -> List[PageTask]:
        manifest = self._load_manifest(config.in_dir)
        pages = manifest.pages
        if config.max_pages and config.max_pages > 0:
            pages = pages[:config.max_pages]
            logger.info("Limited to %d pages", len(pages))

        slug_map = self._load_page_slugs(Path(config.in_dir) / "pages")
        tasks: List[PageTask] = []
        for index, page in enumerate(pages):
            slug = slug_map.get(page.url)
            if not slug:
                slug = derive_slug(page.path)
                logger.warning("No slug found for URL %s, derived '%s' from path", page.url, slug)
            tasks.append(PageTask(
                index=index,
                url=page.url,
                slug=slug,
                page_dir=PathUtils.get_page_dir(config.in_dir, slug),
                base_url=config.base_url,
                debug=config.debug,
            ))
        return tasks

    # --- Execution

    def _run_tasks(self, tasks: List[PageTask], n_workers: int, show_progress: bool) -> List[str]:
        """Returns one worker payload per task, in task order."""
        results: List[Optional[str]] = [None] * len(tasks)

        if n_workers <= 1:
            iterator = tasks if not show_progress else tqdm(tasks, desc="Building page specs", unit=" page")
            for task in iterator:
                try:
                    results[task.index] = spec_page_worker(task, self.settings)
                except Exception as e:
                    logger.error("Failed to process page %s: %s", task.slug, e, exc_info=True)
                    results[task.index] = _error_payload(task, e)
            return results

        with ProcessPoolExecutor(max_workers=n_workers) as pool:
            futures = {pool.submit(spec_page_worker, task, self.settings): task for task in tasks}
            iterator = as_completed(futures)
            if show_progress:
                iterator = tqdm(iterator, total=len(futures), desc="Building page specs", unit=" page")

            for fut in iterator:
                task = futures[fut]
                try:
                    results[task.index] = fut.result()
                except Exception as e:
                    logger.error("Failed to process page %s: %s", task.slug, e, exc_info=True)
                    results[task.index] = _error_payload(task, e)
        return results

    def _collect(
            self,
            payload: str,
            out_dir: Path,
    ) -> Tuple[PageStatus, Optional[PageSpec]]:
        data = json.loads(payload)
        slug, url = data["slug"], data["url"]
        if data.get("error"):
            return PageStatus(slug=slug, url=url, status="failed", error=data["error"]), None

        try:
            spec = PageSpec.model_validate(data["pageSpec"])
        except ValidationError as e:
            logger.error("Invalid PageSpec for page %s: %s", slug, e)
            return PageStatus(slug=slug, url=url, status="failed", error=str(e)), None

        pagespec_path = write_json_file(PathUtils.get_pagespec_path(out_dir, slug), spec.to_dict())
        logger.debug("Wrote PageSpec: %s", pagespec_path)

        if data.get("trace") is not None:
            trace = PipelineTrace.model_validate(data["trace"])
            self.debug_service.write(slug, out_dir, trace, spec.sections)

        status = PageStatus(
            slug=slug,
            url=url,
            status="success",
            section_count=len(spec.sections),
            warnings=list(spec.notes),
        )
        return status, spec

    def run(self, config: SpecRunConfig) -> SpecSummary:
        """
        Executes the spec generation for one crawl output.
        Writes pagespec.json per page, layout-patterns.json and spec-summary.json.
        """
        logger.info("=== Spec generation: %s ===", config.base_url)
        logger.info("Input: %s | Output: %s", config.in_dir, config.out_dir)

        tasks = self._build_tasks(config)
        n_workers = int(config.workers or self.default_workers)
        show_progress = config.show_progress
        if show_progress is None:
            show_progress = bool(config_manager.get_nested("spec.show_progress", True))

        start = time.perf_counter()
        payloads = self._run_tasks(tasks, n_workers, show_progress)

        statuses: List[PageStatus] = []
        sections_by_slug: Dict[str, List[Section]] = {}
        for payload in payloads:
            status, spec = self._collect(payload, config.out_dir)
            statuses.append(status)
            if spec is not None:
                sections_by_slug[spec.slug] = spec.sections

        succeeded = sum(1 for s in statuses if s.status == "success")
        logger.info("Processed %d/%d pages successfully", succeeded, len(tasks))

        patterns = detect_patterns(sections_by_slug, self.settings)
        spec_dir = PathUtils.get_spec_dir(config.out_dir)
        write_json_file(spec_dir / "layout-patterns.json", LayoutPatterns(patterns=patterns).to_dict())

        summary = SpecSummary(
            base_url=config.base_url,
            stats=SummaryStats(
                pages_processed=len(tasks),
                pages_succeeded=succeeded,
                pages_failed=len(tasks) - succeeded,
                total_sections=sum(len(sections) for sections in sections_by_slug.values()),
                total_patterns=len(patterns),
            ),
            pages=statuses,
        )
        write_json_file(spec_dir / "spec-summary.json", summary.to_dict())

        dur = time.perf_counter() - start
        logger.info(
            "Spec generation finished in %.2fs: %d sections, %d patterns.",
            dur, summary.stats.total_sections, summary.stats.total_patterns,
        )
        return summary
