from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from pagespec.controllers.spec_controller import SpecController, SpecRunConfig
from pagespec.model import SpecSummary
from pagespec.utils.configure_logging import configure_logger_from_settings

logger = logging.getLogger(__name__)


def run_spec(
        base_url: str,
        in_dir: Union[str, Path],
        out_dir: Union[str, Path],
        *,
        max_pages: Optional[int] = None,
        debug: bool = False,
        workers: Optional[int] = None,
        show_progress: Optional[bool] = None,
) -> SpecSummary:
    """
    Runs spec generation for one crawl output the way a top-level caller should:
    logging is set up from the 'logging' block of settings.json first, then the
    controller processes every manifest page.
    """
    configure_logger_from_settings()
    config = SpecRunConfig(
        base_url=base_url,
        in_dir=Path(in_dir),
        out_dir=Path(out_dir),
        max_pages=max_pages,
        debug=debug,
        workers=workers,
        show_progress=show_progress,
    )
    logger.debug("Starting spec run with %s", config)
    return SpecController().run(config)
