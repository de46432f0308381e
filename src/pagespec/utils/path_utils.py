# src/pagespec/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and output paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the absolute path of the installed 'pagespec' package."""
        return Path(__file__).resolve().parent.parent

    @staticmethod
    def get_settings_path() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- Spec run layout

    @staticmethod
    def get_page_dir(root: Path, slug: str) -> Path:
        """Returns the per-page directory (e.g., <root>/pages/<slug>)."""
        return Path(root) / "pages" / slug

    @staticmethod
    def get_pagespec_path(out_dir: Path, slug: str) -> Path:
        return PathUtils.get_page_dir(out_dir, slug) / "spec" / "pagespec.json"

    @staticmethod
    def get_spec_dir(out_dir: Path) -> Path:
        return Path(out_dir) / "spec"

    @staticmethod
    def get_debug_dir(out_dir: Path, slug: str) -> Path:
        return Path(out_dir) / "spec-debug" / slug

    @staticmethod
    def ensure_parent(path: Path) -> Path:
        """Creates the parent directory of a file path if it does not exist yet."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
