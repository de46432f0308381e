import json
from pathlib import Path
from typing import Any

from pagespec.utils.path_utils import PathUtils


def to_json(data: Any, indent: int = 2, ensure_ascii: bool = False) -> str:
    """
    Convert Python object to JSON string.

    Args:
        data: Python object (dict, list, etc.)
        indent: Indentation level for pretty-printing (default: 2)
        ensure_ascii: If True, escape non-ASCII chars (default: False)

    Returns:
        str: JSON string
    """
    return json.dumps(data, ensure_ascii=ensure_ascii, indent=indent)


def write_json_file(path: Path, data: Any) -> Path:
    """Writes `data` as pretty-printed UTF-8 JSON, creating parent folders as needed."""
    target = PathUtils.ensure_parent(Path(path))
    target.write_text(to_json(data) + "\n", encoding="utf-8")
    return target


def read_json_file(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
