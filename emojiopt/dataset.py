"""
dataset.py
----------
Reads and writes the emoji dataset as a JavaScript module.

The files look like ``export const applemojis = [ ... ];`` (or
``export default [ ... ];`` for the source) with a JSON body, so the web
frontend can import them directly.
"""

import copy
import json
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

from emojiopt.errors import StorageError

_EXPORT = re.compile(
    r"^\s*export\s+(?:default\s+|const\s+(?P<name>[A-Za-z_$][\w$]*)\s*=\s*)(?P<body>.*?);?\s*$",
    re.DOTALL,
)


def read_module(path: Path) -> Tuple[Optional[str], Any]:
    """Return ``(export_name, value)``; the name is None for a default export."""
    text = path.read_text(encoding="utf-8")
    match = _EXPORT.match(text)
    if not match:
        raise ValueError(f"{path} does not contain a single exported JSON value")
    return match.group("name"), json.loads(match.group("body"))


def render_module(name: str, value: Any) -> str:
    return f"export const {name} = {json.dumps(value, indent=2, ensure_ascii=False)};"


def write_module(path: Path, name: str, value: Any) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_module(name, value), encoding="utf-8")
    except OSError as e:
        raise StorageError(path, e) from e
    return path


def load_dataset(records: List[dict]) -> List[dict]:
    """Working copy of the source; mutating it never touches *records*."""
    return copy.deepcopy(records)


def write_backup(records: List[dict], path: Path, name: str) -> Path:
    return write_module(path, name, records)


def write_output(records: List[dict], path: Path, name: str) -> Path:
    return write_module(path, name, records)
