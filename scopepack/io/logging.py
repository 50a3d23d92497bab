"""Log file helpers: timestamped log paths and JSON-lines build reports."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, Path]


def get_timestamped_log_path(log_path: PathLike) -> Path:
    """Generate a timestamped log path from the base log path.

    Example: build.log -> build_20261017_080530.log
    """
    log_path = Path(log_path)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = log_path.suffix or ".log"
    return log_path.parent / f"{log_path.stem}_{timestamp}{suffix}"


def log_json(log_path: PathLike, record: dict[str, Any]) -> None:
    """Append ``record`` as one JSON line to ``log_path``.

    Parent directories are created as needed. Values that are not JSON
    serializable (paths, datetimes) are written as strings.
    """
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, default=str))
        handle.write("\n")


def read_json_lines(log_path: PathLike) -> list[dict[str, Any]]:
    """Read back every record written with :func:`log_json`."""
    path = Path(log_path)
    if not path.exists():
        return []
    with path.open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]
