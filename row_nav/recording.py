"""
Recorded LiDAR sessions.

Reads the sensor logger layout:

    exploration_YYYYMMDD_HHMMSS/
    ├── metadata.json       # Session info (optional here)
    └── scans.jsonl[.gz]    # One scan frame per line

Each frame carries timestamp, ranges, angle_min, angle_max and
angle_increment (range_min/range_max are ignored).
"""

import gzip
import json
import os
from typing import Any, Dict, Iterator, Optional


class RecordingError(Exception):
    """Recording missing or unreadable."""


def find_scan_file(data_dir: str, prefix: str = "scans") -> Optional[str]:
    """Find the scans file in a session directory (compressed or not)"""
    for ext in [".jsonl.gz", ".jsonl"]:
        path = os.path.join(data_dir, f"{prefix}{ext}")
        if os.path.exists(path):
            return path
    return None


def resolve_scan_path(data: str) -> str:
    """
    Accept either a session directory or a scans file.

    Raises:
        RecordingError: nothing to read at `data`
    """
    if os.path.isdir(data):
        path = find_scan_file(data)
        if path is None:
            raise RecordingError(f"no scans.jsonl or scans.jsonl.gz in {data}")
        return path
    if os.path.isfile(data):
        return data
    raise RecordingError(f"recording not found: {data}")


def load_metadata(data_dir: str) -> Dict[str, Any]:
    """Session metadata, or an empty dict if the recording has none."""
    meta_path = os.path.join(data_dir, "metadata.json")
    if not os.path.exists(meta_path):
        return {}
    with open(meta_path, 'r') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise RecordingError(f"{meta_path}: bad JSON ({e.msg})") from e


def iter_frames(path: str) -> Iterator[Dict[str, Any]]:
    """
    Yield scan frames from a JSON Lines file (gzipped if it ends in .gz).

    Blank lines are skipped.

    Raises:
        RecordingError: a line is not a JSON object, or the file can't be read
    """
    open_func = gzip.open if path.endswith('.gz') else open
    mode = 'rt' if path.endswith('.gz') else 'r'

    try:
        with open_func(path, mode) as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    frame = json.loads(line)
                except json.JSONDecodeError as e:
                    raise RecordingError(f"{path}:{line_no}: bad JSON ({e.msg})") from e
                if not isinstance(frame, dict):
                    raise RecordingError(f"{path}:{line_no}: expected an object")
                yield frame
    except (OSError, EOFError) as e:
        raise RecordingError(f"cannot read {path}: {e}") from e
