"""Read and atomically replace the JSON documents behind the repositories."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json(file_path: Path) -> Any:
    return json.loads(file_path.read_text(encoding="utf-8"))


def write_json(file_path: Path, data: Any) -> None:
    """Write *data* to a sibling temp file, then swap it into place.

    Readers polling *file_path* see either the old document or the new
    one, never a truncated file.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(data, tmp, indent=2, ensure_ascii=False)
            tmp.write("\n")
        os.replace(tmp_name, file_path)
    except BaseException:
        os.unlink(tmp_name)
        raise


def ensure_json_file(file_path: Path, empty: Any) -> None:
    if not file_path.exists():
        write_json(file_path, empty)
