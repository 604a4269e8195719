"""JSON file helpers with atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import SettingsLoadError


def read_json(path: Path) -> Any:
    """Load JSON from *path*, raising :class:`SettingsLoadError` on bad input."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"{path}: {exc}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"Could not read {path}: {exc}") from exc


def write_json(path: Path, data: Any) -> None:
    """Write *data* to *path* via a temporary file and an atomic replace."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["read_json", "write_json"]
