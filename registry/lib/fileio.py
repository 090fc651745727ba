"""JSON file helpers shared by the metadata store and the aggregate index."""

import json
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any


def dump_json(data: Any) -> str:
    """Serialize data the way every catalog artifact is stored on disk."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _target_mode(path: Path) -> int:
    """Permission bits the written file should end up with.

    An existing file keeps its mode; a new one gets the usual 0o666 minus umask.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write_text(path: Path, text: str) -> Path:
    """Write text atomically to prevent half-written files.

    Uses temp file + rename in the target directory. The temp file is
    created 0600, so the target's mode is applied before the rename.

    Args:
        path: Target file path
        text: Content to write (UTF-8)

    Returns:
        Path to the written file
    """
    path = Path(path)
    temp_fd, temp_path = tempfile.mkstemp(
        suffix=".tmp",
        prefix=f".{path.name}.",
        dir=path.parent,
        text=True,
    )

    try:
        with open(temp_fd, "w", encoding="utf-8") as f:
            f.write(text)

        os.chmod(temp_path, _target_mode(path))
        shutil.move(temp_path, path)
        return path
    except Exception:
        Path(temp_path).unlink(missing_ok=True)
        raise
