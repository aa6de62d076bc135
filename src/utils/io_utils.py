# src/utils/io_utils.py
from pathlib import Path
import tempfile
import os
from typing import Union

PathLike = Union[str, Path]


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """
    Atomically write `data` to `path`.

    Behavior:
      - Creates parent directories if needed.
      - Writes to a temporary file in the same directory, fsyncs the file,
        then atomically replaces the target with `os.replace`.
      - Ensures temporary file is removed on failure.

    Raises:
        OSError (or subclass): Propagates I/O related errors.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    # temp file in same directory so os.replace stays on one filesystem
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp", dir=str(p.parent))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            try:
                os.fsync(f.fileno())
            except (AttributeError, OSError):
                # fsync không có trên một số nền tảng
                pass

        os.replace(tmp_path, str(p))
    except OSError:
        try:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        except OSError:
            pass
        raise
