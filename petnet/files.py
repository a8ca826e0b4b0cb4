"""Small file-system helpers."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from typing import BinaryIO, Optional

log = logging.getLogger(__name__)


def read_file(path: str | os.PathLike) -> bytes:
    """Return the whole contents of a file."""
    with open(path, "rb") as fh:
        return fh.read()


def write_file(path: str | os.PathLike, data: bytes) -> None:
    """Write ``data`` to ``path``, replacing any existing contents."""
    with open(path, "wb") as fh:
        fh.write(data)


def dir_exists(path: str | os.PathLike) -> bool:
    """Return True if ``path`` is a directory that exists."""
    return os.path.isdir(path)


def file_exists(path: str | os.PathLike) -> bool:
    """Return True if ``path`` can be opened for reading as a file."""
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def make_dir(path: str | os.PathLike, mode: int = 0o777) -> None:
    """Create a single directory."""
    os.mkdir(path, mode)


def touch_file(path: str | os.PathLike) -> None:
    """Create an empty file, truncating it if it already exists."""
    with open(path, "wb"):
        pass


def delete_file(path: str | os.PathLike) -> None:
    """Delete a file, or an empty directory."""
    if os.path.isdir(path) and not os.path.islink(path):
        os.rmdir(path)
    else:
        os.remove(path)


def delete_path(path: str | os.PathLike) -> None:
    """Recursively delete everything at or below ``path``."""
    log.debug("Deleting path: %s", path)
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


class TempFile:
    """An anonymous temporary file that disappears when closed."""

    def __init__(self, file_obj: BinaryIO) -> None:
        self._file: Optional[BinaryIO] = file_obj

    @property
    def closed(self) -> bool:
        return self._file is None

    def read(self) -> bytes:
        """Return the full contents of the temporary file."""
        if self._file is None:
            raise ValueError("temporary file is closed")
        self._file.seek(0)
        return self._file.read()

    def close(self) -> None:
        """Close and discard the temporary file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "TempFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def write_tmpfile(data: bytes) -> TempFile:
    """Write ``data`` into a new anonymous temporary file."""
    file_obj = tempfile.TemporaryFile()
    try:
        file_obj.write(data)
        file_obj.flush()
    except BaseException:
        file_obj.close()
        raise
    return TempFile(file_obj)