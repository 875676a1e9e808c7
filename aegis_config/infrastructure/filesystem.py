"""Filesystem Access - thin wrappers mapping OSError to ConfigIOError.

Invariants:
    - No function here lets an OSError escape; callers only see ConfigIOError
    - write_text_atomic never leaves a half-written target: temp file + os.replace
    - move_file never overwrites an existing destination (see first_free_path)
    - copy_file gives the copy a fresh mtime (backup retention orders by mtime)
"""

import contextlib
import logging
import os
import shutil
from pathlib import Path

from aegis_config.core.errors import ConfigIOError, ErrorContext

logger = logging.getLogger(__name__)


def _io_error(action: str, path: Path, e: OSError) -> ConfigIOError:
    return ConfigIOError(
        f"Failed to {action}: {e.strerror or e}",
        os_error=e,
        context=ErrorContext(path=str(path)),
    )


def ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise _io_error("create directory", path, e) from e


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigIOError(
            f"Failed to read file: not UTF-8 ({e.reason})",
            context=ErrorContext(path=str(path)),
        ) from e
    except OSError as e:
        raise _io_error("read file", path, e) from e


def write_text_atomic(path: Path, text: str) -> None:
    """Write via a sibling temp file, then atomically replace the target."""
    temp_path = path.with_name(f"{path.name}.tmp.{os.getpid()}")
    try:
        with temp_path.open("w", encoding="utf-8") as f:
            f.write(text)
        os.replace(temp_path, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            temp_path.unlink()
        raise _io_error("write file", path, e) from e


def first_free_path(path: Path) -> Path:
    """path itself if unused, else path.1, path.2, ..."""
    candidate = path
    counter = 0
    while candidate.exists():
        counter += 1
        candidate = path.with_name(f"{path.name}.{counter}")
    return candidate


def move_file(src: Path, dst: Path) -> Path:
    """Rename src to dst (or the first free variant of dst). Returns the final path."""
    target = first_free_path(dst)
    try:
        os.rename(src, target)
    except OSError as e:
        raise _io_error("move file", src, e) from e
    return target


def copy_file(src: Path, dst: Path) -> None:
    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        raise _io_error("copy file", src, e) from e


def list_files(directory: Path) -> list[Path]:
    try:
        return [p for p in directory.iterdir() if p.is_file()]
    except OSError as e:
        raise _io_error("list directory", directory, e) from e


def modified_time(path: Path) -> float | None:
    """Last-modified time, or None when metadata cannot be read."""
    try:
        return path.stat().st_mtime
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return None


def remove_file(path: Path) -> None:
    try:
        path.unlink()
    except OSError as e:
        raise _io_error("remove file", path, e) from e
