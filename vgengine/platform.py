"""File, clock and calendar services the engine relies on."""

from __future__ import annotations

import errno
import os
import shutil
import time
from dataclasses import dataclass
from datetime import datetime, timezone

INITIAL_COMMIT_SIZE = 5 * 1024**3

PathArg = "str | os.PathLike[str]"


@dataclass(frozen=True)
class Time:
    """A UTC calendar time; ``weekday`` counts from Sunday as 0."""

    year: int
    month: int
    weekday: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int


def get_file_size(filename: str | os.PathLike[str]) -> int | None:
    """Size of a file in bytes, or None if it does not exist."""
    try:
        with open(filename, "rb") as handle:
            return os.fstat(handle.fileno()).st_size
    except FileNotFoundError:
        return None


def read_entire_file(filename: str | os.PathLike[str], size: int | None = None) -> bytes | None:
    """Read ``size`` bytes (the whole file if None); None if it does not exist.

    Raises OSError when the file holds fewer than ``size`` bytes.
    """
    try:
        handle = open(filename, "rb")
    except FileNotFoundError:
        return None
    with handle:
        if size is None:
            return handle.read()
        if size < 0:
            raise ValueError("size must not be negative")
        data = handle.read(size)
    if len(data) != size:
        raise OSError(f"read {len(data)} of {size} bytes from {os.fspath(filename)!r}")
    return data


def _write_from_start(fd: int, data: bytes, filename: str | os.PathLike[str]) -> None:
    with os.fdopen(fd, "wb") as handle:
        written = handle.write(data)
    if written != len(data):
        raise OSError(f"wrote {written} of {len(data)} bytes to {os.fspath(filename)!r}")


def write_entire_file(filename: str | os.PathLike[str], data: bytes) -> None:
    """Write ``data`` at the start of the file, creating it if needed.

    An existing file is not truncated: bytes past the end of ``data`` remain.
    """
    fd = os.open(filename, os.O_WRONLY | os.O_CREAT | getattr(os, "O_BINARY", 0), 0o666)
    _write_from_start(fd, bytes(data), filename)


def write_entire_existing_file(filename: str | os.PathLike[str], data: bytes) -> bool:
    """Like :func:`write_entire_file` but only for a file that exists.

    Returns False if the file does not exist.
    """
    try:
        fd = os.open(filename, os.O_WRONLY | getattr(os, "O_BINARY", 0))
    except FileNotFoundError:
        return False
    _write_from_start(fd, bytes(data), filename)
    return True


def copy_file(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> bool:
    """Copy ``src`` to a new file ``dest``.

    Returns False if ``src`` or the folder of ``dest`` is missing; raises
    FileExistsError if ``dest`` already exists.
    """
    if os.path.lexists(dest):
        raise FileExistsError(errno.EEXIST, "destination exists", os.fspath(dest))
    return copy_and_maybe_overwrite_file(src, dest)


def copy_and_maybe_overwrite_file(
    src: str | os.PathLike[str], dest: str | os.PathLike[str]
) -> bool:
    """Copy ``src`` to ``dest``, replacing ``dest`` if it exists.

    Returns False if ``src`` or the folder of ``dest`` is missing.
    """
    try:
        shutil.copy2(src, dest)
    except FileNotFoundError:
        return False
    return True


def _relocate(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> None:
    try:
        os.replace(src, dest)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        shutil.copy2(src, dest)
        os.remove(src)


def move_file(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> bool:
    """Move ``src`` to a new path ``dest``, across volumes if needed.

    Returns False if ``src`` or the folder of ``dest`` is missing; raises
    FileExistsError if ``dest`` already exists.
    """
    if os.path.lexists(dest):
        raise FileExistsError(errno.EEXIST, "destination exists", os.fspath(dest))
    return move_and_maybe_overwrite_file(src, dest)


def move_and_maybe_overwrite_file(
    src: str | os.PathLike[str], dest: str | os.PathLike[str]
) -> bool:
    """Move ``src`` to ``dest``, replacing ``dest`` if it exists.

    Returns False if ``src`` or the folder of ``dest`` is missing.
    """
    try:
        _relocate(src, dest)
    except FileNotFoundError:
        return False
    return True


def delete_file(filename: str | os.PathLike[str]) -> bool:
    """Delete a file; False if it does not exist."""
    try:
        os.remove(filename)
    except FileNotFoundError:
        return False
    return True


def create_directory(dirname: str | os.PathLike[str]) -> bool:
    """Create a directory; False if it already exists."""
    try:
        os.mkdir(dirname)
    except FileExistsError:
        return False
    return True


def delete_directory(dirname: str | os.PathLike[str]) -> bool:
    """Delete an empty directory; False if it is not empty."""
    try:
        os.rmdir(dirname)
    except OSError as exc:
        if exc.errno in (errno.ENOTEMPTY, errno.EEXIST):
            return False
        raise
    return True


def directory_exists(dirname: str | os.PathLike[str]) -> bool:
    """True if ``dirname`` names an existing directory."""
    return os.path.isdir(dirname)


def read_time_counter() -> float:
    """A monotonic clock reading in milliseconds."""
    return time.perf_counter() * 1000.0


def read_cycle_counter() -> int:
    """A monotonic high-resolution tick count."""
    return time.perf_counter_ns()


def get_time() -> Time:
    """The current UTC calendar time."""
    now = datetime.now(timezone.utc)
    return Time(
        year=now.year,
        month=now.month,
        weekday=(now.weekday() + 1) % 7,
        day=now.day,
        hour=now.hour,
        minute=now.minute,
        second=now.second,
        millisecond=now.microsecond // 1000,
    )