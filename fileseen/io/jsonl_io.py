# fileseen/io/jsonl_io.py
from __future__ import annotations

import gzip
import os
import tempfile
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Tuple, Union

PathLike = Union[str, os.PathLike]

__all__ = [
    "read_lines",
    "iter_lines",
    "write_lines",
]


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _should_gzip(path: Path, gzip_flag: Optional[bool]) -> bool:
    if gzip_flag is not None:
        return bool(gzip_flag)
    return path.suffix.lower() == ".gz"


def _open_for_write_atomic(path: Path, *, gzip_enabled: bool, encoding: str = "utf-8") -> Tuple[TextIO, Path]:
    """
    Create a temp file next to 'path' and return (fp, tmp_path).
    Caller must close fp and os.replace(tmp_path, path).
    """
    _ensure_parent(path)
    fd, name = tempfile.mkstemp(dir=str(path.parent), prefix=path.name + ".", suffix=".tmp")
    os.close(fd)
    tmp_path = Path(name)
    opener = gzip.open if gzip_enabled else open
    return opener(tmp_path, "wt", encoding=encoding, newline="\n"), tmp_path


def _open_maybe_gzip(path: Path, encoding: str = "utf-8") -> TextIO:
    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding=encoding, newline="\n")
    return open(path, "r", encoding=encoding, newline="\n")


def iter_lines(fp: TextIO) -> Iterator[str]:
    """
    Yield the lines of an already-open text stream without their terminator.

    A trailing ``\\r`` is dropped along with the ``\\n``. Blank lines are
    yielded as empty strings; deciding what to do with them is the caller's job.
    """
    for raw in fp:
        if raw.endswith("\n"):
            raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
        yield raw


def read_lines(path: PathLike, *, encoding: str = "utf-8") -> Iterator[str]:
    """
    Stream the lines of a text file (``.gz`` is decompressed transparently).

    The file is opened on first iteration and closed when the generator is
    exhausted or closed. ``OSError`` from opening or reading propagates.
    """
    p = Path(path)
    with _open_maybe_gzip(p, encoding=encoding) as f:
        yield from iter_lines(f)


def write_lines(
    path: PathLike,
    lines: Iterable[str],
    *,
    atomic: bool = True,
    gzip_enabled: Optional[bool] = None,
) -> int:
    """
    Write text lines, one per row, to ``path``.

    - atomic=True (default) writes a temp file and replaces the target in one step.
    - gzip_enabled: True/False to force, None to infer from a '.gz' suffix.

    Returns the number of lines written.
    """
    target = Path(path)
    gz = _should_gzip(target, gzip_enabled)

    if not atomic:
        _ensure_parent(target)
        opener = gzip.open if gz else open
        with opener(target, "wt", encoding="utf-8", newline="\n") as f:
            return _write_all(f, lines)

    fp, tmp_path = _open_for_write_atomic(target, gzip_enabled=gz)
    try:
        count = _write_all(fp, lines)
        fp.flush()
    except BaseException:
        fp.close()
        tmp_path.unlink(missing_ok=True)
        raise
    fp.close()
    os.replace(tmp_path, target)
    return count


def _write_all(fp: TextIO, lines: Iterable[str]) -> int:
    count = 0
    for line in lines:
        fp.write(line)
        fp.write("\n")
        count += 1
    return count

