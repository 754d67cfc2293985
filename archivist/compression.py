"""Shared interfaces and helpers for archive codecs."""

from __future__ import annotations

import os
import stat
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path


class ArchiveError(Exception):
    """Raised when packing or unpacking an archive fails."""


class Encoder(ABC):
    """Something that packs files and directories into an archive."""

    @abstractmethod
    def encode(self, source_paths: Iterable[str | os.PathLike[str]]) -> None:
        """Pack every path in ``source_paths`` into the archive."""


class Decoder(ABC):
    """Something that extracts an archive into a directory."""

    @abstractmethod
    def decode(self, output_dir: str | os.PathLike[str]) -> None:
        """Extract the archive into ``output_dir``."""


@dataclass(frozen=True)
class WalkEntry:
    """One file system entry found while walking a source path."""

    path: str
    name: str
    is_dir: bool


def walk_entries(source: str | os.PathLike[str]) -> Iterator[WalkEntry]:
    """Yield ``source`` and everything below it, depth first in lexical order.

    Each entry's name is relative to the directory holding ``source`` and
    uses forward slashes. Symbolic links are reported, not followed.
    """
    source = os.fspath(source)
    base = os.path.dirname(source) or "."
    yield from _walk(source, base)


def _walk(path: str, base: str) -> Iterator[WalkEntry]:
    try:
        info = os.lstat(path)
    except OSError as exc:
        raise ArchiveError(f"error walking through {path}: {exc}") from exc

    is_dir = stat.S_ISDIR(info.st_mode)
    yield WalkEntry(path=path, name=_archive_name(path, base), is_dir=is_dir)

    if not is_dir:
        return
    try:
        children = sorted(os.listdir(path))
    except OSError as exc:
        raise ArchiveError(f"error walking through {path}: {exc}") from exc
    for child in children:
        yield from _walk(os.path.join(path, child), base)


def _archive_name(path: str, base: str) -> str:
    try:
        relative = os.path.relpath(path, base)
    except ValueError as exc:
        raise ArchiveError(f"failed to get relative path for {path}: {exc}") from exc
    return relative.replace(os.sep, "/")


def is_unsafe_name(name: str) -> bool:
    """Tell whether an archive member name may escape the output directory."""
    return ".." in name


def prepare_output_dir(output_dir: str | os.PathLike[str]) -> Path:
    """Check ``output_dir`` and create it if needed; return it as a path."""
    if not os.fspath(output_dir):
        raise ArchiveError("output directory path is empty")

    target = Path(output_dir)
    if target.exists() and not target.is_dir():
        raise ArchiveError(f"output path {target} is a file, not a directory")

    try:
        target.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        print(f"Failed to create output directory {target}: {exc}", file=sys.stderr)
        raise ArchiveError(
            f"failed to create output directory {target}: {exc}"
        ) from exc
    return target