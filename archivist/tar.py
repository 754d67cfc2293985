"""Packing into and extracting from tar archives."""

from __future__ import annotations

import lzma
import os
import shutil
import sys
import tarfile
import zlib
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from .compression import (
    ArchiveError,
    Decoder,
    Encoder,
    WalkEntry,
    is_unsafe_name,
    prepare_output_dir,
    walk_entries,
)

_READ_ERRORS = (tarfile.TarError, OSError, EOFError, lzma.LZMAError, zlib.error)


@dataclass
class TarCodec(Encoder, Decoder):
    """Writes and extracts tar archives at ``output_path``."""

    output_path: str | os.PathLike[str]

    compression: ClassVar[str] = ""
    label: ClassVar[str] = "tar"
    announce_dirs: ClassVar[bool] = False

    def encode(self, source_paths: Iterable[str | os.PathLike[str]]) -> None:
        """Pack every source path, with everything below it, into the archive."""
        try:
            out = open(self.output_path, "wb")
        except OSError as exc:
            raise ArchiveError(
                f"failed to create file {self.output_path}: {exc}"
            ) from exc

        with out, tarfile.open(fileobj=out, mode=f"w:{self.compression}") as archive:
            for source in source_paths:
                for entry in walk_entries(source):
                    self._add(archive, entry)

    def _add(self, archive: tarfile.TarFile, entry: WalkEntry) -> None:
        try:
            info = archive.gettarinfo(entry.path, arcname=entry.name)
        except OSError as exc:
            raise ArchiveError(
                f"failed to create tar header for {entry.path}: {exc}"
            ) from exc
        if info is None:
            raise ArchiveError(
                f"failed to create tar header for {entry.path}: unsupported file type"
            )

        if info.isreg():
            try:
                with open(entry.path, "rb") as source:
                    archive.addfile(info, source)
            except OSError as exc:
                raise ArchiveError(
                    f"failed to write file {entry.path} to {self.label}: {exc}"
                ) from exc
        else:
            try:
                archive.addfile(info)
            except OSError as exc:
                raise ArchiveError(
                    f"failed to write tar header for {entry.path}: {exc}"
                ) from exc

    def decode(self, output_dir: str | os.PathLike[str]) -> None:
        """Extract directories and regular files into ``output_dir``.

        Members whose names contain ``..`` are skipped with a warning;
        links and other special members are ignored.
        """
        target_dir = prepare_output_dir(output_dir)

        try:
            source = open(self.output_path, "rb")
        except OSError as exc:
            raise ArchiveError(
                f"failed to open {self.label} archive {self.output_path}: {exc}"
            ) from exc

        with source:
            try:
                archive = tarfile.open(fileobj=source, mode=f"r:{self.compression}")
            except _READ_ERRORS as exc:
                raise ArchiveError(f"failed to read tar header: {exc}") from exc
            with archive:
                for member in _members(archive):
                    self._extract(archive, member, target_dir)

    def _extract(
        self, archive: tarfile.TarFile, member: tarfile.TarInfo, target_dir: Path
    ) -> None:
        name = member.name
        target = os.path.normpath(os.path.join(target_dir, name.lstrip("/")))
        if is_unsafe_name(name):
            print(f"Skipping potentially unsafe path: {name}", file=sys.stderr)
            return

        mode = member.mode & 0o7777
        if member.isdir():
            if self.announce_dirs:
                print(f"Creating directory: {target}")
            try:
                os.makedirs(target, mode=mode, exist_ok=True)
            except OSError as exc:
                raise ArchiveError(
                    f"failed to create directory {target}: {exc}"
                ) from exc
            return

        if not member.isreg():
            return

        try:
            os.makedirs(os.path.dirname(target), mode=0o755, exist_ok=True)
        except OSError as exc:
            raise ArchiveError(
                f"failed to create parent directory for {target}: {exc}"
            ) from exc

        flags = os.O_CREAT | os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        try:
            descriptor = os.open(target, flags, mode)
        except OSError as exc:
            raise ArchiveError(f"failed to create file {target}: {exc}") from exc

        try:
            with os.fdopen(descriptor, "wb") as destination:
                stream = archive.extractfile(member)
                if stream is not None:
                    with stream:
                        shutil.copyfileobj(stream, destination)
        except _READ_ERRORS as exc:
            raise ArchiveError(f"failed to write file {target}: {exc}") from exc


def _members(archive: tarfile.TarFile) -> Iterator[tarfile.TarInfo]:
    while True:
        try:
            member = archive.next()
        except _READ_ERRORS as exc:
            raise ArchiveError(f"failed to read tar header: {exc}") from exc
        if member is None:
            return
        yield member