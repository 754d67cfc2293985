"""Packing into and extracting from zip archives."""

from __future__ import annotations

import os
import shutil
import sys
import zipfile
import zlib
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .compression import (
    ArchiveError,
    Decoder,
    Encoder,
    WalkEntry,
    is_unsafe_name,
    prepare_output_dir,
    walk_entries,
)

_READ_ERRORS = (zipfile.BadZipFile, zlib.error, OSError, EOFError)


@dataclass
class ZipCodec(Encoder, Decoder):
    """Writes and extracts zip archives at ``output_path``."""

    output_path: str | os.PathLike[str]

    def encode(self, source_paths: Iterable[str | os.PathLike[str]]) -> None:
        """Pack the regular files under every source path, deflated.

        Directories themselves get no entry of their own.
        """
        try:
            out = open(self.output_path, "wb")
        except OSError as exc:
            raise ArchiveError(
                f"failed to create zip file {self.output_path}: {exc}"
            ) from exc

        with out, zipfile.ZipFile(out, "w") as archive:
            for source in source_paths:
                for entry in walk_entries(source):
                    if not entry.is_dir:
                        self._add(archive, entry)

    @staticmethod
    def _add(archive: zipfile.ZipFile, entry: WalkEntry) -> None:
        try:
            info = zipfile.ZipInfo.from_file(
                entry.path, arcname=entry.name, strict_timestamps=False
            )
        except OSError as exc:
            raise ArchiveError(
                f"failed to create zip header for {entry.path}: {exc}"
            ) from exc
        info.compress_type = zipfile.ZIP_DEFLATED

        try:
            with open(entry.path, "rb") as source, archive.open(info, "w") as dest:
                shutil.copyfileobj(source, dest)
        except OSError as exc:
            raise ArchiveError(
                f"failed to write file {entry.path} to zip: {exc}"
            ) from exc

    def decode(self, output_dir: str | os.PathLike[str]) -> None:
        """Extract every member into ``output_dir``.

        Members whose names contain ``..`` are skipped with a warning.
        """
        target_dir = prepare_output_dir(output_dir)

        try:
            reader = zipfile.ZipFile(self.output_path)
        except _READ_ERRORS as exc:
            raise ArchiveError(
                f"failed to open zip archive {self.output_path}: {exc}"
            ) from exc

        with reader:
            for info in reader.infolist():
                self._extract(reader, info, target_dir)

    @staticmethod
    def _extract(reader: zipfile.ZipFile, info: zipfile.ZipInfo, target_dir: Path) -> None:
        name = info.filename
        target = os.path.normpath(os.path.join(target_dir, name.lstrip("/")))

        if is_unsafe_name(name):
            print(f"Skipping potentially unsafe path: {name}", file=sys.stderr)
            return

        mode = (info.external_attr >> 16) & 0o7777
        if info.is_dir():
            print(f"Creating directory: {target}")
            try:
                os.makedirs(target, mode=mode or 0o777, exist_ok=True)
            except OSError as exc:
                raise ArchiveError(
                    f"failed to create directory {target}: {exc}"
                ) from exc
            return

        try:
            stream = reader.open(info)
        except (*_READ_ERRORS, NotImplementedError, RuntimeError) as exc:
            raise ArchiveError(f"failed to open file {name} in zip: {exc}") from exc

        with stream:
            try:
                os.makedirs(os.path.dirname(target), mode=0o755, exist_ok=True)
            except OSError as exc:
                raise ArchiveError(
                    f"failed to create parent directory for {target}: {exc}"
                ) from exc

            flags = os.O_CREAT | os.O_WRONLY | os.O_TRUNC | getattr(os, "O_BINARY", 0)
            try:
                descriptor = os.open(target, flags, mode or 0o666)
            except OSError as exc:
                raise ArchiveError(f"failed to create file {target}: {exc}") from exc

            try:
                with os.fdopen(descriptor, "wb") as destination:
                    shutil.copyfileobj(stream, destination)
            except _READ_ERRORS as exc:
                raise ArchiveError(f"failed to write file {target}: {exc}") from exc