"""Command line entry point: pack and unpack archives."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from .compressed_tar import TarBz2Codec, TarGzCodec, TarXzCodec
from .compression import ArchiveError
from .tar import TarCodec
from .zip_codec import ZipCodec

_CODECS = {
    "zip": ZipCodec,
    "tar": TarCodec,
    "tar.gz": TarGzCodec,
    "tar.xz": TarXzCodec,
    "tar.bz": TarBz2Codec,
    "tar.bz2": TarBz2Codec,
}

_SUFFIX_METHODS = (
    (".zip", "zip"),
    (".tar", "tar"),
    (".tar.gz", "tar.gz"),
    (".tar.bz", "tar.bz"),
    (".tar.xz", "tar.xz"),
)


def _base(path: str) -> str:
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return os.sep if path else "."
    return os.path.basename(stripped)


def _ext(name: str) -> str:
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def packed_file_name(path: str | os.PathLike[str], extension: str) -> str:
    """Name of the archive for ``path``: its base name with ``extension``."""
    name = _base(os.fspath(path))
    ext = _ext(name)
    stem = name[: -len(ext)] if ext else name
    return f"{stem}.{extension}"


def default_output_dir(archive_path: str | os.PathLike[str]) -> str:
    """Directory next to the archive, named after it without extensions."""
    archive_path = os.fspath(archive_path)
    base = _base(archive_path)
    ext = _ext(archive_path)
    if ext and base.endswith(ext):
        base = base[: -len(ext)]
    base = base.removesuffix(".tar")
    parent = os.path.dirname(archive_path) or "."
    return os.path.normpath(os.path.join(parent, base))


def detect_method(archive_path: str | os.PathLike[str]) -> str:
    """Guess the compression method from the archive's file name."""
    name = os.fspath(archive_path)
    for suffix, method in _SUFFIX_METHODS:
        if name.endswith(suffix):
            return method
    raise ArchiveError(
        f"cannot determine compression method from file extension: {name}"
    )


def codec_for(method: str, path: str | os.PathLike[str]):
    """Build the codec for ``method`` working on the archive at ``path``."""
    try:
        codec = _CODECS[method]
    except KeyError:
        raise ArchiveError(f"unknown compression method: {method}") from None
    return codec(path)


def pack(path: str | os.PathLike[str] | None, method: str) -> Path:
    """Pack ``path`` into an archive in the working directory; return its path."""
    if not path or not os.fspath(path):
        raise ArchiveError("path to file is not specified")
    packed_name = packed_file_name(path, method)
    codec_for(method, packed_name).encode([path])
    return Path(packed_name)


def unpack(archive_path: str | os.PathLike[str] | None, method: str | None = None) -> Path:
    """Extract an archive next to itself; return the output directory."""
    if not archive_path or not os.fspath(archive_path):
        raise ArchiveError("archive path is not specified")
    archive_path = os.fspath(archive_path)
    if not os.path.exists(archive_path):
        raise ArchiveError(f"archive {archive_path} does not exist")

    output_dir = default_output_dir(archive_path)
    if os.path.exists(output_dir) and not os.path.isdir(output_dir):
        raise ArchiveError(f"output path {output_dir} is a file, not a directory")

    if not method:
        method = detect_method(archive_path)
    codec = codec_for(method, archive_path)

    try:
        codec.decode(output_dir)
    except ArchiveError as exc:
        raise ArchiveError(f"failed to decode {archive_path}: {exc}") from exc
    return Path(output_dir)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="archivist", description="Welcome to the Archivist"
    )
    commands = parser.add_subparsers(dest="command")

    pack_cmd = commands.add_parser("pack", help="Pack file")
    pack_cmd.add_argument("path", nargs="?", default="")
    pack_cmd.add_argument(
        "-m", "--method", required=True, help="compression method"
    )

    unpack_cmd = commands.add_parser("unpack", help="Unpack file")
    unpack_cmd.add_argument("path", nargs="?", default="")
    unpack_cmd.add_argument(
        "-m", "--method", default="", help="decompression method"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    parser = _parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    try:
        if args.command == "pack":
            pack(args.path, args.method)
        elif args.command == "unpack":
            unpack(args.path, args.method)
        else:
            parser.print_help()
    except ArchiveError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())