"""Tar archives wrapped in gzip, bzip2 or xz compression."""

from __future__ import annotations

from typing import ClassVar

from .tar import TarCodec


class TarGzCodec(TarCodec):
    """Writes and extracts gzip-compressed tar archives."""

    compression: ClassVar[str] = "gz"
    label: ClassVar[str] = "tar.gz"
    announce_dirs: ClassVar[bool] = False


class TarBz2Codec(TarCodec):
    """Writes and extracts bzip2-compressed tar archives."""

    compression: ClassVar[str] = "bz2"
    label: ClassVar[str] = "tar.bz2"
    announce_dirs: ClassVar[bool] = True


class TarXzCodec(TarCodec):
    """Writes and extracts xz-compressed tar archives."""

    compression: ClassVar[str] = "xz"
    label: ClassVar[str] = "tar.xz"
    announce_dirs: ClassVar[bool] = True