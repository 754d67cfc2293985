"""Pack files into zip and tar-family archives and unpack them again."""

__version__ = "0.1.0"
__all__ = ["compression", "tar", "compressed_tar", "zip_codec", "cli"]