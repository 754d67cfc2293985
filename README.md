# archivist

A small command-line archiver. It packs a file or a directory into one of
several archive formats and unpacks such archives into a directory. Only the
Python standard library is used.

Supported methods:

| Method    | Format                      |
|-----------|-----------------------------|
| `zip`     | ZIP with deflate            |
| `tar`     | plain tar                   |
| `tar.gz`  | tar compressed with gzip    |
| `tar.bz`  | tar compressed with bzip2   |
| `tar.xz`  | tar compressed with xz      |

`tar.bz2` is also accepted as a method name and means the same as `tar.bz`.

## Installation

```
pip install .
```

## Command line

Pack a file or directory. The method is required, and the archive is written
to the current directory. Its name is the source's base name with its last
extension replaced by the method:

```
archivist pack --method tar.gz notes.txt      # writes notes.tar.gz
archivist pack -m zip photos                  # writes photos.zip
```

Unpack an archive. The contents go into a directory next to the archive,
named after it without its extensions. If `--method` is left out, the
method is taken from the archive's name, which must end in `.zip`, `.tar`,
`.tar.gz`, `.tar.bz` or `.tar.xz`:

```
archivist unpack photos.zip                   # extracts into photos/
archivist unpack -m tar.xz backup.tar.xz      # extracts into backup/
```

While unpacking, zip, `tar.bz` and `tar.xz` archives print a
`Creating directory: ...` line for each directory entry. Entries whose names
contain `..` are skipped with a warning on standard error. Errors, including
bad command-line usage, are printed to standard error and the command exits
with status 1.

## Library use

Each format has a codec class that takes the archive path. `encode` packs a
list of source paths and `decode` unpacks into a directory:

```python
from archivist.tar import TarCodec
from archivist.compressed_tar import TarGzCodec, TarBz2Codec, TarXzCodec
from archivist.zip_codec import ZipCodec

ZipCodec("photos.zip").encode(["photos"])
ZipCodec("photos.zip").decode("restored")

TarGzCodec("notes.tar.gz").encode(["notes.txt"])
```

Entries are named relative to the directory holding each source path and are
added depth first in sorted order.

`archivist.cli` also has helpers:

```python
from archivist.cli import pack, unpack, detect_method, codec_for, packed_file_name

pack("notes.txt", "tar.gz")            # returns Path("notes.tar.gz")
detect_method("notes.tar.gz")          # "tar.gz"
codec_for("zip", "photos.zip")         # a ZipCodec
packed_file_name("dir/notes.txt", "zip")  # "notes.zip"
unpack("notes.tar.gz", None)           # returns Path("notes")
```

`archivist.compression` holds the `Encoder` and `Decoder` base classes and
the shared helpers `walk_entries`, `is_unsafe_name` and `prepare_output_dir`.
Failures raise `archivist.compression.ArchiveError`.

## Limitations

- Zip archives get entries for regular files only; empty directories are not
  stored.
- Extracting a tar archive restores directories and regular files only;
  symbolic links and other special entries are ignored.
- The command packs one path at a time, always into the current directory,
  and always unpacks next to the archive; there is no option to choose
  another location.
- There is no way to list an archive's contents or add to an existing
  archive.