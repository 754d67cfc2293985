import io
import tarfile

import pytest

from archivist.compression import ArchiveError
from archivist.tar import TarCodec


@pytest.fixture
def tree(tmp_path):
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "empty").mkdir()
    (src / "a.txt").write_text("alpha")
    (src / "sub" / "b.bin").write_bytes(bytes(range(256)))
    return src


def _build_tar(path, members):
    with tarfile.open(path, "w") as archive:
        for name, data in members:
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))


def test_encode_member_names(tmp_path, tree):
    archive_path = tmp_path / "out.tar"
    TarCodec(archive_path).encode([tree])
    with tarfile.open(archive_path) as archive:
        names = archive.getnames()
    assert names == ["src", "src/a.txt", "src/empty", "src/sub", "src/sub/b.bin"]


def test_round_trip(tmp_path, tree):
    archive_path = tmp_path / "out.tar"
    codec = TarCodec(archive_path)
    codec.encode([tree])
    out = tmp_path / "restored"
    codec.decode(out)
    assert (out / "src" / "a.txt").read_text() == "alpha"
    assert (out / "src" / "sub" / "b.bin").read_bytes() == bytes(range(256))
    assert (out / "src" / "empty").is_dir()


def test_encode_several_sources(tmp_path):
    first = tmp_path / "one.txt"
    second = tmp_path / "two.txt"
    first.write_text("1")
    second.write_text("2")
    archive_path = tmp_path / "pair.tar"
    TarCodec(archive_path).encode([first, second])
    with tarfile.open(archive_path) as archive:
        assert archive.getnames() == ["one.txt", "two.txt"]
        assert archive.extractfile("two.txt").read() == b"2"


def test_encode_missing_source(tmp_path):
    with pytest.raises(ArchiveError, match="error walking through"):
        TarCodec(tmp_path / "out.tar").encode([tmp_path / "missing"])


def test_encode_unwritable_output(tmp_path, tree):
    with pytest.raises(ArchiveError, match="failed to create file"):
        TarCodec(tmp_path / "no" / "such" / "out.tar").encode([tree])


def test_decode_skips_unsafe_names(tmp_path, capsys):
    archive_path = tmp_path / "bad.tar"
    _build_tar(archive_path, [("../evil.txt", b"evil"), ("good.txt", b"good")])
    out = tmp_path / "out"
    TarCodec(archive_path).decode(out)
    assert (out / "good.txt").read_bytes() == b"good"
    assert not (tmp_path / "evil.txt").exists()
    assert "Skipping potentially unsafe path: ../evil.txt" in capsys.readouterr().err


def test_decode_absolute_name_stays_inside(tmp_path):
    archive_path = tmp_path / "abs.tar"
    _build_tar(archive_path, [("/inner/abs.txt", b"inside")])
    out = tmp_path / "out"
    TarCodec(archive_path).decode(out)
    assert (out / "inner" / "abs.txt").read_bytes() == b"inside"


def test_decode_ignores_symlinks(tmp_path):
    archive_path = tmp_path / "link.tar"
    with tarfile.open(archive_path, "w") as archive:
        link = tarfile.TarInfo("link")
        link.type = tarfile.SYMTYPE
        link.linkname = "target"
        archive.addfile(link)
    out = tmp_path / "out"
    TarCodec(archive_path).decode(out)
    assert list(out.iterdir()) == []


def test_decode_truncates_existing_file(tmp_path):
    archive_path = tmp_path / "short.tar"
    _build_tar(archive_path, [("f.txt", b"new")])
    out = tmp_path / "out"
    out.mkdir()
    (out / "f.txt").write_bytes(b"much longer old content")
    TarCodec(archive_path).decode(out)
    assert (out / "f.txt").read_bytes() == b"new"


def test_decode_missing_archive(tmp_path):
    with pytest.raises(ArchiveError, match="failed to open tar archive"):
        TarCodec(tmp_path / "missing.tar").decode(tmp_path / "out")


def test_decode_corrupt_archive(tmp_path):
    archive_path = tmp_path / "junk.tar"
    archive_path.write_bytes(b"not a tar archive " * 50)
    with pytest.raises(ArchiveError, match="failed to read tar header"):
        TarCodec(archive_path).decode(tmp_path / "out")


def test_decode_output_is_file(tmp_path, tree):
    archive_path = tmp_path / "out.tar"
    TarCodec(archive_path).encode([tree])
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(ArchiveError, match="is a file, not a directory"):
        TarCodec(archive_path).decode(blocker)


def test_decode_empty_output_dir(tmp_path, tree):
    archive_path = tmp_path / "out.tar"
    TarCodec(archive_path).encode([tree])
    with pytest.raises(ArchiveError, match="output directory path is empty"):
        TarCodec(archive_path).decode("")