import pytest

from mcplaunch.units import calculate_file_digest, format_bytes


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (100, "100 B"),
        (1024, "1.0 KB"),
        (1024 * 1024, "1.0 MB"),
        (1024 * 1024 * 1024, "1.0 GB"),
        (1536, "1.5 KB"),
        (1536 * 1024, "1.5 MB"),
        (5 * 1024 * 1024 * 1024, "5.0 GB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_format_bytes_just_below_unit():
    assert format_bytes(1023) == "1023 B"


def test_format_bytes_terabytes():
    assert format_bytes(1024**4) == "1.0 TB"


def test_digest_of_empty_file(tmp_path):
    path = tmp_path / "empty"
    path.write_bytes(b"")
    assert calculate_file_digest(path) == (
        "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_digest_of_known_content(tmp_path):
    path = tmp_path / "abc"
    path.write_bytes(b"abc")
    assert calculate_file_digest(str(path)) == (
        "sha256:ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_digest_differs_for_different_content(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.write_bytes(b"one")
    second.write_bytes(b"two")
    assert calculate_file_digest(first) != calculate_file_digest(second)
    assert calculate_file_digest(first).startswith("sha256:")
    assert len(calculate_file_digest(first)) == len("sha256:") + 64


def test_digest_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        calculate_file_digest(tmp_path / "missing")