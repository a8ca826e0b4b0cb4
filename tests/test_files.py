import os

import pytest

from petnet.files import (
    delete_file,
    delete_path,
    dir_exists,
    file_exists,
    make_dir,
    read_file,
    touch_file,
    write_file,
    write_tmpfile,
)


def test_write_then_read_round_trip(tmp_path):
    target = tmp_path / "data.bin"
    payload = bytes(range(256)) * 3
    write_file(target, payload)
    assert read_file(target) == payload


def test_write_replaces_contents(tmp_path):
    target = tmp_path / "data.bin"
    write_file(target, b"first contents")
    write_file(target, b"2nd")
    assert read_file(target) == b"2nd"


def test_read_empty_file(tmp_path):
    target = tmp_path / "empty"
    target.write_bytes(b"")
    assert read_file(target) == b""


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_file(tmp_path / "missing")


def test_dir_exists(tmp_path):
    assert dir_exists(tmp_path) is True
    assert dir_exists(tmp_path / "nope") is False
    f = tmp_path / "f"
    f.write_bytes(b"x")
    assert dir_exists(f) is False


def test_file_exists(tmp_path):
    f = tmp_path / "f"
    assert file_exists(f) is False
    f.write_bytes(b"x")
    assert file_exists(f) is True


def test_make_dir(tmp_path):
    d = tmp_path / "sub"
    make_dir(d, 0o755)
    assert dir_exists(d) is True
    with pytest.raises(FileExistsError):
        make_dir(d, 0o755)


def test_touch_creates_empty_and_truncates(tmp_path):
    f = tmp_path / "touched"
    touch_file(f)
    assert read_file(f) == b""
    write_file(f, b"contents")
    touch_file(f)
    assert read_file(f) == b""


def test_delete_file(tmp_path):
    f = tmp_path / "f"
    f.write_bytes(b"x")
    delete_file(f)
    assert file_exists(f) is False
    with pytest.raises(FileNotFoundError):
        delete_file(f)


def test_delete_file_removes_empty_dir(tmp_path):
    d = tmp_path / "empty_dir"
    d.mkdir()
    delete_file(d)
    assert dir_exists(d) is False


def test_delete_path_recursive(tmp_path):
    root = tmp_path / "tree"
    (root / "a" / "b").mkdir(parents=True)
    (root / "a" / "b" / "leaf.txt").write_bytes(b"leaf")
    (root / "top.txt").write_bytes(b"top")
    delete_path(root)
    assert os.path.exists(root) is False
    assert dir_exists(tmp_path) is True


def test_delete_path_single_file(tmp_path):
    f = tmp_path / "single"
    f.write_bytes(b"x")
    delete_path(f)
    assert file_exists(f) is False


def test_delete_path_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        delete_path(tmp_path / "missing")


def test_tmpfile_round_trip():
    payload = b"temporary payload\x00\xff"
    with write_tmpfile(payload) as tmp:
        assert tmp.read() == payload
        assert tmp.read() == payload
    assert tmp.closed is True


def test_tmpfile_read_after_close_raises():
    tmp = write_tmpfile(b"abc")
    tmp.close()
    with pytest.raises(ValueError):
        tmp.read()
    tmp.close()
    assert tmp.closed is True