import gc
import shutil
import tempfile
from pathlib import Path

import pytest

from tempdirbuilder.builder import (
    BuildError,
    DuplicateEntry,
    EmptyEntryName,
    EntryOutsideDirectory,
    FailedToCopyFile,
    TempDirectory,
    TempDirectoryBuilder,
    random_temp_directory,
)


def test_temp_dir():
    with TempDirectoryBuilder().build() as temp_dir:
        assert temp_dir.path.exists()
        assert temp_dir.path.is_dir()


def test_add_text_file():
    with TempDirectoryBuilder().add_text_file("foo.txt", "bar").build() as temp_dir:
        entry_path = temp_dir.path / "foo.txt"
        assert entry_path.exists()
        assert entry_path.read_text() == "bar"


def test_add_binary_file():
    expected = bytes([98, 97, 114])
    with TempDirectoryBuilder().add_binary_file("foo.txt", expected).build() as temp_dir:
        entry_path = temp_dir.path / "foo.txt"
        assert entry_path.exists()
        assert entry_path.read_bytes() == expected


def test_add_empty_file():
    with TempDirectoryBuilder().add_empty_file("empty_file.txt").build() as temp_dir:
        entry_path = temp_dir.path / "empty_file.txt"
        assert entry_path.exists()
        assert entry_path.stat().st_size == 0


def test_add_directory():
    with TempDirectoryBuilder().add_directory("empty_directory").build() as temp_dir:
        entry_path = temp_dir.path / "empty_directory"
        assert entry_path.exists()
        assert entry_path.is_dir()


def test_add_file():
    source = Path(__file__)
    with TempDirectoryBuilder().add_file("test.py", source).build() as temp_dir:
        entry_path = temp_dir.path / "test.py"
        assert entry_path.is_file()
        assert entry_path.read_text() == source.read_text()


def test_temp_dir_is_dropped():
    temp_dir = TempDirectoryBuilder().build()
    path = temp_dir.path
    assert path.is_dir()
    del temp_dir
    gc.collect()
    assert not path.exists()


def test_cleanup_removes_directory():
    temp_dir = TempDirectoryBuilder().add_text_file("a/b.txt", "x").build()
    path = temp_dir.path
    assert (path / "a" / "b.txt").read_text() == "x"
    temp_dir.cleanup()
    assert not path.exists()


def test_context_manager_removes_directory():
    with TempDirectoryBuilder().build() as temp_dir:
        path = temp_dir.path
        assert path.is_dir()
    assert not path.exists()


def test_delete_on_drop_false_keeps_directory():
    temp_dir = TempDirectoryBuilder().delete_on_drop(False).build()
    path = temp_dir.path
    try:
        temp_dir.cleanup()
        assert path.is_dir()
    finally:
        shutil.rmtree(path)


def test_root_folder(tmp_path):
    root = tmp_path / "custom" / "root"
    temp_dir = TempDirectoryBuilder().root_folder(root).add_empty_file("x").build()
    assert temp_dir.path == root
    assert (root / "x").is_file()
    temp_dir.cleanup()
    assert not root.exists()


def test_nested_entries_create_parents():
    builder = (
        TempDirectoryBuilder()
        .add_text_file("test/foo.txt", "bar")
        .add_empty_file("test/folder-a/folder-b/bar.txt")
        .add_directory("test/dir")
    )
    with builder.build() as temp_dir:
        assert (temp_dir.path / "test" / "foo.txt").read_text() == "bar"
        assert (temp_dir.path / "test" / "folder-a" / "folder-b" / "bar.txt").is_file()
        assert (temp_dir.path / "test" / "dir").is_dir()


def test_entry_outside_temp_dir():
    outside = Path(tempfile.gettempdir()) / "outside"
    with pytest.raises(EntryOutsideDirectory) as info:
        TempDirectoryBuilder().add_empty_file(outside).build()
    assert info.value.path == outside


def test_source_file_does_not_exist():
    source = Path(tempfile.gettempdir()) / "not existing file"
    with pytest.raises(FailedToCopyFile) as info:
        TempDirectoryBuilder().add_file("foo", source).build()
    assert info.value.path == source
    assert "Failed to read source file" in str(info.value)


def test_duplicated_entries():
    builder = TempDirectoryBuilder().add_empty_file("foo").add_empty_file("foo")
    with pytest.raises(DuplicateEntry):
        builder.build()


def test_entry_outside_directory():
    with pytest.raises(EntryOutsideDirectory) as info:
        TempDirectoryBuilder().add_empty_file("../foo").build()
    assert str(info.value) == "The entry '../foo' is outside the temporary directory"


def test_empty_entry_name():
    with pytest.raises(EmptyEntryName) as info:
        TempDirectoryBuilder().add_empty_file("").build()
    assert info.value.index == 0
    assert str(info.value) == "The entry 0 has an empty name"


def test_empty_entry_name_reports_index():
    builder = TempDirectoryBuilder().add_empty_file("a").add_directory("")
    with pytest.raises(EmptyEntryName) as info:
        builder.build()
    assert info.value.index == 1


def test_errors_share_base_class():
    with pytest.raises(BuildError):
        TempDirectoryBuilder().add_empty_file("../escape").build()


def test_random_temp_directory_is_fresh():
    path = random_temp_directory()
    assert path.parent == Path(tempfile.gettempdir())
    assert len(path.name) == 5
    assert path.name.isalnum()
    assert not path.exists()


def test_temp_directory_fspath(tmp_path):
    temp_dir = TempDirectory(tmp_path, delete_on_drop=False)
    assert Path(temp_dir) == tmp_path