"""Build a temporary directory populated with files and sub-directories."""

from __future__ import annotations

import enum
import os
import random
import shutil
import string
import tempfile
import weakref
from dataclasses import dataclass
from pathlib import Path
from typing import Union

StrPath = Union[str, "os.PathLike[str]"]

_NAME_ALPHABET = string.ascii_letters + string.digits
_NAME_LENGTH = 5


class BuildError(Exception):
    """Raised when the directory tree cannot be created."""


class _PathIOError(BuildError):
    _template = "{path}: {cause}"

    def __init__(self, path: StrPath, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(self._template.format(path=self.path, cause=cause))


class FailedToCreateRootDirectory(_PathIOError):
    """The root directory could not be created."""

    _template = "Failed to create the root directory '{path}': {cause}"


class FailedToCreateDirectory(_PathIOError):
    """A directory inside the tree could not be created."""

    _template = "Failed to create directory '{path}': {cause}"


class FailedToDeleteDirectory(_PathIOError):
    """A directory could not be deleted."""

    _template = "Failed to delete directory '{path}': {cause}"


class FailedToCreateFile(_PathIOError):
    """A file could not be created."""

    _template = "Failed to create file '{path}': {cause}"


class FailedToCopyFile(_PathIOError):
    """A source file could not be read for copying."""

    _template = "Failed to read source file '{path}': {cause}"


class FailedToWriteFile(_PathIOError):
    """Content could not be written to a file."""

    _template = "Failed to write file '{path}': {cause}"


class EntryOutsideDirectory(BuildError):
    """An entry resolves to a location outside the temporary directory."""

    def __init__(self, path: StrPath) -> None:
        self.path = Path(path)
        super().__init__(
            f"The entry '{self.path}' is outside the temporary directory"
        )


class EmptyEntryName(BuildError):
    """An entry was given an empty path."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"The entry {index} has an empty name")


class DuplicateEntry(BuildError):
    """An entry already exists on disk."""

    def __init__(self, path: StrPath) -> None:
        self.path = Path(path)
        super().__init__(f"The entry '{self.path}' is already existing")


def _remove_tree(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


class TempDirectory:
    """A created directory, removed on cleanup or when garbage collected.

    Removal only happens if the builder requested ``delete_on_drop``.
    """

    def __init__(self, path: Path, delete_on_drop: bool = True) -> None:
        self._path = path
        self.delete_on_drop = delete_on_drop
        self._finalizer = (
            weakref.finalize(self, _remove_tree, path) if delete_on_drop else None
        )

    @property
    def path(self) -> Path:
        return self._path

    def __fspath__(self) -> str:
        return os.fspath(self._path)

    def cleanup(self) -> None:
        """Remove the directory now if it is set to be deleted."""
        if self._finalizer is not None:
            self._finalizer()

    def __enter__(self) -> TempDirectory:
        return self

    def __exit__(self, *args: object) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return (
            f"TempDirectory(path={str(self._path)!r}, "
            f"delete_on_drop={self.delete_on_drop})"
        )


class _Kind(enum.Enum):
    DIRECTORY = enum.auto()
    EMPTY_FILE = enum.auto()
    TEXT_FILE = enum.auto()
    BINARY_FILE = enum.auto()
    FILE_TO_COPY = enum.auto()


@dataclass(frozen=True)
class _Entry:
    path: str
    kind: _Kind
    data: Union[bytes, str, None] = None


def random_temp_directory() -> Path:
    """Return a not yet existing path with a random name in the system temp dir."""
    base = Path(tempfile.gettempdir())
    while True:
        candidate = base / "".join(random.choices(_NAME_ALPHABET, k=_NAME_LENGTH))
        if not candidate.exists():
            return candidate


def _is_within(path: Path, root: Path) -> bool:
    return path.parts[: len(root.parts)] == root.parts


class TempDirectoryBuilder:
    """Collects entries and creates them under a root directory.

    Every adding method returns the builder so that calls can be chained.
    """

    def __init__(self) -> None:
        self._root = random_temp_directory()
        self._entries: list[_Entry] = []
        self._delete_on_drop = True

    def root_folder(self, directory: StrPath) -> TempDirectoryBuilder:
        """Set the folder in which the tree is created."""
        self._root = Path(directory)
        return self

    def delete_on_drop(self, delete_on_drop: bool) -> TempDirectoryBuilder:
        """Choose whether the created directory is removed on cleanup."""
        self._delete_on_drop = bool(delete_on_drop)
        return self

    def _add(self, path: StrPath, kind: _Kind, data=None) -> TempDirectoryBuilder:
        self._entries.append(_Entry(os.fspath(path), kind, data))
        return self

    def add_empty_file(self, path: StrPath) -> TempDirectoryBuilder:
        """Add an empty file at ``path``, relative to the root."""
        return self._add(path, _Kind.EMPTY_FILE)

    def add_directory(self, path: StrPath) -> TempDirectoryBuilder:
        """Add a directory at ``path``, relative to the root."""
        return self._add(path, _Kind.DIRECTORY)

    def add_text_file(self, path: StrPath, text: object) -> TempDirectoryBuilder:
        """Add a file holding ``str(text)`` encoded as UTF-8."""
        return self._add(path, _Kind.TEXT_FILE, str(text))

    def add_binary_file(self, path: StrPath, content: bytes) -> TempDirectoryBuilder:
        """Add a file holding the given bytes."""
        return self._add(path, _Kind.BINARY_FILE, bytes(content))

    def add_file(self, path: StrPath, source: StrPath) -> TempDirectoryBuilder:
        """Add a copy of the file ``source`` at ``path``."""
        return self._add(path, _Kind.FILE_TO_COPY, os.fspath(source))

    def build(self) -> TempDirectory:
        """Create the root and every entry, in the order they were added."""
        root = self._root
        if not root.exists():
            try:
                os.makedirs(root, exist_ok=True)
            except OSError as err:
                raise FailedToCreateRootDirectory(root, err) from err

        for index, entry in enumerate(self._entries):
            if not entry.path:
                raise EmptyEntryName(index)

            entry_path = Path(os.path.normpath(root / entry.path))
            if not _is_within(entry_path, root):
                raise EntryOutsideDirectory(entry.path)
            if entry_path.exists():
                raise DuplicateEntry(entry_path)

            parent = entry_path.parent
            try:
                os.makedirs(parent, exist_ok=True)
            except OSError as err:
                raise FailedToCreateDirectory(parent, err) from err

            self._create(entry, entry_path)

        return TempDirectory(root, self._delete_on_drop)

    @staticmethod
    def _create(entry: _Entry, entry_path: Path) -> None:
        if entry.kind is _Kind.DIRECTORY:
            try:
                os.mkdir(entry_path)
            except OSError as err:
                raise FailedToCreateDirectory(entry_path, err) from err
        elif entry.kind is _Kind.FILE_TO_COPY:
            try:
                shutil.copy(entry.data, entry_path)
            except OSError as err:
                raise FailedToCopyFile(entry.data, err) from err
        else:
            if entry.kind is _Kind.TEXT_FILE:
                payload = entry.data.encode("utf-8")
            elif entry.kind is _Kind.BINARY_FILE:
                payload = entry.data
            else:
                payload = b""
            try:
                handle = open(entry_path, "wb")
            except OSError as err:
                raise FailedToCreateFile(entry_path, err) from err
            with handle:
                try:
                    handle.write(payload)
                except OSError as err:
                    raise FailedToWriteFile(entry_path, err) from err

    def __repr__(self) -> str:
        return (
            f"TempDirectoryBuilder(root={str(self._root)!r}, "
            f"entries={len(self._entries)}, delete_on_drop={self._delete_on_drop})"
        )