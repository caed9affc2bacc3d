# tempdirbuilder

Build a temporary directory that already holds the files and directories
a test needs, and have it removed again once you are done with it.

## Installation

```
pip install tempdirbuilder
```

## Usage

Everything lives in the `tempdirbuilder.builder` module.

```python
from tempdirbuilder.builder import TempDirectoryBuilder

temp_dir = (
    TempDirectoryBuilder()
    .add_text_file("test/foo.txt", "bar")
    .add_binary_file("test/foo2.txt", b"bar")
    .add_empty_file("test/folder-a/folder-b/bar.txt")
    .add_file("test/copy.py", __file__)
    .add_directory("test/dir")
    .build()
)

print(f"created successfully in {temp_dir.path}")
temp_dir.cleanup()
```

Each `add_*` method records an entry and returns the builder, so calls can
be chained. `build()` creates the root directory if it does not exist yet,
then creates the entries in the order they were added, making any missing
parent directories on the way. Entry paths are relative to the root.

- `add_empty_file(path)`: an empty file.
- `add_directory(path)`: a directory.
- `add_text_file(path, text)`: a file holding `str(text)` encoded as UTF-8.
- `add_binary_file(path, content)`: a file holding the given bytes.
- `add_file(path, source)`: a copy of the file at `source`.

`build()` returns a `TempDirectory`. Its `path` attribute is the root as a
`pathlib.Path`, and it can be passed wherever a path is accepted
(`os.fspath(temp_dir)` works). It is also a context manager; the directory
is removed on leaving the `with` block:

```python
with TempDirectoryBuilder().add_text_file("config.ini", "[main]").build() as temp_dir:
    assert (temp_dir.path / "config.ini").read_text() == "[main]"
```

The directory is removed, ignoring errors, the first time `cleanup()` is
called, the `with` block ends, or the object is garbage-collected,
whichever comes first; later calls do nothing.

### Options

- `root_folder(directory)` chooses where the tree is created. By default a
  path with a random five-character alphanumeric name inside the system
  temporary directory is used, one that does not exist yet (see
  `random_temp_directory()`). An existing directory may be given; entries
  that already exist in it are reported as duplicates.
- `delete_on_drop(False)` keeps the directory on disk: `cleanup()`, the end
  of a `with` block and garbage collection then leave it in place.

### Errors

`build()` raises a subclass of `BuildError` when something goes wrong. The
path-related errors carry `path` and the underlying `OSError` as `cause`;
`EmptyEntryName` carries the entry's position as `index`.

| Exception | Raised when |
| --- | --- |
| `FailedToCreateRootDirectory` | the root directory cannot be created |
| `FailedToCreateDirectory` | a directory entry or a parent directory cannot be created |
| `FailedToCreateFile` | a file cannot be opened for writing |
| `FailedToWriteFile` | file content cannot be written |
| `FailedToCopyFile` | copying the `add_file` source fails, such as when it does not exist |
| `EntryOutsideDirectory` | an entry path leaves the root, such as `"../foo"` or an absolute path elsewhere |
| `EmptyEntryName` | an entry has an empty path |
| `DuplicateEntry` | an entry already exists on disk, including one added earlier in the same build |

`FailedToDeleteDirectory` is also defined, but `build()` never raises it:
removal of the directory ignores errors.

Entries created before an error are left on disk.

## Running the tests

```
pip install -e ".[test]"
pytest
```