"""In-memory virtual file store.

A ``FileStore`` is an immutable, insertion-ordered mapping of file name to
text content. Every mutator returns a new store and leaves the receiver
untouched, so callers can keep the previous value around (undo, diffing,
persistence) without copying.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from loguru import logger

from devspace.templates.init_project import BASELINE_FILES


class FileStoreError(ValueError):
    """Base class for rejected file store operations."""


class FileNameCollisionError(FileStoreError):
    """Raised when a create or rename targets a name that already exists."""


class InvalidFileNameError(FileStoreError):
    """Raised when a file name is empty or whitespace only."""


class FileNotFoundInStoreError(FileStoreError, LookupError):
    """Raised when an operation targets a file that does not exist."""


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise InvalidFileNameError(repr(name))


def _is_snapshot(value: Any) -> bool:
    return isinstance(value, Mapping) and all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    )


class FileStore(Mapping[str, str]):
    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: dict[str, str] = dict(files or {})

    @classmethod
    def baseline(cls) -> "FileStore":
        return cls(BASELINE_FILES)

    @classmethod
    def load(cls, persisted: Any = None) -> "FileStore":
        """Merge a persisted snapshot on top of the baseline template.

        Persisted values win per key, baseline keys fill the gaps and extra
        persisted keys follow the baseline ones. Anything that is not a
        mapping of str to str counts as "no persisted data".
        """
        if persisted is None:
            return cls.baseline()
        if not _is_snapshot(persisted):
            logger.warning("Ignoring malformed snapshot of type {}", type(persisted).__name__)
            return cls.baseline()
        return cls({**BASELINE_FILES, **persisted})

    # -- Queries ---------------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._files.get(name, default)

    def exists(self, name: str) -> bool:
        return name in self._files

    def names(self) -> list[str]:
        return list(self._files)

    def snapshot(self) -> dict[str, str]:
        """Return a fresh copy of the mapping, safe to hand to persistence."""
        return dict(self._files)

    def __contains__(self, name: object) -> bool:
        return name in self._files

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __getitem__(self, name: str) -> str:
        try:
            return self._files[name]
        except KeyError:
            raise FileNotFoundInStoreError(name) from None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileStore):
            return self._files == other._files
        if isinstance(other, Mapping):
            return self._files == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"FileStore({self.names()!r})"

    # -- Mutators --------------------------------------------------------------

    def create(self, name: str) -> "FileStore":
        _check_name(name)
        if name in self._files:
            raise FileNameCollisionError(name)
        return FileStore({**self._files, name: ""})

    def rename(self, old_name: str, new_name: str) -> "FileStore":
        """Move the content of ``old_name`` to ``new_name``.

        Renaming a file to its current name is a successful no-op. The renamed
        entry is placed at the end of the ordering.
        """
        _check_name(new_name)
        if old_name not in self._files:
            raise FileNotFoundInStoreError(old_name)
        if new_name == old_name:
            return self
        if new_name in self._files:
            raise FileNameCollisionError(new_name)
        files = dict(self._files)
        files[new_name] = files.pop(old_name)
        return FileStore(files)

    def delete(self, name: str) -> "FileStore":
        if name not in self._files:
            return self
        return FileStore({k: v for k, v in self._files.items() if k != name})

    def update(self, name: str, content: str) -> "FileStore":
        """Set the content of ``name``, creating the file if it is absent."""
        _check_name(name)
        return FileStore({**self._files, name: content})
