"""Key-value backends that hold the persisted store."""

import os
import tempfile
from pathlib import Path
from typing import Protocol


class KeyValueBackend(Protocol):
    """String values stored under string keys."""

    def get(self, key: str) -> str | None:
        """Return the value for key, or None when it was never set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


class JsonFileBackend:
    """Stores each key as ``<key>.json`` in a directory.

    Raises:
        OSError: From get/set when the filesystem refuses the operation.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)

        # Write then rename so a failed write never truncates the previous payload
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class MemoryBackend:
    """In-process backend, mainly for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
