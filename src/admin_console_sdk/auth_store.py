from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Protocol

from platformdirs import user_data_dir

TOKEN_KEY = "token"
USER_KEY = "user"


class KeyValueStore(Protocol):
    """Durable string key-value storage. Multi-key writes and removals are all-or-nothing."""

    def get_many(self, keys: Iterable[str]) -> dict[str, str]: ...

    def set_many(self, values: Mapping[str, str]) -> None: ...

    def delete_many(self, keys: Iterable[str]) -> None: ...


@dataclass
class MemoryKeyValueStore:
    values: dict[str, str] = field(default_factory=dict)

    def get_many(self, keys: Iterable[str]) -> dict[str, str]:
        return {key: self.values[key] for key in keys if key in self.values}

    def set_many(self, values: Mapping[str, str]) -> None:
        self.values = {**self.values, **values}

    def delete_many(self, keys: Iterable[str]) -> None:
        doomed = set(keys)
        self.values = {key: value for key, value in self.values.items() if key not in doomed}


@dataclass
class FileKeyValueStore:
    """JSON object file in the per-user data directory.

    Every change rewrites the whole file through a temporary sibling and
    ``os.replace``, so a reader sees either the old or the new set of keys.
    """

    app_name: str = "admin-console"
    filename: str = "session.json"
    directory: str | Path | None = None

    def _path(self) -> Path:
        base = Path(self.directory) if self.directory else Path(user_data_dir(self.app_name, "AdminConsole"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def _read_all(self) -> dict[str, str]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): value for key, value in data.items() if isinstance(value, str)}

    def _write_all(self, data: Mapping[str, str]) -> None:
        path = self._path()
        if not data:
            if path.exists():
                path.unlink()
            return
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{self.filename}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(dict(data), handle, indent=2)
            try:
                os.chmod(tmp_name, 0o600)
            except OSError:
                pass
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_many(self, keys: Iterable[str]) -> dict[str, str]:
        data = self._read_all()
        return {key: data[key] for key in keys if key in data}

    def set_many(self, values: Mapping[str, str]) -> None:
        self._write_all({**self._read_all(), **values})

    def delete_many(self, keys: Iterable[str]) -> None:
        doomed = set(keys)
        self._write_all({key: value for key, value in self._read_all().items() if key not in doomed})
