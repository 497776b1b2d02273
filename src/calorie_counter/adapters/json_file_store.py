"""Key-value store kept in a local JSON file."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from calorie_counter.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores one namespace as a JSON object in ``<data_dir>/<namespace>.json``."""

    path: Path

    @classmethod
    def create(cls, data_dir: str, namespace: str) -> "JsonFileKeyValueStore":
        """Create a store for a namespace under the given directory."""
        return cls(path=Path(data_dir) / f"{namespace}.json")

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and rewrite the file."""
        entries = self._read()
        entries[key] = value
        self._write(entries)

    def delete(self, key: str) -> None:
        """Remove a key and rewrite the file."""
        entries = self._read()
        if entries.pop(key, None) is not None:
            self._write(entries)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _write(self, entries: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
        logger.debug("Wrote %d keys to %s", len(entries), self.path)
