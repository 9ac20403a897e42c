"""File-backed PreferenceStore: one JSON object per namespace (e.g. contact_prefs.json)."""

import json
import logging
from pathlib import Path

from ethcontacts.application.ports import ens_override_key
from ethcontacts.domain import ContactStoreError, StoreAccessDenied

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "contact_prefs"


class JsonFilePreferenceStore:
    """Flat string -> string map persisted at <directory>/<namespace>.json.
    Writes replace the whole file; the value is durable once put_string returns.
    Reads reuse the parsed file until its mtime or size changes.
    """

    def __init__(self, directory: Path | str, namespace: str = DEFAULT_NAMESPACE) -> None:
        namespace = (namespace or "").strip()
        if not namespace:
            raise ValueError("namespace must be non-empty")
        self._path = Path(directory) / f"{namespace}.json"
        self._cache: tuple[tuple[int, int], dict[str, str]] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def get_string(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def put_string(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".json.tmp")
            tmp.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
            tmp.replace(self._path)
            stat = self._path.stat()
        except PermissionError as e:
            raise StoreAccessDenied(f"Cannot write {self._path}") from e
        except OSError as e:
            raise ContactStoreError(f"Cannot write {self._path}: {e}") from e
        self._cache = ((stat.st_mtime_ns, stat.st_size), data)

    def get_ens_override(self, contact_id: str) -> str | None:
        return self.get_string(ens_override_key(contact_id))

    def set_ens_override(self, contact_id: str, value: str) -> None:
        self.put_string(ens_override_key(contact_id), value)

    def _load(self) -> dict[str, str]:
        # Re-parse only when the file's mtime or size changed since the last read.
        try:
            stat = self._path.stat()
        except FileNotFoundError:
            self._cache = None
            return {}
        except PermissionError as e:
            raise StoreAccessDenied(f"Cannot read {self._path}") from e
        except OSError as e:
            raise ContactStoreError(f"Cannot read {self._path}: {e}") from e
        signature = (stat.st_mtime_ns, stat.st_size)
        if self._cache is not None and self._cache[0] == signature:
            return dict(self._cache[1])
        try:
            obj = json.loads(self._path.read_text(encoding="utf-8"))
        except PermissionError as e:
            raise StoreAccessDenied(f"Cannot read {self._path}") from e
        except json.JSONDecodeError:
            logger.warning("Preference file %s is not valid JSON; treating as empty", self._path)
            obj = {}
        except OSError as e:
            raise ContactStoreError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(obj, dict):
            logger.warning("Preference file %s is not a JSON object; treating as empty", self._path)
            obj = {}
        self._cache = (signature, obj)
        return dict(obj)
