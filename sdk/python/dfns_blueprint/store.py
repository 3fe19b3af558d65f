from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core import canonicalize_json
from .exceptions import StoreError
from .utils import b64url_encode, b64url_decode

logger = logging.getLogger(__name__)

_BYTES_FIELDS = ("public_key", "key_share", "refreshed_key")


@dataclass(frozen=True)
class DfnsStore:
    """Per-keygen state kept by one operator, keyed by the keygen meta hash."""

    public_key: Optional[bytes] = None
    key_share: Optional[bytes] = None
    refreshed_key: Optional[bytes] = None
    threshold: Optional[int] = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name in _BYTES_FIELDS:
            value = getattr(self, name)
            out[name] = None if value is None else b64url_encode(value)
        out["threshold"] = self.threshold
        return out

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "DfnsStore":
        if not isinstance(obj, dict):
            raise ValueError("store record must be an object")

        kwargs: Dict[str, Any] = {}
        for name in _BYTES_FIELDS:
            value = obj.get(name)
            kwargs[name] = None if value is None else b64url_decode(value)
        threshold = obj.get("threshold")
        kwargs["threshold"] = None if threshold is None else int(threshold)
        return cls(**kwargs)


class LocalDatabase:
    """
    JSON-file key/value store of DfnsStore records.

    Every set/delete rewrites the whole file (canonical JSON, temp file then
    os.replace), so the file on disk is always a complete snapshot.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        self._records: Dict[str, DfnsStore] = self._load()

    def _load(self) -> Dict[str, DfnsStore]:
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeError, ValueError) as e:
            raise StoreError(f"Cannot read keystore {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise StoreError(f"Keystore {self.path} must contain a JSON object")

        records: Dict[str, DfnsStore] = {}
        for key, obj in raw.items():
            try:
                records[key] = DfnsStore.from_json(obj)
            except (TypeError, ValueError) as e:
                raise StoreError(
                    f"Corrupt record {key!r} in keystore {self.path}: {e}",
                    hint="Remove the record or restore the keystore from backup",
                ) from e

        logger.debug("Loaded %d record(s) from %s", len(records), self.path)
        return records

    def _flush(self, records: Dict[str, DfnsStore]) -> None:
        payload = {key: record.to_json() for key, record in records.items()}
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(canonicalize_json(payload))
            os.replace(tmp, self.path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StoreError(
                f"Cannot write keystore {self.path}: {e}",
                hint="Check free space and permissions on the keystore directory",
            ) from e

    def get(self, key: str) -> Optional[DfnsStore]:
        with self._lock:
            return self._records.get(key)

    def set(self, key: str, value: DfnsStore) -> None:
        with self._lock:
            records = dict(self._records)
            records[key] = value
            self._flush(records)
            self._records = records
        logger.debug("Stored record %s", key)

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._records:
                return
            records = {k: v for k, v in self._records.items() if k != key}
            self._flush(records)
            self._records = records

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._records)
