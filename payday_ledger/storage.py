# payday_ledger/storage.py
"""Blob stores the engine persists its state into."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Keeps the engine state as one JSON document. Saves go to a temporary
    sibling file that is then renamed over the target, so a reader sees
    either the old or the new document.
    """

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Optional[Dict[str, object]]:
        if not self.path.exists():
            return None
        try:
            with self.path.open('r', encoding='utf-8') as fp:
                return json.load(fp)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Could not read state file %s: %s", self.path, exc)
            return None

    def save(self, blob: Dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fp:
                json.dump(blob, fp, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved state to %s", self.path)


class MemoryStore:
    """In-memory store; blobs are kept as JSON text like on disk."""

    def __init__(self, blob: Optional[Dict[str, object]] = None):
        self._raw: Optional[str] = None
        self.saves = 0
        if blob is not None:
            self._raw = json.dumps(blob)

    def load(self) -> Optional[Dict[str, object]]:
        if self._raw is None:
            return None
        return json.loads(self._raw)

    def save(self, blob: Dict[str, object]) -> None:
        self._raw = json.dumps(blob)
        self.saves += 1
