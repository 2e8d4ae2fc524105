"""Saved-script library.

The library is an ordered collection of GenerationResults, most recent
first, keyed by result id. Saving an id that already exists replaces the
entry and moves it to the front.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .models import GenerationResult

logger = logging.getLogger(__name__)


class ScriptLibrary(ABC):
    """Abstract store for saved generation results."""

    @abstractmethod
    def _load(self) -> List[GenerationResult]:
        ...

    @abstractmethod
    def _store(self, entries: List[GenerationResult]) -> None:
        ...

    def list(self) -> List[GenerationResult]:
        """Return all entries, most recent first."""
        return self._load()

    def get(self, result_id: str) -> Optional[GenerationResult]:
        """Return the entry with the given id, or None."""
        return next((entry for entry in self._load() if entry.id == result_id), None)

    def contains(self, result_id: str) -> bool:
        return self.get(result_id) is not None

    def save(self, result: GenerationResult) -> None:
        """Insert a result at the front, replacing any entry with the same id."""
        entries = [entry for entry in self._load() if entry.id != result.id]
        self._store([result, *entries])
        logger.info(f"Saved {result.id} to library ({len(entries) + 1} entries)")

    def delete(self, result_id: str) -> bool:
        """Remove the entry with the given id.

        Returns:
            True if an entry was removed.
        """
        entries = self._load()
        remaining = [entry for entry in entries if entry.id != result_id]
        if len(remaining) == len(entries):
            return False
        self._store(remaining)
        logger.info(f"Deleted {result_id} from library")
        return True


class InMemoryScriptLibrary(ScriptLibrary):
    """Library kept in process memory."""

    def __init__(self, entries: Optional[List[GenerationResult]] = None) -> None:
        self._entries: List[GenerationResult] = list(entries or [])

    def _load(self) -> List[GenerationResult]:
        return list(self._entries)

    def _store(self, entries: List[GenerationResult]) -> None:
        self._entries = list(entries)

class JsonScriptLibrary(ScriptLibrary):
    """Library persisted as a single JSON array file.

    Entries that fail validation are skipped when reading but stay in the
    file, after the valid entries, until a result with the same id replaces
    them. A file that is not a JSON array is moved to `<name>.corrupt` before
    the next write. Writes go to a temporary file that replaces the library
    in one step.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> list:
        """Read the raw entry list.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a JSON array.
        """
        with open(self._path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"expected a JSON array, got {type(data).__name__}")
        return data

    def _load(self) -> List[GenerationResult]:
        if not self._path.exists():
            return []

        try:
            raw = self._read_raw()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load script library from {self._path}: {e}")
            return []

        entries = []
        for index, item in enumerate(raw):
            try:
                entries.append(GenerationResult.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid library entry {index} ({_entry_id(item)}): "
                    f"{e.error_count()} error(s)"
                )
        return entries

    def _store(self, entries: List[GenerationResult]) -> None:
        ids = {entry.id for entry in entries}
        data = [entry.to_dict() for entry in entries]
        data.extend(item for item in self._invalid_entries() if _entry_id(item) not in ids)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _invalid_entries(self) -> list:
        """Raw entries on disk that do not validate, in file order."""
        if not self._path.exists():
            return []

        try:
            raw = self._read_raw()
        except ValueError:
            backup = self._path.with_name(f"{self._path.name}.corrupt")
            self._path.replace(backup)
            logger.warning(f"Moved unreadable script library to {backup}")
            return []

        return [item for item in raw if not _is_valid(item)]


def _entry_id(item) -> Optional[str]:
    return item.get("id") if isinstance(item, dict) else None


def _is_valid(item) -> bool:
    try:
        GenerationResult.model_validate(item)
    except ValidationError:
        return False
    return True
