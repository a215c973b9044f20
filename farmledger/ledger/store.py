"""Mini README: Persistence backends for the ledger document.

Structure:
    * PersistenceStore - abstract load/save/reset contract with seeding.
    * InMemoryStore - process-local store holding the serialised document.
    * JsonFileStore - JSON file on disk, replaced atomically on every save.
    * build_store - factory choosing a backend from configuration.

The whole ledger is always written in one piece (last write wins). Reading a
missing, unparsable or structurally invalid document never fails: the store
logs the problem, writes the seed document back, and returns it.
Filesystem failures (permissions, a directory in place of the ledger file)
are raised as ``OSError`` because re-seeding cannot repair them.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from ..configuration import FarmLedgerSettings
from ..logging_utils import get_logger
from .models import LedgerDocument, build_seed_document

LOGGER = get_logger(__name__)

DEFAULT_STORAGE_KEY = "ledger_document"

SeedFactory = Callable[[], LedgerDocument]


def serialise_document(document: LedgerDocument) -> str:
    """Encode a ledger document as JSON text."""

    return json.dumps(document.as_dict(), ensure_ascii=False)


def deserialise_document(raw: str) -> LedgerDocument:
    """Decode JSON text into a ledger document, raising on malformed input."""

    return LedgerDocument.from_dict(json.loads(raw))


class PersistenceStore(ABC):
    """Load and save the entire ledger document under a single key."""

    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.key = key
        self._seed_factory = seed_factory or build_seed_document

    @abstractmethod
    def _read(self) -> Optional[str]:
        """Return the raw persisted text or ``None`` when nothing is stored."""

    @abstractmethod
    def _write(self, raw: str) -> None:
        """Replace the persisted text."""

    @abstractmethod
    def _clear(self) -> None:
        """Remove any persisted text."""

    def load(self) -> LedgerDocument:
        """Return the persisted document, seeding when absent or corrupt."""

        raw = self._read()
        if raw is None:
            LOGGER.info("No ledger stored under '%s'; writing seed document", self.key)
            return self._seed()
        try:
            return deserialise_document(raw)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as error:
            LOGGER.warning("Stored ledger under '%s' is corrupt (%s); re-seeding", self.key, error)
            return self._seed()

    def save(self, document: LedgerDocument) -> None:
        """Overwrite the persisted document in full."""

        self._write(serialise_document(document))
        LOGGER.debug(
            "Saved ledger '%s' with %s farmers and %s expenses",
            self.key,
            len(document.farmers),
            len(document.expenses),
        )

    def reset(self) -> LedgerDocument:
        """Discard persisted state and store a fresh seed document."""

        self._clear()
        LOGGER.info("Ledger '%s' reset to seed data", self.key)
        return self._seed()

    def _seed(self) -> LedgerDocument:
        seed = self._seed_factory()
        self.save(seed)
        return seed


class InMemoryStore(PersistenceStore):
    """Keep the serialised document in memory; every load is a fresh copy."""

    def __init__(
        self,
        initial: Optional[LedgerDocument] = None,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        super().__init__(key=key, seed_factory=seed_factory)
        self._raw: Optional[str] = serialise_document(initial) if initial is not None else None

    def _read(self) -> Optional[str]:
        return self._raw

    def _write(self, raw: str) -> None:
        self._raw = raw

    def _clear(self) -> None:
        self._raw = None


class JsonFileStore(PersistenceStore):
    """Persist the document as ``<directory>/<key>.json``."""

    def __init__(
        self,
        directory: Path,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        super().__init__(key=key, seed_factory=seed_factory)
        self.directory = Path(directory)
        self.path = self.directory / f"{key}.json"

    def _read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as error:
            LOGGER.warning("Ledger file %s is not valid UTF-8: %s", self.path, error)
            return ""

    def _write(self, raw: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write beside the target so os.replace stays on one filesystem.
        handle = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=self.directory,
            prefix=f"{self.key}-",
            suffix=".tmp",
            delete=False,
        )
        try:
            with handle:
                handle.write(raw)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(handle.name, self.path)
        except OSError:
            Path(handle.name).unlink(missing_ok=True)
            raise

    def _clear(self) -> None:
        self.path.unlink(missing_ok=True)


def build_store(settings: FarmLedgerSettings) -> PersistenceStore:
    """Instantiate the persistence backend selected in configuration."""

    if settings.store_backend == "memory":
        LOGGER.debug("Using in-memory ledger store")
        return InMemoryStore(key=settings.storage_key)
    LOGGER.debug("Using JSON ledger store in %s", settings.data_directory)
    return JsonFileStore(Path(settings.data_directory), key=settings.storage_key)
