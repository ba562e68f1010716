"""Location Reference Store.

Holds the active snapshot of the location dataset, keyed by canonical
postal code. A snapshot is never mutated: a load builds a complete new
snapshot and installs it with one reference assignment, so readers see
either the old dataset or the new one in full. Loads are serialized by a
writer lock; lookups take no lock.
"""

from __future__ import annotations

import json
import threading
from collections import abc
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError
import structlog

from config.errors import DatasetLoadError, LocationNotFoundError
from config.settings import settings
from models.location_record import LocationRecord, canonical_location_id

logger = structlog.get_logger(__name__)

KEY_FIELDS = ("zip", "locationId", "location_id")


@dataclass(frozen=True)
class LocationSnapshot:
    """Immutable view of one loaded dataset."""

    records: Mapping[str, LocationRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source: Optional[str] = None
    loaded_at: Optional[datetime] = None
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.records)


def _record_key(raw: Dict[str, Any]) -> Optional[str]:
    for name in KEY_FIELDS:
        value = raw.get(name)
        if value is None:
            continue
        key = canonical_location_id(value)
        if key:
            return key
    return None


def _with_key(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Copy of an entry carrying only the resolved key among the key fields."""
    payload = {name: value for name, value in raw.items() if name not in KEY_FIELDS}
    payload["location_id"] = key
    return payload


def build_snapshot(raw_records: Any, source: str) -> LocationSnapshot:
    """Parse raw dataset entries into a snapshot.

    Entries without a key, or whose fields fail validation, are skipped.
    Later entries win over earlier ones sharing a key.

    Args:
        raw_records: Iterable of dicts, as decoded from the dataset file.
        source: Label for logs and errors (usually the file path).

    Returns:
        New LocationSnapshot.

    Raises:
        DatasetLoadError: If the source is not a collection of records.
    """
    if isinstance(raw_records, (str, bytes, dict)) or not isinstance(raw_records, abc.Iterable):
        raise DatasetLoadError(
            source=source,
            reason=f"expected a list of records, got {type(raw_records).__name__}",
        )

    records: Dict[str, LocationRecord] = {}
    skipped = 0
    for index, raw in enumerate(raw_records):
        key = _record_key(raw) if isinstance(raw, dict) else None
        if key is None:
            skipped += 1
            logger.debug("location_record_skipped", source=source, index=index, reason="missing_key")
            continue
        try:
            record = LocationRecord.model_validate(_with_key(raw, key))
        except PydanticValidationError as e:
            skipped += 1
            logger.warning(
                "location_record_skipped",
                source=source,
                index=index,
                reason="invalid_fields",
                errors=[f"{err['loc']}: {err['msg']}" for err in e.errors()],
            )
            continue
        records[record.location_id] = record

    return LocationSnapshot(
        records=MappingProxyType(records),
        source=source,
        loaded_at=datetime.now(timezone.utc),
        skipped=skipped,
    )


class LocationStore:
    """Process-wide location reference store with atomic hot reload."""

    def __init__(self, dataset_path: Optional[Union[str, Path]] = None):
        """Initialize LocationStore.

        Args:
            dataset_path: Default file for `reload()`. Falls back to
                `settings.location_dataset_path`.
        """
        self.dataset_path = Path(dataset_path or settings.location_dataset_path)
        self._snapshot = LocationSnapshot()
        self._write_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Read side (lock-free)
    # -------------------------------------------------------------------------

    @property
    def snapshot(self) -> LocationSnapshot:
        return self._snapshot

    @property
    def size(self) -> int:
        return len(self._snapshot)

    @property
    def source(self) -> Optional[str]:
        return self._snapshot.source

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._snapshot.loaded_at

    def get(self, location_id: str) -> Optional[LocationRecord]:
        """Return the record for an identifier, or None."""
        return self._snapshot.records.get(canonical_location_id(location_id))

    def lookup(self, location_id: str, role: Optional[str] = None) -> LocationRecord:
        """Return the record for an identifier.

        Args:
            location_id: Postal code (canonicalized before matching).
            role: Optional endpoint label ("pickup"/"delivery") for the error.

        Raises:
            LocationNotFoundError: If the identifier is not in the snapshot.
        """
        record = self.get(location_id)
        if record is None:
            raise LocationNotFoundError(canonical_location_id(location_id), role=role)
        return record

    # -------------------------------------------------------------------------
    # Write side (serialized)
    # -------------------------------------------------------------------------

    def load_records(self, raw_records: Iterable[Dict[str, Any]], source: str = "<memory>") -> int:
        """Replace the snapshot with records from an in-memory collection.

        Returns:
            Number of records in the new snapshot.

        Raises:
            DatasetLoadError: If the source is not a collection of records.
                The previous snapshot stays active.
        """
        with self._write_lock:
            try:
                snapshot = build_snapshot(raw_records, source)
            except DatasetLoadError as e:
                self._log_failure(source, e)
                raise
            self._install(snapshot)
        return len(snapshot)

    def load_file(self, path: Optional[Union[str, Path]] = None) -> int:
        """Replace the snapshot with records read from a JSON file.

        Args:
            path: Dataset file. Defaults to `self.dataset_path`.

        Returns:
            Number of records in the new snapshot.

        Raises:
            DatasetLoadError: If the file is unreadable or malformed.
                The previous snapshot stays active.
        """
        path = Path(path) if path is not None else self.dataset_path
        source = str(path)

        with self._write_lock:
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except OSError as e:
                self._log_failure(source, e)
                raise DatasetLoadError(source=source, reason=f"unreadable: {e}") from e
            except (ValueError, RecursionError) as e:
                # JSONDecodeError, UnicodeDecodeError and nesting too deep to decode
                self._log_failure(source, e)
                raise DatasetLoadError(source=source, reason=f"invalid JSON: {e}") from e

            try:
                snapshot = build_snapshot(raw, source)
            except DatasetLoadError as e:
                self._log_failure(source, e)
                raise
            self._install(snapshot)

        return len(snapshot)

    def reload(self) -> int:
        """Reload the default dataset file."""
        return self.load_file(self.dataset_path)

    def load_on_startup(self) -> int:
        """Initial load; a failure leaves the store empty instead of raising."""
        try:
            return self.reload()
        except DatasetLoadError:
            logger.warning("location_store_degraded", source=str(self.dataset_path), locations=self.size)
            return self.size

    def _install(self, snapshot: LocationSnapshot) -> None:
        previous = self._snapshot
        self._snapshot = snapshot
        logger.info(
            "location_dataset_loaded",
            source=snapshot.source,
            locations=len(snapshot),
            skipped=snapshot.skipped,
            previous_locations=len(previous),
        )

    def _log_failure(self, source: str, error: Exception) -> None:
        logger.error(
            "location_dataset_load_failed",
            source=source,
            error=str(error),
            retained_locations=self.size,
        )


# =============================================================================
# Singleton
# =============================================================================

_store_instance: Optional[LocationStore] = None


def get_location_store() -> LocationStore:
    """Get the process-wide LocationStore instance."""
    global _store_instance
    if _store_instance is None:
        _store_instance = LocationStore()
    return _store_instance
