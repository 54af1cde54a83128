"""
Report Store - durable, whole-collection persistence of reports.

DESIGN NOTES:
- One JSON file holds the full, ordered collection
- Every persist rewrites the whole file: temp file in the same directory,
  fsync, then os.replace, so readers never see a torn file
- The in-memory snapshot is swapped only after the file is replaced
- Mutating callers serialize through transaction(); readers never block
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional
import json
import logging
import os
import tempfile
import threading

from pydantic import ValidationError as PydanticValidationError

from civic_reports.core.errors import PersistenceError
from civic_reports.models.report import Report

logger = logging.getLogger(__name__)


class ReportStore:
    """
    Owner of the authoritative report collection.

    The snapshot list is replaced wholesale on each successful persist and
    the Report objects in it are never mutated, so list_reports() and
    find_by_id() can run without taking the lock.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._reports: List[Report] = []
        self._index: Dict[str, Report] = {}
        self._lock = threading.RLock()
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @contextmanager
    def transaction(self) -> Iterator["ReportStore"]:
        """Critical section for one read-modify-persist cycle."""
        with self._lock:
            yield self

    def load(self) -> List[Report]:
        """
        Load every report from disk, replacing the in-memory snapshot.

        A missing file is initialized as an empty collection.

        Raises:
            PersistenceError: If the file cannot be read or decoded
        """
        with self._lock:
            if not self.path.exists():
                logger.info(f"No report store at {self.path}, initializing an empty one")
                self.persist_all([])
                self._loaded = True
                return []

            try:
                raw = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise PersistenceError(f"Failed to read report store {self.path}: {e}") from e

            reports = self._decode(raw)
            self._swap(reports)
            self._loaded = True
            logger.info(f"Loaded {len(reports)} report(s) from {self.path}")
            return list(reports)

    def _decode(self, raw: str) -> List[Report]:
        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Report store {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise PersistenceError(
                f"Report store {self.path} must contain a list of reports, got {type(data).__name__}"
            )

        reports = []
        seen = set()
        for position, record in enumerate(data):
            try:
                report = Report.model_validate(record)
            except PydanticValidationError as e:
                raise PersistenceError(
                    f"Invalid report at position {position} in {self.path}: {e}"
                ) from e
            if report.id in seen:
                raise PersistenceError(f"Duplicate report id {report.id} in {self.path}")
            seen.add(report.id)
            reports.append(report)
        return reports

    def persist_all(self, reports: List[Report]) -> None:
        """
        Atomically overwrite the durable store with the given collection.

        On success the in-memory snapshot becomes `reports`. On failure the
        file and the snapshot are left as they were.

        Raises:
            PersistenceError: If serialization or any file operation fails
        """
        with self._lock:
            reports = list(reports)
            try:
                payload = json.dumps([report.to_record() for report in reports], indent=2)
                self._atomic_write(payload)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to write report store {self.path}: {e}", exc_info=True)
                raise PersistenceError(f"Failed to write report store {self.path}: {e}") from e

            self._swap(reports)

    def _atomic_write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent),
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_handle:
                tmp_handle.write(payload)
                tmp_handle.flush()
                os.fsync(tmp_handle.fileno())
            os.replace(tmp_path, str(self.path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _swap(self, reports: List[Report]) -> None:
        self._index = {report.id: report for report in reports}
        self._reports = reports

    def find_by_id(self, report_id: str) -> Optional[Report]:
        """Return the current record for report_id, or None."""
        return self._index.get(report_id)

    def list_reports(self) -> List[Report]:
        """All reports in insertion order."""
        return list(self._reports)

    def count(self) -> int:
        return len(self._reports)
