"""In-memory capture store and the service that fills it.

The store mirrors the interface a database-backed store would expose:
create, get, find_many_by_project and delete.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone

from curl2openapi.parser.base import Capture
from curl2openapi.parser.curl import parse_curl

logger = logging.getLogger(__name__)


class CaptureNotFoundError(KeyError):
    """Raised when a capture id is unknown to the store."""


class CaptureStore:
    """Keeps captures in creation order."""

    def __init__(self):
        self._captures: dict[str, Capture] = {}
        self._lock = threading.Lock()

    def create(self, capture: Capture) -> Capture:
        """Persist a capture, assigning it an id and creation timestamp."""
        stored = capture.model_copy(
            update={"id": uuid.uuid4().hex, "created_at": datetime.now(timezone.utc)}
        )
        with self._lock:
            self._captures[stored.id] = stored
        return stored

    def get(self, capture_id: str) -> Capture:
        with self._lock:
            try:
                return self._captures[capture_id]
            except KeyError:
                raise CaptureNotFoundError(capture_id) from None

    def find_many_by_project(self, project_id: str) -> list[Capture]:
        with self._lock:
            return [c for c in self._captures.values() if c.project_id == project_id]

    def delete(self, capture_id: str) -> None:
        with self._lock:
            if self._captures.pop(capture_id, None) is None:
                raise CaptureNotFoundError(capture_id)


class CaptureService:
    """Parses cURL commands and stores the resulting captures."""

    def __init__(self, store: CaptureStore | None = None):
        self.store = store or CaptureStore()

    def parse_curl(self, raw_curl: str, project_id: str | None = None) -> Capture:
        """Parse a command and persist it. Nothing is stored if parsing fails."""
        parsed = parse_curl(raw_curl)
        capture = self.store.create(Capture.from_parsed(parsed, raw_curl, project_id=project_id))
        logger.debug("Stored capture %s: %s %s", capture.id, capture.method, capture.url)
        return capture
