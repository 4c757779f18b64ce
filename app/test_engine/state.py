import logging
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple

from app.question_bank import Question

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many readers or one writer.
    Waiting writers block new readers so a steady stream of lookups
    cannot starve put/sweep.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass(frozen=True)
class SessionRecord:
    test_id: str
    questions: Tuple[Question, ...]
    created_at: float
    # None -> never expires
    expires_at: Optional[float] = None

    def is_live(self, now: float) -> bool:
        return self.expires_at is None or now < self.expires_at


class SessionStore:
    """
    In-memory test_id -> answer key store with optional expiry.

    A ttl of 0 (or less) disables expiry entirely: records live until the
    process exits and sweep() does nothing. With a positive ttl, a record
    stops being visible to get() as soon as it expires; sweep() is what
    actually frees it.
    """

    def __init__(self, ttl: float = 0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = ReadWriteLock()
        self._records: Dict[str, SessionRecord] = {}

    @property
    def expiring(self) -> bool:
        return self.ttl > 0

    def put(self, test_id: str, questions: Sequence[Question]) -> None:
        now = self._clock()
        record = SessionRecord(
            test_id=test_id,
            questions=tuple(questions),
            created_at=now,
            expires_at=now + self.ttl if self.expiring else None,
        )
        with self._lock.write():
            self._records[test_id] = record

    def get(self, test_id: str) -> Optional[Tuple[Question, ...]]:
        with self._lock.read():
            record = self._records.get(test_id)
            if record is None or not record.is_live(self._clock()):
                return None
            return record.questions

    def __contains__(self, test_id: str) -> bool:
        return self.get(test_id) is not None

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)

    def sweep(self) -> int:
        """Delete expired records. Returns how many were removed."""
        if not self.expiring:
            return 0

        with self._lock.write():
            now = self._clock()
            expired = [
                test_id
                for test_id, record in self._records.items()
                if not record.is_live(now)
            ]
            for test_id in expired:
                del self._records[test_id]

        if expired:
            logger.info("Swept %d expired sessions", len(expired))
        return len(expired)
