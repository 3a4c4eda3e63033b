"""In-memory keyed store for uploaded and optimized resumes.

Entries are keyed by the uploaded file name, expire after ``ttl_seconds``
and the oldest entries are evicted once ``max_entries`` is exceeded.
"""

import logging
import threading
import time
import uuid
from collections import OrderedDict
from datetime import datetime, timezone

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ORIGINAL = "original"
OPTIMIZED = "optimized"


class StoredResume(BaseModel):
    id: str
    file_name: str = Field(alias="fileName")
    text: str
    kind: str = ORIGINAL  # original | optimized
    created_at: str = Field(alias="createdAt")
    word_count: int = Field(0, alias="wordCount")

    model_config = {"populate_by_name": True}


class ResumeStore:
    def __init__(self, ttl_seconds: float = 3600, max_entries: int = 200) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._buckets: dict[str, OrderedDict[str, tuple[float, StoredResume]]] = {
            ORIGINAL: OrderedDict(),
            OPTIMIZED: OrderedDict(),
        }
        self._lock = threading.Lock()

    def _put(self, kind: str, file_name: str, text: str) -> StoredResume:
        prefix = "resume" if kind == ORIGINAL else "optimized"
        record = StoredResume(
            id=f"{prefix}_{uuid.uuid4().hex[:12]}",
            file_name=file_name if kind == ORIGINAL else f"optimized_{file_name}",
            text=text,
            kind=kind,
            created_at=datetime.now(timezone.utc).isoformat(),
            word_count=len(text.split()),
        )
        with self._lock:
            bucket = self._buckets[kind]
            bucket.pop(file_name, None)
            bucket[file_name] = (time.monotonic(), record)
            self._evict(bucket)
        return record

    def _evict(self, bucket: OrderedDict) -> None:
        now = time.monotonic()
        expired = [k for k, (ts, _) in bucket.items() if now - ts > self.ttl_seconds]
        for key in expired:
            del bucket[key]
        while len(bucket) > self.max_entries:
            key, _ = bucket.popitem(last=False)
            logger.debug("Evicted resume %s (store full)", key)

    def _get(self, kind: str, file_name: str) -> StoredResume | None:
        with self._lock:
            bucket = self._buckets[kind]
            entry = bucket.get(file_name)
            if entry is None:
                return None
            ts, record = entry
            if time.monotonic() - ts > self.ttl_seconds:
                del bucket[file_name]
                return None
            return record

    def store(self, file_name: str, text: str) -> StoredResume:
        return self._put(ORIGINAL, file_name, text)

    def store_optimized(self, original_file_name: str, text: str) -> StoredResume:
        return self._put(OPTIMIZED, original_file_name, text)

    def get(self, file_name: str) -> StoredResume | None:
        return self._get(ORIGINAL, file_name)

    def get_optimized(self, original_file_name: str) -> StoredResume | None:
        return self._get(OPTIMIZED, original_file_name)

    def get_by_id(self, resume_id: str) -> StoredResume | None:
        with self._lock:
            for bucket in self._buckets.values():
                self._evict(bucket)
                for _, record in bucket.values():
                    if record.id == resume_id:
                        return record
        return None

    def delete(self, resume_id: str) -> bool:
        """Remove the entry with ``resume_id`` from either namespace."""
        with self._lock:
            for bucket in self._buckets.values():
                for key, (_, record) in list(bucket.items()):
                    if record.id == resume_id:
                        del bucket[key]
                        return True
        return False

    def list_originals(self) -> list[StoredResume]:
        with self._lock:
            self._evict(self._buckets[ORIGINAL])
            return [record for _, record in self._buckets[ORIGINAL].values()]

    def clear(self) -> None:
        with self._lock:
            for bucket in self._buckets.values():
                bucket.clear()
