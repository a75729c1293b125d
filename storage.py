"""
storage.py
──────────
Analysis history store.

The API talks to an `AnalysisStorage`; the default is `MemStorage`,
an in-process, insertion-ordered map. Nothing survives a restart.
Swap in another implementation through the `get_storage` dependency.
"""
from __future__ import annotations
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from scanner.seo_checker import AnalysisResult


@dataclass(frozen=True)
class StoredAnalysis:
    id:         str
    created_at: datetime
    result:     AnalysisResult

    @property
    def url(self) -> str:
        return self.result.url


class AnalysisStorage(ABC):

    @abstractmethod
    def create_analysis(self, result: AnalysisResult) -> StoredAnalysis:
        """Persist `result` under a freshly generated id."""

    @abstractmethod
    def get_analysis(self, analysis_id: str) -> Optional[StoredAnalysis]:
        ...

    @abstractmethod
    def get_analysis_by_url(self, url: str) -> Optional[StoredAnalysis]:
        """Most recent analysis of `url`, if any."""

    @abstractmethod
    def list_analyses(self) -> list[StoredAnalysis]:
        """All analyses, most recent first."""


class MemStorage(AnalysisStorage):
    """Thread-safe in-memory store. Concurrent requests may insert at the same time."""

    def __init__(self):
        self._analyses: dict[str, StoredAnalysis] = {}
        self._lock = threading.Lock()

    def create_analysis(self, result: AnalysisResult) -> StoredAnalysis:
        record = StoredAnalysis(
            id=str(uuid.uuid4()),
            created_at=datetime.now(timezone.utc),
            result=_detached(result),
        )
        with self._lock:
            self._analyses[record.id] = record
        return record

    def get_analysis(self, analysis_id: str) -> Optional[StoredAnalysis]:
        with self._lock:
            return self._analyses.get(analysis_id)

    def get_analysis_by_url(self, url: str) -> Optional[StoredAnalysis]:
        for record in self.list_analyses():
            if record.url == url:
                return record
        return None

    def list_analyses(self) -> list[StoredAnalysis]:
        # Dict order is insertion order, so newest is last.
        with self._lock:
            return list(reversed(self._analyses.values()))

    def __len__(self) -> int:
        with self._lock:
            return len(self._analyses)


storage: AnalysisStorage = MemStorage()


def get_storage() -> AnalysisStorage:
    """FastAPI dependency returning the process-wide store."""
    return storage


def _detached(result: AnalysisResult) -> AnalysisResult:
    # the tag dicts are the only mutable parts of a result
    return replace(
        result,
        og_tags=dict(result.og_tags),
        twitter_tags=dict(result.twitter_tags),
        all_meta_tags=dict(result.all_meta_tags),
    )
