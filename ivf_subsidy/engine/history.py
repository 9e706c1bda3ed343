# ivf_subsidy/engine/history.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Protocol

from .records import ApplicantRecord, EvaluationResult

DEFAULT_CAP = 10


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryEntry:
    record: ApplicantRecord
    result: EvaluationResult
    id: str = field(default_factory=_uuid)
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "record": self.record.to_dict(),
            "result": self.result.to_dict(),
        }


class HistoryStore(Protocol):
    def append(self, entry: HistoryEntry, cap: int = DEFAULT_CAP) -> List[HistoryEntry]: ...

    def list(self) -> List[HistoryEntry]: ...

    def get(self, entry_id: str) -> Optional[HistoryEntry]: ...

    def clear(self) -> None: ...


class InMemoryHistoryStore:
    """Newest-first log, replaced wholesale on every append."""

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []

    def append(self, entry: HistoryEntry, cap: int = DEFAULT_CAP) -> List[HistoryEntry]:
        self._entries = [entry, *self._entries][: max(cap, 0)]
        return list(self._entries)

    def list(self) -> List[HistoryEntry]:
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def clear(self) -> None:
        self._entries = []
