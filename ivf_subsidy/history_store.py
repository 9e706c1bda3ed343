# ivf_subsidy/history_store.py
from __future__ import annotations

from datetime import timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from . import models
from .engine.history import DEFAULT_CAP, HistoryEntry
from .engine.records import ApplicantRecord, EvaluationResult
from .settings import get_settings

settings = get_settings()


def _to_entry(row: models.CalculationHistory) -> HistoryEntry:
    created = row.created_at
    # SQLite drops tzinfo on the way back
    if created is not None and created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return HistoryEntry(
        record=ApplicantRecord.from_dict(row.record),
        result=EvaluationResult.from_dict(row.result),
        id=row.id,
        created_at=created,
    )


class SqlHistoryStore:
    """
    Durable history log in the calculation_history table.

    Same contract as InMemoryHistoryStore: newest first, at most `cap` rows
    survive an append, clear() empties the table.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(models.CalculationHistory).order_by(
            models.CalculationHistory.seq.desc(),
        )

    def append(self, entry: HistoryEntry, cap: int = DEFAULT_CAP) -> List[HistoryEntry]:
        try:
            self.db.add(
                models.CalculationHistory(
                    id=entry.id,
                    created_at=entry.created_at,
                    record=entry.record.to_dict(),
                    result=entry.result.to_dict(),
                    ruleset_version=settings.RULESET_VERSION,
                    app_version=settings.APP_VERSION,
                    schema_version=settings.SCHEMA_VERSION,
                )
            )
            self.db.flush()

            for stale in self._query().offset(max(cap, 0)).all():
                self.db.delete(stale)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return self.list()

    def list(self) -> List[HistoryEntry]:
        return [_to_entry(row) for row in self._query().all()]

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        row = (
            self.db.query(models.CalculationHistory)
            .filter(models.CalculationHistory.id == entry_id)
            .first()
        )
        return _to_entry(row) if row else None

    def clear(self) -> None:
        try:
            self.db.query(models.CalculationHistory).delete()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
