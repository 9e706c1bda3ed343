# ivf_subsidy/models.py
from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.types import TypeDecorator, TEXT

from .db import Base


# -------------------------
# SQLite-safe JSON object
# -------------------------
class JsonDict(TypeDecorator):
    impl = TEXT
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "{}"
        if isinstance(value, dict):
            return json.dumps(value, ensure_ascii=False)
        if isinstance(value, str):
            s = value.strip()
            return s if s else "{}"
        return "{}"

    def process_result_value(self, value, dialect):
        if not value:
            return {}
        try:
            parsed = json.loads(value)
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalculationHistory(Base):
    __tablename__ = "calculation_history"

    # insertion order; created_at can tie
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    # full ApplicantRecord, reloadable into the form verbatim
    record = Column(JsonDict, nullable=False, default=dict)
    # full EvaluationResult
    result = Column(JsonDict, nullable=False, default=dict)

    # Provenance
    ruleset_version = Column(String, nullable=True)
    app_version = Column(String, nullable=True)
    schema_version = Column(String, nullable=True)
