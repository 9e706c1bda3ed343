# ivf_subsidy/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict

from .engine.history import HistoryEntry
from .engine.records import ApplicantRecord, EvaluationResult, TreatmentStage


class ApplicantIn(BaseModel):
    birth_date: date
    is_low_income: bool = False
    treatment_count: int = Field(1, ge=1, le=6)
    stage: TreatmentStage = TreatmentStage.FULL_CYCLE
    first_application_date: date
    transfer_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)

    def to_record(self) -> ApplicantRecord:
        return ApplicantRecord(
            birth_date=self.birth_date,
            is_low_income=self.is_low_income,
            treatment_count=self.treatment_count,
            stage=self.stage,
            first_application_date=self.first_application_date,
            transfer_date=self.transfer_date,
        )


class ResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    age: int
    eligible: bool
    legacy_amount: int = 0
    current_amount: int = 0
    transfer_limit: Optional[int] = None
    message: Optional[str] = None


class CalculationResponse(BaseModel):
    result: ResultOut
    record: ApplicantIn

    # presentation hint only; both amounts are always present
    active_scheme: str
    scheme_note: Optional[str] = None

    # None when the history log could not be written
    history_id: Optional[str] = None


class HistoryEntryOut(BaseModel):
    id: str
    created_at: datetime
    record: ApplicantIn
    result: ResultOut

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryOut":
        return cls(
            id=entry.id,
            created_at=entry.created_at,
            record=ApplicantIn.model_validate(entry.record),
            result=ResultOut.model_validate(entry.result),
        )


class HistoryOut(BaseModel):
    cap: int
    entries: List[HistoryEntryOut] = Field(default_factory=list)


def result_out(result: EvaluationResult) -> ResultOut:
    return ResultOut.model_validate(result)
