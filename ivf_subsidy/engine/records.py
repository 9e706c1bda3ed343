# ivf_subsidy/engine/records.py
from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional


class InvalidApplicantRecord(ValueError):
    """Raised when a record cannot describe a real applicant (e.g. born after applying)."""


class TreatmentStage(str, enum.Enum):
    FULL_CYCLE = "FULL_CYCLE"          # egg retrieval through embryo transfer
    RETRIEVAL_ONLY = "RETRIEVAL_ONLY"  # retrieval without transfer (disqualifying factor)
    TRANSFER_ONLY = "TRANSFER_ONLY"    # transfer of previously stored embryos


@dataclass(frozen=True)
class ApplicantRecord:
    birth_date: date
    is_low_income: bool
    treatment_count: int
    stage: TreatmentStage
    first_application_date: date
    transfer_date: Optional[date] = None  # collected, not used in amounts

    def __post_init__(self) -> None:
        if not isinstance(self.stage, TreatmentStage):
            try:
                object.__setattr__(self, "stage", TreatmentStage(self.stage))
            except ValueError:
                raise InvalidApplicantRecord(f"Unknown treatment stage: {self.stage!r}")
        if self.birth_date > self.first_application_date:
            raise InvalidApplicantRecord("Birth date is after the first application date")
        try:
            count = int(self.treatment_count)
        except (TypeError, ValueError):
            raise InvalidApplicantRecord(f"Treatment count is not a number: {self.treatment_count!r}")
        if count < 1:
            raise InvalidApplicantRecord("Treatment count must be 1 or more")
        object.__setattr__(self, "treatment_count", count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "birth_date": self.birth_date.isoformat(),
            "is_low_income": self.is_low_income,
            "treatment_count": self.treatment_count,
            "stage": self.stage.value,
            "first_application_date": self.first_application_date.isoformat(),
            "transfer_date": self.transfer_date.isoformat() if self.transfer_date else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicantRecord":
        try:
            transfer = data.get("transfer_date")
            return cls(
                birth_date=date.fromisoformat(data["birth_date"]),
                is_low_income=bool(data["is_low_income"]),
                treatment_count=int(data["treatment_count"]),
                stage=TreatmentStage(data["stage"]),
                first_application_date=date.fromisoformat(data["first_application_date"]),
                transfer_date=date.fromisoformat(transfer) if transfer else None,
            )
        except InvalidApplicantRecord:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidApplicantRecord(f"Malformed applicant record: {exc}") from exc


@dataclass(frozen=True)
class EvaluationResult:
    age: int
    eligible: bool
    legacy_amount: int = 0   # scheme "2.0"
    current_amount: int = 0  # scheme "3.0"
    transfer_limit: Optional[int] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EvaluationResult":
        return cls(
            age=int(data["age"]),
            eligible=bool(data["eligible"]),
            legacy_amount=int(data.get("legacy_amount") or 0),
            current_amount=int(data.get("current_amount") or 0),
            transfer_limit=data.get("transfer_limit"),
            message=data.get("message"),
        )
