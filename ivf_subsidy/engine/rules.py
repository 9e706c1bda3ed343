# ivf_subsidy/engine/rules.py
from __future__ import annotations

from datetime import date

from .records import ApplicantRecord, EvaluationResult
from .subsidy_tables import CURRENT, LEGACY, lookup_amount

AGE_CEILING = 45

MSG_AGE_CEILING = "Applicant must be under 45 years of age at first application"
MSG_CYCLES_UNDER_40 = "Applicants aged 39 or under are limited to 6 subsidised cycles"
MSG_CYCLES_40_TO_44 = "Applicants aged 40 to 44 are limited to 3 subsidised cycles"


def compute_age(birth_date: date, on: date) -> int:
    age = on.year - birth_date.year
    if (on.month, on.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def max_cycles(age: int) -> int:
    return 6 if age <= 39 else 3


def transfer_limit(age: int) -> int:
    """Embryos permitted per transfer for the age band."""
    return 1 if age <= 39 else 2


def _rejected(age: int, message: str) -> EvaluationResult:
    return EvaluationResult(age=age, eligible=False, legacy_amount=0, current_amount=0, message=message)


def evaluate(record: ApplicantRecord) -> EvaluationResult:
    # ---------- age at first application ----------
    age = compute_age(record.birth_date, record.first_application_date)

    # ---------- hard gates ----------
    if age >= AGE_CEILING:
        return _rejected(age, MSG_AGE_CEILING)

    if record.treatment_count > max_cycles(age):
        return _rejected(age, MSG_CYCLES_UNDER_40 if age <= 39 else MSG_CYCLES_40_TO_44)

    # ---------- both schemes, unconditionally ----------
    # which one is authoritative for the application date is decided by the caller
    amounts = {
        scheme: lookup_amount(
            scheme,
            record.is_low_income,
            record.stage,
            age,
            record.treatment_count,
        )
        for scheme in (LEGACY, CURRENT)
    }

    return EvaluationResult(
        age=age,
        eligible=True,
        legacy_amount=amounts[LEGACY],
        current_amount=amounts[CURRENT],
        transfer_limit=transfer_limit(age),
    )
