from datetime import date

from ivf_subsidy.engine.history import HistoryEntry, InMemoryHistoryStore
from ivf_subsidy.engine.records import ApplicantRecord, EvaluationResult, TreatmentStage
from ivf_subsidy.engine.rules import evaluate
from scripts.replay_history import replay


def _record(count: int) -> ApplicantRecord:
    return ApplicantRecord(
        birth_date=date(1988, 2, 2),
        is_low_income=False,
        treatment_count=count,
        stage=TreatmentStage.RETRIEVAL_ONLY,
        first_application_date=date(2024, 9, 9),
    )


def test_replay_reports_only_changed_entries():
    store = InMemoryHistoryStore()
    store.append(HistoryEntry(record=_record(1), result=evaluate(_record(1)), id="same"))
    stale = EvaluationResult(age=36, eligible=True, legacy_amount=1, current_amount=2, transfer_limit=1)
    store.append(HistoryEntry(record=_record(2), result=stale, id="old"))

    drift = replay(store)

    assert [d["id"] for d in drift] == ["old"]
    assert drift[0]["current"]["current_amount"] == 70_000
