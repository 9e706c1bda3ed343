# ivf_subsidy/routes/calculations.py
from __future__ import annotations

import csv
from io import StringIO

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from .. import schemas
from ..db import get_db
from ..engine.history import HistoryEntry, HistoryStore
from ..engine.rules import evaluate
from ..engine.scheme_selection import scheme_advice
from ..history_store import SqlHistoryStore
from ..logging_config import log_event, log_failure
from ..settings import get_settings

router = APIRouter(prefix="/calculations", tags=["calculations"])
settings = get_settings()


def get_history_store(db: Session = Depends(get_db)) -> HistoryStore:
    return SqlHistoryStore(db)


# -------------------------
# CALCULATE
# -------------------------
@router.post("/", response_model=schemas.CalculationResponse, status_code=201)
def calculate(
    applicant: schemas.ApplicantIn,
    response: Response,
    store: HistoryStore = Depends(get_history_store),
):
    response.headers["X-Ruleset-Version"] = settings.RULESET_VERSION

    record = applicant.to_record()
    result = evaluate(record)
    advice = scheme_advice(record.first_application_date, settings.SCHEME_CUTOVER_DATE)

    log_event("EVALUATE", "subsidy evaluated", {
        "age": result.age,
        "eligible": result.eligible,
        "legacy_amount": result.legacy_amount,
        "current_amount": result.current_amount,
        "active_scheme": advice.active_scheme,
    })

    # history is best-effort; the result is returned either way
    entry = HistoryEntry(record=record, result=result)
    history_id = None
    try:
        store.append(entry, cap=settings.HISTORY_CAP)
        history_id = entry.id
    except Exception as e:
        log_failure("HISTORY_PERSIST_FAILED", {"stage": "history_append", "error": str(e)})

    return schemas.CalculationResponse(
        result=schemas.result_out(result),
        record=applicant,
        active_scheme=advice.active_scheme,
        scheme_note=advice.note,
        history_id=history_id,
    )


# -------------------------
# HISTORY
# -------------------------
@router.get("/history", response_model=schemas.HistoryOut)
def list_history(store: HistoryStore = Depends(get_history_store)):
    entries = store.list()
    return schemas.HistoryOut(
        cap=settings.HISTORY_CAP,
        entries=[schemas.HistoryEntryOut.from_entry(e) for e in entries],
    )


@router.delete("/history", status_code=204)
def clear_history(store: HistoryStore = Depends(get_history_store)):
    store.clear()
    log_event("HISTORY_CLEAR", "history log cleared")
    return Response(status_code=204)


@router.get("/history/export.csv")
def export_history_csv(store: HistoryStore = Depends(get_history_store)):
    buf = StringIO()
    w = csv.writer(buf)
    w.writerow([
        "id", "created_at",
        "birth_date", "is_low_income", "treatment_count", "stage",
        "first_application_date", "transfer_date",
        "age", "eligible", "legacy_amount", "current_amount", "transfer_limit", "message",
    ])

    for e in store.list():
        r, res = e.record, e.result
        w.writerow([
            e.id, e.created_at.isoformat(),
            r.birth_date.isoformat(), int(r.is_low_income), r.treatment_count, r.stage.value,
            r.first_application_date.isoformat(),
            r.transfer_date.isoformat() if r.transfer_date else "",
            res.age, int(res.eligible), res.legacy_amount, res.current_amount,
            res.transfer_limit if res.transfer_limit is not None else "",
            res.message or "",
        ])

    return Response(buf.getvalue(), media_type="text/csv; charset=utf-8")


# Replay: returns the stored record verbatim so the form can reload it
@router.get("/history/{entry_id}", response_model=schemas.HistoryEntryOut)
def get_history_entry(entry_id: str, store: HistoryStore = Depends(get_history_store)):
    entry = store.get(entry_id)
    if not entry:
        raise HTTPException(404, "History entry not found")
    return schemas.HistoryEntryOut.from_entry(entry)
