# ivf_subsidy/routes/ops.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import text

from ..db import get_db
from ..engine.subsidy_tables import SCHEMES, SUBSIDY_TABLE
from ..settings import get_settings
import hashlib
import json

router = APIRouter(prefix="/ops", tags=["operations"])
settings = get_settings()


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Deep health check: verifies the history database is reachable.
    Evaluation itself has no dependencies, so a failed DB only degrades history.
    """
    status = {"api": "online", "version": settings.APP_VERSION, "checks": {}}

    try:
        db.execute(text("SELECT 1"))
        status["checks"]["database"] = "ok"
    except Exception as e:
        status["checks"]["database"] = f"failed: {str(e)}"
        raise HTTPException(503, detail=status)

    return status


@router.get("/meta/ruleset")
def ruleset_metadata():
    """
    Hash of the amount tables, to prove which figures produced a stored result.
    """
    canonical = json.dumps(SUBSIDY_TABLE, sort_keys=True, default=str)
    return {
        "ruleset_version": settings.RULESET_VERSION,
        "schemes": list(SCHEMES),
        "cutover_date": settings.SCHEME_CUTOVER_DATE.isoformat(),
        "history_cap": settings.HISTORY_CAP,
        "table_hash": hashlib.md5(canonical.encode("utf-8")).hexdigest(),
    }
