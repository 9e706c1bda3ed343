# scripts/replay_history.py
"""
Re-evaluate every stored history entry against the current ruleset and
report entries whose stored result no longer matches.

    python -m scripts.replay_history
"""
import sys

from ivf_subsidy.db import SessionLocal
from ivf_subsidy.engine.rules import evaluate
from ivf_subsidy.history_store import SqlHistoryStore
from ivf_subsidy.logging_config import log_event


def replay(store) -> list[dict]:
    drift = []
    for entry in store.list():
        fresh = evaluate(entry.record)
        if fresh != entry.result:
            drift.append({
                "id": entry.id,
                "stored": entry.result.to_dict(),
                "current": fresh.to_dict(),
            })
    return drift


def main() -> int:
    db = SessionLocal()
    try:
        store = SqlHistoryStore(db)
        total = len(store.list())
        drift = replay(store)
    finally:
        db.close()

    log_event("HISTORY_REPLAY", "history re-evaluated", {"entries": total, "drift": len(drift)})
    for d in drift:
        print(f"[drift] {d['id']}: {d['stored']} -> {d['current']}")
    print(f"Replayed {total} entries, {len(drift)} changed.")
    return 1 if drift else 0


if __name__ == "__main__":
    sys.exit(main())
