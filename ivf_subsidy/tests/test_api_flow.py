from __future__ import annotations

import pytest

from ivf_subsidy.history_store import SqlHistoryStore
from ivf_subsidy.main import app
from ivf_subsidy.routes.calculations import get_history_store


def _payload(**overrides) -> dict:
    body = {
        "birth_date": "1990-05-20",
        "is_low_income": False,
        "treatment_count": 1,
        "stage": "FULL_CYCLE",
        "first_application_date": "2025-03-01",
        "transfer_date": "2025-04-15",
    }
    body.update(overrides)
    return body


def _calc(client, **overrides) -> dict:
    r = client.post("/calculations/", json=_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert client.get("/ops/health").json()["checks"]["database"] == "ok"


def test_ruleset_meta(client):
    data = client.get("/ops/meta/ruleset").json()
    assert data["schemes"] == ["2.0", "3.0"]
    assert len(data["table_hash"]) == 32


# -------------------------
# CALCULATE
# -------------------------
def test_calculate_eligible_returns_both_amounts(client):
    data = _calc(client)
    res = data["result"]
    assert res["age"] == 34
    assert res["eligible"] is True
    assert res["legacy_amount"] == 100_000
    assert res["current_amount"] == 150_000
    assert res["transfer_limit"] == 1
    assert res["message"] is None
    assert data["active_scheme"] == "3.0"
    assert data["history_id"]


def test_calculate_ineligible_has_message_and_zero_amounts(client):
    data = _calc(client, birth_date="1978-01-01")
    res = data["result"]
    assert res["eligible"] is False
    assert res["legacy_amount"] == 0 and res["current_amount"] == 0
    assert res["message"]


def test_calculate_legacy_application_date(client):
    data = _calc(client, first_application_date="2022-11-01")
    assert data["active_scheme"] == "2.0"
    assert data["result"]["current_amount"] >= data["result"]["legacy_amount"]


# -------------------------
# INVALID INPUT
# -------------------------
@pytest.mark.parametrize(
    "overrides",
    [
        {"birth_date": "1990-13-40"},
        {"treatment_count": 7},
        {"treatment_count": 0},
        {"stage": "SOMETHING_ELSE"},
    ],
)
def test_form_validation_rejects(client, overrides):
    r = client.post("/calculations/", json=_payload(**overrides))
    assert r.status_code == 422


def test_birth_after_application_is_invalid_input(client):
    r = client.post("/calculations/", json=_payload(birth_date="2026-01-01"))
    assert r.status_code == 422
    assert r.json()["error"] == "INVALID_INPUT"


# -------------------------
# HISTORY
# -------------------------
def test_history_is_capped_newest_first(client):
    ids = [_calc(client, treatment_count=(i % 6) + 1)["history_id"] for i in range(11)]

    data = client.get("/calculations/history").json()
    got = [e["id"] for e in data["entries"]]
    assert data["cap"] == 10
    assert len(got) == 10
    assert got[0] == ids[-1]
    assert ids[0] not in got


def test_history_replay_returns_record_verbatim(client):
    body = _payload(is_low_income=True, stage="TRANSFER_ONLY", treatment_count=2)
    hid = client.post("/calculations/", json=body).json()["history_id"]

    r = client.get(f"/calculations/history/{hid}")
    assert r.status_code == 200
    entry = r.json()
    assert entry["record"] == body
    assert entry["result"]["current_amount"] == 60_000


def test_history_unknown_id_is_404(client):
    r = client.get("/calculations/history/does-not-exist")
    assert r.status_code == 404
    assert r.json()["error"] == "HTTP_404"


def test_history_clear(client):
    _calc(client)
    r = client.delete("/calculations/history")
    assert r.status_code == 204
    assert client.get("/calculations/history").json()["entries"] == []


def test_history_export_csv(client):
    _calc(client)
    r = client.get("/calculations/history/export.csv")
    assert r.status_code == 200
    header = r.text.splitlines()[0]
    assert "legacy_amount" in header and "current_amount" in header
    assert len(r.text.splitlines()) == 2


# -------------------------
# PERSISTENCE FAILURE IS NON-FATAL
# -------------------------
class _BrokenStore(SqlHistoryStore):
    def __init__(self):
        pass

    def append(self, entry, cap=10):
        raise RuntimeError("storage unavailable")


def test_history_failure_still_returns_result(client):
    app.dependency_overrides[get_history_store] = _BrokenStore
    try:
        data = _calc(client)
    finally:
        app.dependency_overrides.pop(get_history_store, None)

    assert data["history_id"] is None
    assert data["result"]["eligible"] is True
    assert data["result"]["current_amount"] == 150_000
