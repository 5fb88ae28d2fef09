from fastapi.testclient import TestClient

from shoefit.api import app

client = TestClient(app)

ROWS = [
    {"label": "42", "foot_length_cm": 27.5, "row_index": 0},
    {"label": "43", "foot_length_cm": 28.3, "row_index": 1},
    {"label": "44", "foot_length_cm": 29.0, "row_index": 2},
]


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_recommend_laced_shoe():
    resp = client.post("/recommend", json={"foot_length": "28,0", "rows": ROWS, "context": {"has_laces": True}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["size"] == "43"
    assert body["category"] == "laced"
    assert body["fit_band"] == "ideal"
    assert body["override_source"] is None
    assert body["matched_row_index"] == 1
    assert body["fit_note"] == "Laced (laces provide secure fit) - IDEAL fit (+0.3cm)"


def test_recommend_reports_store_override_and_diagnostics():
    resp = client.post(
        "/recommend",
        json={
            "foot_length": 28.0,
            "rows": ROWS,
            "dropdown_sizes": ["42", "42 1/2", "43"],
            "context": {"store_recommendation": "43"},
        },
    )
    body = resp.json()
    assert body["override_source"] == "store"
    assert body["store_recommendation"] == "43"
    assert "size_interpolated" in [d["code"] for d in body["diagnostics"]]


def test_unusable_foot_length_is_422():
    resp = client.post("/recommend", json={"foot_length": "abc", "rows": ROWS})
    assert resp.status_code == 422


def test_missing_rows_is_422():
    resp = client.post("/recommend", json={"foot_length": 28.0, "rows": []})
    assert resp.status_code == 422
