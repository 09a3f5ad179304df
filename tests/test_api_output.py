"""Tests for API output formatting and input validation."""

from __future__ import annotations

from fastapi.testclient import TestClient

from pack_optimizer.api import app, format_output

client = TestClient(app)


def laptop_request() -> dict:
    return {
        "capacities": [5],
        "items": [
            {"name": "Laptop", "weight": 2, "value": 2000},
            {"name": "Charger", "weight": 1, "value": 50},
        ],
        "synergies": [{"items": ["Laptop", "Charger"], "bonus": 200}],
    }


def test_success_response_has_guaranteed_fields() -> None:
    """Test that success responses always have guaranteed fields."""
    response = client.post("/solve", json=laptop_request())

    assert response.status_code == 200
    data = response.json()

    assert "metrics" in data
    assert "summary" in data
    assert "plan" in data

    metrics = data["metrics"]
    assert metrics["items_packed"] == 2
    assert metrics["items_unpacked"] == 0
    assert metrics["total_value"] == 2250

    plan = data["plan"]
    assert plan["assignment"] == [0, 0]
    assert plan["universe_count"] == 4
    assert plan["containers"][0]["items"][0]["category"] == "Electronics"

    assert isinstance(data["summary"], str)
    assert "Packing Complete" in data["summary"]
    assert "Laptop, Charger" in data["summary"]


def test_greedy_method_query_param() -> None:
    response = client.post("/solve", params={"method": "greedy"}, json=laptop_request())

    assert response.status_code == 200
    assert response.json()["plan"]["method"] == "greedy"


def test_generated_items_request() -> None:
    request = {"capacities": [10, 8], "generate": {"count": 8, "seed": 3}}

    response = client.post("/solve", json=request)

    assert response.status_code == 200
    assert len(response.json()["plan"]["assignment"]) == 8


def test_missing_capacities_returns_friendly_422() -> None:
    response = client.post("/solve", json={"items": [{"name": "Laptop", "weight": 2, "value": 2000}]})

    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "INVALID_INPUT"
    assert data["summary"] == "Request does not match the expected schema."
    assert any(d.startswith("capacities") for d in data["details"])


def test_zero_weight_item_returns_422() -> None:
    request = laptop_request()
    request["items"][0]["weight"] = 0

    response = client.post("/solve", json=request)

    assert response.status_code == 422
    assert response.json()["error"] == "INVALID_INPUT"


def test_no_containers_returns_422() -> None:
    request = laptop_request()
    request["capacities"] = []

    response = client.post("/solve", json=request)

    assert response.status_code == 422
    data = response.json()
    assert data["summary"] == "Packing setup is invalid."
    assert "container" in data["details"][0]


def test_unknown_method_returns_422() -> None:
    response = client.post("/solve", params={"method": "annealing"}, json=laptop_request())

    assert response.status_code == 422
    assert "annealing" in response.json()["details"][0]


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "methods": ["exact", "greedy", "cpsat"]}


def test_format_output_guaranteed_fields() -> None:
    """Test format_output always returns guaranteed fields, even for a bare plan."""
    output = format_output({"total_value": 0.0})

    assert output["metrics"] == {
        "items_packed": 0,
        "items_unpacked": 0,
        "total_value": 0.0,
        "weight_fill_rate": 0.0,
    }
    assert output["summary"].startswith("Packing Complete")


def test_format_output_lists_empty_containers() -> None:
    plan = {
        "total_value": 0.0,
        "containers": [{"items": [], "total_weight": 0, "total_value": 0, "capacity": 5}],
        "metrics": {"weight_fill_rate": 0.0, "universe_count": "2"},
    }

    summary = format_output(plan)["summary"]

    assert "Container 1: 0/5 value 0.00 - (empty)" in summary
    assert "Weight Fill: 0.0%" in summary
    assert "Universes: 2" in summary
