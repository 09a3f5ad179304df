"""FastAPI endpoint for the pack optimizer."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Response
from pydantic import ValidationError

from pack_optimizer.config import Settings, load_settings
from pack_optimizer.io.schemas import SolveRequestSchema
from pack_optimizer.metrics import compute_metrics
from pack_optimizer.solver import METHODS, solve

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Pack Optimizer API",
    description="Multi-container value packing with synergy bonuses",
)


def build_plan(
    request: SolveRequestSchema,
    method: str = "exact",
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Solve a validated request.

    Returns:
        Plan dict with the JSON dump of the Solution plus its metrics
    """
    items = request.to_items()
    rules = request.to_rules()
    solution = solve(items, request.capacities, rules, method=method, settings=settings)

    plan = solution.model_dump(mode="json")
    plan["metrics"] = compute_metrics(solution)
    return plan


def format_output(plan: dict[str, Any]) -> dict[str, Any]:
    """
    Format plan output with guaranteed fields and a readable summary.
    """
    metrics = plan.get("metrics", {})
    containers = plan.get("containers", [])

    packed = int(metrics.get("packed_items", 0))
    unpacked = int(metrics.get("unpacked_items", 0))
    fill_pct = round(float(metrics.get("weight_fill_rate", 0.0)) * 100.0, 1)
    synergy_value = float(metrics.get("synergy_value", 0.0))

    lines = [
        "Packing Complete",
        f"Total Value: {float(plan.get('total_value', 0.0)):.2f} (synergy {synergy_value:.2f})",
        f"Weight Fill: {fill_pct:.1f}%",
        f"Items Packed: {packed}",
        f"Items Left Out: {unpacked}",
        f"Universes: {metrics.get('universe_count', '0')}",
    ]
    for idx, container in enumerate(containers):
        names = ", ".join(item["name"] for item in container.get("items", [])) or "(empty)"
        lines.append(
            f"Container {idx + 1}: {container['total_weight']:g}/{container['capacity']:g} "
            f"value {container['total_value']:.2f} - {names}"
        )

    return {
        "metrics": {
            "items_packed": packed,
            "items_unpacked": unpacked,
            "total_value": float(plan.get("total_value", 0.0)),
            "weight_fill_rate": float(metrics.get("weight_fill_rate", 0.0)),
        },
        "summary": "\n".join(lines),
        "plan": plan,
    }


def _unprocessable(summary: str, details: list[str]) -> Response:
    error_response = {
        "error": "INVALID_INPUT",
        "summary": summary,
        "details": details,
    }
    return Response(
        content=json.dumps(error_response),
        status_code=422,
        media_type="application/json",
    )


@app.post("/solve")
async def solve_endpoint(
    request: dict[str, Any],
    method: str = Query("exact", description=f"Solver method, one of {list(METHODS)}"),
) -> Any:
    """
    Solve a packing request.

    Input (request body):
        {
            "capacities": [10, 8],
            "items": [{"name": "Laptop", "weight": 2, "value": 2000}],
            "synergies": [{"items": ["Laptop", "Charger"], "bonus": 200}]
        }

    Returns:
        Response with metrics, summary, and plan
    """
    try:
        try:
            parsed = SolveRequestSchema.model_validate(request)
        except ValidationError as e:
            details = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            return _unprocessable("Request does not match the expected schema.", details)

        try:
            plan = build_plan(parsed, method=method, settings=load_settings())
        except ValueError as e:
            return _unprocessable("Packing setup is invalid.", [str(e)])

        response = format_output(plan)
        logger.info(
            f"method={method}, items_packed={response['metrics']['items_packed']}, "
            f"total_value={response['metrics']['total_value']:.2f}"
        )
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /solve endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health() -> dict[str, Any]:
    return {"status": "ok", "methods": list(METHODS)}
