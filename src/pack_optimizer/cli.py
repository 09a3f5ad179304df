from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from pack_optimizer.config import load_settings
from pack_optimizer.io.schemas import SolveRequestSchema
from pack_optimizer.metrics import compute_metrics
from pack_optimizer.models import Item, SynergyRule
from pack_optimizer.solver import METHODS, solve

logger = logging.getLogger(__name__)


def load_input(path: Path) -> tuple[list[float], list[Item], list[SynergyRule]]:
    """
    Read a problem file.

    Accepted shape:
        {
            "capacities": [10, 8],
            "items": [{"name": "Laptop", "weight": 2, "value": 2000}, ...],
            "synergies": [{"items": ["Laptop", "Charger"], "bonus": 200}, ...]
        }
    "generate": {"count": N, "seed": S} may replace "items". Without
    "synergies" the preset rule table is used.
    """
    data = json.loads(path.read_text(encoding="utf-8"))

    if "capacities" not in data:
        raise ValueError("Input must include 'capacities'")
    if "items" not in data and "generate" not in data:
        raise ValueError("Input must include either 'items' or 'generate'")

    request = SolveRequestSchema.model_validate(data)
    items = request.to_items()
    rules = request.to_rules()
    logger.debug("loaded %d items, %d containers, %d rules", len(items), len(request.capacities), len(rules))
    return list(request.capacities), items, rules


def write_plan(plan: dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(plan, indent=2), encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Pack Optimizer CLI")
    parser.add_argument("--input", required=True, help="Input problem JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--method",
        choices=list(METHODS),
        default="exact",
        help="exact = branch and bound, greedy = most-remaining-capacity heuristic, cpsat = OR-Tools reference",
    )
    parser.add_argument(
        "--seed-greedy",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Start the exact search from the greedy packing (default from PACK_OPTIMIZER_SEED_WITH_GREEDY, on)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to PACK_OPTIMIZER_LOG_LEVEL or INFO)",
    )

    args = parser.parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    capacities, items, rules = load_input(Path(args.input))

    solution = solve(
        items,
        capacities,
        rules,
        method=args.method,
        settings=settings,
        seed_with_greedy=args.seed_greedy,
    )

    plan = solution.model_dump(mode="json")
    plan["metrics"] = compute_metrics(solution)
    write_plan(plan, Path(args.output))

    logger.info("Plan written to %s (total_value=%.2f)", args.output, solution.total_value)


if __name__ == "__main__":
    main()
