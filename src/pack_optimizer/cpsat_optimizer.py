"""Exact reference model using OR-Tools CP-SAT - maximizes value including synergies."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Sequence

from ortools.sat.python import cp_model

from pack_optimizer.models import Item, SynergyRule

logger = logging.getLogger(__name__)

# CP-SAT needs integer coefficients; weights, capacities, values and bonuses
# are scaled to this many units per 1.0.
SCALE = 100

# absorbs float noise such as 1.1 * 100 == 110.00000000000001
_SCALE_TOL = 1e-9


def _scaled(x: float) -> int:
    return int(round(float(x) * SCALE))


def _scaled_weight(weight: float) -> int:
    """Round up, so a packing that fits after scaling also fits unscaled."""
    return math.ceil(float(weight) * SCALE - _SCALE_TOL)


def _scaled_capacity(capacity: float) -> int:
    return math.floor(float(capacity) * SCALE + _SCALE_TOL)


def solve_cpsat(
    items: Sequence[Item],
    capacities: Sequence[float],
    rules: Sequence[SynergyRule],
    time_limit: Optional[float] = None,
) -> list[Optional[int]]:
    """
    Solve the same packing problem as the branch-and-bound engine with CP-SAT.

    Model:
        x[i, c] = 1 if item i goes into container c (at most one c per item)
        sum_i weight_i * x[i, c] <= capacity_c
            (weights rounded up, capacities down, so no container overfills)
        y[r, c] <= x[i, c] for every item i named by rule r
        maximize sum value_i * x[i, c] + sum bonus_r * y[r, c]

    Rules naming an item that is not in `items` can never fire and are skipped.

    Args:
        items: Items with unique names
        capacities: Container capacities
        rules: Synergy rules
        time_limit: Optional solver time limit in seconds

    Returns:
        Assignment in input order (container index or None per item)
    """
    if not items:
        return []

    model = cp_model.CpModel()
    item_range = range(len(items))
    container_range = range(len(capacities))
    index_by_name = {item.name: i for i, item in enumerate(items)}

    # Decision variables: x[i, c] boolean
    x: dict[tuple[int, int], Any] = {}
    for i in item_range:
        for c in container_range:
            x[i, c] = model.NewBoolVar(f"x_{i}_{c}")

    # Constraint: each item in at most one container
    for i in item_range:
        model.AddAtMostOne([x[i, c] for c in container_range])

    # Constraint: container capacity
    for c in container_range:
        model.Add(
            sum(x[i, c] * _scaled_weight(items[i].weight) for i in item_range)
            <= _scaled_capacity(capacities[c])
        )

    objective = [x[i, c] * _scaled(items[i].value) for i in item_range for c in container_range]

    # Synergy indicators: y[r, c] may only be 1 when every named item is in c
    for r, rule in enumerate(rules):
        if not rule.items.issubset(index_by_name):
            continue
        for c in container_range:
            y = model.NewBoolVar(f"y_{r}_{c}")
            for name in sorted(rule.items):
                model.AddImplication(y, x[index_by_name[name], c])
            objective.append(y * _scaled(rule.bonus))

    model.Maximize(sum(objective))

    solver = cp_model.CpSolver()
    if time_limit is not None:
        solver.parameters.max_time_in_seconds = float(time_limit)
    status = solver.Solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise RuntimeError(f"Solver failed with status {solver.StatusName(status)}")
    if status != cp_model.OPTIMAL:
        logger.warning("CP-SAT stopped before proving optimality (time_limit=%s)", time_limit)

    assignment: list[Optional[int]] = [None] * len(items)
    for i in item_range:
        for c in container_range:
            if solver.Value(x[i, c]):
                assignment[i] = c
                break
    return assignment
