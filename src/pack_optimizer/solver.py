"""Public entry point: validate inputs, run a packer, aggregate the result."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from pack_optimizer.aggregate import build_solution, to_input_order
from pack_optimizer.config import Settings
from pack_optimizer.errors import ConfigurationError, InvalidInputError
from pack_optimizer.models import Item, Solution, SynergyRule
from pack_optimizer.packing.branch_and_bound import branch_and_bound
from pack_optimizer.packing.greedy import greedy_assignment

logger = logging.getLogger(__name__)

METHODS = ("exact", "greedy", "cpsat")


def validate_inputs(items: Sequence[Item], capacities: Sequence[float]) -> None:
    """
    Reject setups the search cannot handle, before any search starts.

    Ratios and bounds divide by item weight, so weights and capacities must be
    strictly positive. Names key the synergy rules and must be unique.
    """
    if len(capacities) == 0:
        raise ConfigurationError("At least one container capacity is required.")

    for idx, cap in enumerate(capacities):
        # `not cap > 0` also rejects NaN
        if not float(cap) > 0:
            raise InvalidInputError(f"Container[{idx}] capacity must be > 0, got {cap}.")

    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for item in items:
        if not item.weight > 0:
            raise InvalidInputError(f"Item[{item.id}] weight must be > 0, got {item.weight}.")
        if not item.value > 0:
            raise InvalidInputError(f"Item[{item.id}] value must be > 0, got {item.value}.")
        if item.id in seen_ids:
            raise InvalidInputError(f"Duplicate item id '{item.id}'.")
        if item.name in seen_names:
            raise InvalidInputError(f"Duplicate item name '{item.name}'.")
        seen_ids.add(item.id)
        seen_names.add(item.name)


def ratio_order(items: Sequence[Item]) -> list[int]:
    """Input indices sorted by value/weight ratio, best first; ties keep input order."""
    return sorted(range(len(items)), key=lambda idx: -items[idx].ratio)


def solve(
    items: Sequence[Item],
    capacities: Sequence[float],
    rules: Optional[Sequence[SynergyRule]] = None,
    *,
    method: str = "exact",
    settings: Optional[Settings] = None,
    seed_with_greedy: Optional[bool] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> Solution:
    """
    Pack `items` into containers of the given `capacities`, maximizing value.

    Args:
        items: Items to pack (each goes into at most one container)
        capacities: One capacity per container, in container index order
        rules: Synergy rules scored per container (none when omitted)
        method: "exact" (branch and bound), "greedy" or "cpsat"
        settings: Solver settings; defaults apply when omitted
        seed_with_greedy: Overrides settings.seed_with_greedy for "exact"
        should_stop: Polled between branch attempts of "exact"; returning True
            stops the search and keeps the best assignment found so far

    Returns:
        Solution with per-container results, assignment in input order and
        the wall-clock runtime of this call.

    Raises:
        ConfigurationError: no containers were given
        InvalidInputError: non-positive weight, value or capacity, or duplicate ids/names
    """
    if method not in METHODS:
        raise ConfigurationError(f"Unknown method '{method}'. Valid: {list(METHODS)}")

    settings = settings or Settings()
    rules = list(rules or [])
    items = list(items)
    capacities = [float(c) for c in capacities]

    validate_inputs(items, capacities)

    start = time.perf_counter()
    order = ratio_order(items)
    sorted_items = [items[idx] for idx in order]

    if method == "exact":
        seed = settings.seed_with_greedy if seed_with_greedy is None else seed_with_greedy
        initial = greedy_assignment(sorted_items, capacities) if seed else None
        outcome = branch_and_bound(
            sorted_items,
            capacities,
            rules,
            slack_ratio=settings.synergy_slack,
            initial=initial,
            should_stop=should_stop,
        )
        solution = build_solution(
            items, outcome.assignment, capacities, rules,
            order=order, method=method, stats=outcome.stats,
        )
    elif method == "greedy":
        assignment = greedy_assignment(sorted_items, capacities)
        solution = build_solution(items, to_input_order(assignment, order), capacities, rules, method=method)
    else:
        from pack_optimizer.cpsat_optimizer import solve_cpsat

        assignment = solve_cpsat(items, capacities, rules, time_limit=settings.cpsat_time_limit)
        solution = build_solution(items, assignment, capacities, rules, method=method)

    solution.runtime_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "solve method=%s items=%d containers=%d total_value=%.2f runtime_ms=%.1f",
        method, len(items), len(capacities), solution.total_value, solution.runtime_ms,
    )
    return solution
