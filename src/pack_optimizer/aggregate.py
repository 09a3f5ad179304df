"""Turn a raw assignment vector into a structured Solution."""

from __future__ import annotations

import math
from typing import Optional, Sequence

from pack_optimizer.errors import StateValidationError
from pack_optimizer.metrics import universe_count
from pack_optimizer.models import ContainerResult, Item, SearchStats, Solution, SynergyRule
from pack_optimizer.synergy import synergy_bonus

# float sums may differ from the search's running loads by rounding
_CAPACITY_EPS = 1e-9


def to_input_order(
    assignment: Sequence[Optional[int]],
    order: Sequence[int],
) -> list[Optional[int]]:
    """Map an assignment over processing order back to input order (order[k] = input index)."""
    by_input: list[Optional[int]] = [None] * len(order)
    for position, input_idx in enumerate(order):
        by_input[input_idx] = assignment[position]
    return by_input


def build_solution(
    items: Sequence[Item],
    assignment: Sequence[Optional[int]],
    capacities: Sequence[float],
    rules: Sequence[SynergyRule],
    order: Optional[Sequence[int]] = None,
    method: str = "exact",
    stats: Optional[SearchStats] = None,
) -> Solution:
    """
    Build per-container totals from an assignment.

    `assignment` is in input order unless `order` is given, in which case it is
    over processing order and `order[k]` names the input index of position k.
    Totals are recomputed from the items, never taken from the search.
    """
    if len(assignment) != len(items):
        raise StateValidationError(
            f"assignment has {len(assignment)} entries for {len(items)} items"
        )
    if order is not None:
        assignment = to_input_order(assignment, order)

    containers = [ContainerResult(capacity=float(cap)) for cap in capacities]
    for item, slot in zip(items, assignment):
        if slot is None:
            continue
        if not 0 <= slot < len(containers):
            raise StateValidationError(f"Item[{item.id}] assigned to unknown container {slot}")
        containers[slot].items.append(item)

    total_value = 0.0
    for idx, container in enumerate(containers):
        container.total_weight = math.fsum(item.weight for item in container.items)
        if container.total_weight > container.capacity + _CAPACITY_EPS * max(1.0, container.capacity):
            raise StateValidationError(
                f"container {idx} holds {container.total_weight} > capacity {container.capacity}"
            )
        base = sum(item.value for item in container.items)
        container.total_value = base + synergy_bonus(container.items, rules)
        total_value += container.total_value

    return Solution(
        containers=containers,
        total_value=total_value,
        universe_count=universe_count(len(capacities), len(items)),
        assignment=list(assignment),
        method=method,
        stats=stats,
    )
