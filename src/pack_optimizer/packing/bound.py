"""Optimistic bounds used to prune the branch-and-bound search."""

from __future__ import annotations

from typing import Sequence

from pack_optimizer.models import Item, SynergyRule
from pack_optimizer.synergy import total_bonus

DEFAULT_SLACK_RATIO = 0.3


def pooled_remaining(capacities: Sequence[float], used: Sequence[float]) -> float:
    """Unused capacity of all containers collapsed into one number."""
    return sum(max(0.0, cap - load) for cap, load in zip(capacities, used))


def fractional_bound(items: Sequence[Item], start: int, capacity: float) -> float:
    """
    Fractional knapsack relaxation over items[start:].

    Items must already be sorted by value/weight ratio, best first. Whole items
    are taken while they fit; the first one that does not fit contributes the
    fraction that fills the capacity, and the scan stops there.

    The result bounds the base value of any feasible placement of the remaining
    items, since both container separation and integrality are relaxed.
    """
    bound = 0.0
    remaining = capacity
    for idx in range(start, len(items)):
        if remaining <= 0.0:
            break
        item = items[idx]
        if item.weight <= remaining:
            bound += item.value
            remaining -= item.weight
        else:
            bound += item.value * (remaining / item.weight)
            break
    return bound


def synergy_slack(rules: Sequence[SynergyRule], ratio: float = DEFAULT_SLACK_RATIO) -> float:
    """
    Heuristic allowance for synergy bonuses the relaxation cannot see.

    A fixed share of every rule's bonus, added to each node bound. It is not a
    proven bound: a branch whose full synergy potential exceeds this allowance
    can be pruned.
    """
    return total_bonus(rules) * ratio
