# src/pack_optimizer/packing/greedy.py

from __future__ import annotations

from typing import Optional, Sequence

from pack_optimizer.models import Item


def greedy_assignment(items: Sequence[Item], capacities: Sequence[float]) -> list[Optional[int]]:
    """
    Most-remaining-capacity packer.

    - Walks items in the given order (callers pass them ratio-sorted)
    - Puts each item into the container with the most remaining capacity that fits it
    - Ties go to the lower container index
    - Items that fit nowhere stay unassigned (None)
    - Deterministic (no randomness)
    """
    assignment: list[Optional[int]] = [None] * len(items)
    used = [0.0] * len(capacities)

    for idx, item in enumerate(items):
        best_container: Optional[int] = None
        best_remaining = -1.0

        for c, cap in enumerate(capacities):
            remaining = float(cap) - used[c]
            if remaining >= item.weight and remaining > best_remaining:
                best_container = c
                best_remaining = remaining

        if best_container is not None:
            assignment[idx] = best_container
            used[best_container] += item.weight

    return assignment
