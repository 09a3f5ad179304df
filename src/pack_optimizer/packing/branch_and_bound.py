# src/pack_optimizer/packing/branch_and_bound.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from pack_optimizer.models import Item, SearchStats, SynergyRule
from pack_optimizer.packing.bound import (
    DEFAULT_SLACK_RATIO,
    fractional_bound,
    pooled_remaining,
    synergy_slack,
)
from pack_optimizer.synergy import assignment_value

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Best complete assignment (processing order) and its total value."""

    assignment: list[Optional[int]]
    total_value: float
    stats: SearchStats


@dataclass
class _Frame:
    """One internal node of the DFS: the item at `cursor` is being decided."""

    cursor: int
    bound: float
    order: list[int]
    next_branch: int = 0
    skip_tried: bool = False
    # (container, weight before placing, base value before placing)
    placed: Optional[tuple[int, float, float]] = None


def container_order(capacities: Sequence[float], used: Sequence[float], weight: float) -> list[int]:
    """
    Containers that can still take `weight`, most remaining capacity first.

    Ties keep container index order so the search is deterministic.
    """
    fits = [
        (cap - load, idx)
        for idx, (cap, load) in enumerate(zip(capacities, used))
        if cap - load >= weight
    ]
    fits.sort(key=lambda t: (-t[0], t[1]))
    return [idx for _, idx in fits]


class BranchAndBoundSearch:
    """
    Depth-first branch-and-bound over per-item assign/skip decisions.

    Items must be sorted by value/weight ratio (best first). The traversal keeps
    an explicit stack of frames instead of recursing, so the item count is not
    limited by the interpreter's recursion depth. Container loads, the base value
    and the assignment vector are mutated in place; each frame restores the exact
    values it saved before trying its next sibling branch.
    """

    def __init__(
        self,
        items: Sequence[Item],
        capacities: Sequence[float],
        rules: Sequence[SynergyRule],
        slack_ratio: float = DEFAULT_SLACK_RATIO,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        self.items = list(items)
        self.capacities = [float(c) for c in capacities]
        self.rules = list(rules)
        self.slack = synergy_slack(self.rules, slack_ratio)
        self.should_stop = should_stop

        n = len(self.items)
        self.assignment: list[Optional[int]] = [None] * n
        self.used = [0.0] * len(self.capacities)
        self.value = 0.0

        self.best_assignment: list[Optional[int]] = [None] * n
        self.best_value = 0.0
        self.stats = SearchStats()

    def seed(self, assignment: Sequence[Optional[int]]) -> None:
        """Start from a known complete assignment if it beats the current best."""
        candidate = list(assignment)
        value = assignment_value(self.items, candidate, len(self.capacities), self.rules)
        if value > self.best_value:
            self.best_assignment = candidate
            self.best_value = value

    def run(self) -> SearchOutcome:
        logger.debug(
            "branch_and_bound start: items=%d containers=%d rules=%d slack=%.2f",
            len(self.items), len(self.capacities), len(self.rules), self.slack,
        )

        stack: list[_Frame] = []
        root = self._visit(0)
        if root is not None:
            stack.append(root)

        while stack:
            frame = stack[-1]
            item = self.items[frame.cursor]

            # Undo the previous sibling before anything else looks at the state.
            if frame.placed is not None:
                container, used_before, value_before = frame.placed
                self.used[container] = used_before
                self.value = value_before
                self.assignment[frame.cursor] = None
                frame.placed = None

            if self.should_stop is not None and self.should_stop():
                self.stats.cancelled = True
                logger.info("branch_and_bound cancelled at depth %d", len(stack))
                break

            if frame.next_branch < len(frame.order):
                container = frame.order[frame.next_branch]
                frame.next_branch += 1
                frame.placed = (container, self.used[container], self.value)
                self.used[container] += item.weight
                self.value += item.value
                self.assignment[frame.cursor] = container
                child = self._visit(frame.cursor + 1)
                if child is not None:
                    stack.append(child)
                continue

            if not frame.skip_tried:
                frame.skip_tried = True
                # Leaving the item out must still leave headroom over the best.
                if frame.bound - item.value > self.best_value:
                    child = self._visit(frame.cursor + 1)
                    if child is not None:
                        stack.append(child)
                else:
                    self.stats.skips_pruned += 1
                continue

            stack.pop()

        logger.info(
            "branch_and_bound done: best=%.2f nodes=%d leaves=%d pruned=%d",
            self.best_value, self.stats.nodes, self.stats.leaves, self.stats.pruned,
        )
        return SearchOutcome(
            assignment=list(self.best_assignment),
            total_value=self.best_value,
            stats=self.stats,
        )

    def _visit(self, cursor: int) -> Optional[_Frame]:
        """Enter the node at `cursor`; returns a frame only if it has branches to explore."""
        self.stats.nodes += 1

        if cursor == len(self.items):
            self._evaluate_leaf()
            return None

        pooled = pooled_remaining(self.capacities, self.used)
        bound = self.value + fractional_bound(self.items, cursor, pooled) + self.slack
        if bound <= self.best_value:
            self.stats.pruned += 1
            return None

        item = self.items[cursor]
        return _Frame(
            cursor=cursor,
            bound=bound,
            order=container_order(self.capacities, self.used, item.weight),
        )

    def _evaluate_leaf(self) -> None:
        self.stats.leaves += 1
        total = assignment_value(self.items, self.assignment, len(self.capacities), self.rules)
        if total > self.best_value:
            self.best_value = total
            self.best_assignment = list(self.assignment)
            self.stats.improvements += 1


def branch_and_bound(
    items: Sequence[Item],
    capacities: Sequence[float],
    rules: Sequence[SynergyRule],
    slack_ratio: float = DEFAULT_SLACK_RATIO,
    initial: Optional[Sequence[Optional[int]]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SearchOutcome:
    """Run one cold search over ratio-sorted `items`; `initial` optionally seeds the best."""
    search = BranchAndBoundSearch(
        items,
        capacities,
        rules,
        slack_ratio=slack_ratio,
        should_stop=should_stop,
    )
    if initial is not None:
        search.seed(initial)
    return search.run()
