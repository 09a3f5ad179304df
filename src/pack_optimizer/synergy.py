"""Synergy rules: bonuses for named items packed together."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from pack_optimizer.models import Item, SynergyRule

DEFAULT_SYNERGIES: list[SynergyRule] = [
    SynergyRule(items=frozenset({"Laptop", "Charger"}), bonus=200),
    SynergyRule(items=frozenset({"Camera", "Tripod"}), bonus=150),
    SynergyRule(items=frozenset({"Phone", "Power Bank"}), bonus=100),
    SynergyRule(items=frozenset({"Tent", "Sleeping Bag"}), bonus=300),
    SynergyRule(items=frozenset({"Stove", "Lantern"}), bonus=150),
    SynergyRule(items=frozenset({"Camera", "Memory Card"}), bonus=100),
    SynergyRule(items=frozenset({"Drone", "Batteries"}), bonus=200),
    SynergyRule(items=frozenset({"Laptop", "Mouse", "Keyboard"}), bonus=400),
    SynergyRule(items=frozenset({"Phone", "Charger", "Power Bank"}), bonus=250),
]


def synergy_bonus(container_items: Iterable[Item], rules: Sequence[SynergyRule]) -> float:
    """
    Sum the bonuses of every rule whose names are all present in the container.

    Duplicate names count once, so a rule fires at most once per container.
    """
    names = {item.name for item in container_items}
    bonus = 0.0
    for rule in rules:
        if rule.items <= names:
            bonus += rule.bonus
    return bonus


def total_bonus(rules: Sequence[SynergyRule]) -> float:
    return sum(rule.bonus for rule in rules)


def bucket_items(
    items: Sequence[Item],
    assignment: Sequence[Optional[int]],
    num_containers: int,
) -> list[list[Item]]:
    """Group items by container; unassigned entries are dropped."""
    buckets: list[list[Item]] = [[] for _ in range(num_containers)]
    for item, container in zip(items, assignment):
        if container is not None:
            buckets[container].append(item)
    return buckets


def assignment_value(
    items: Sequence[Item],
    assignment: Sequence[Optional[int]],
    num_containers: int,
    rules: Sequence[SynergyRule],
) -> float:
    """Total value of a complete assignment: base values plus per-container synergy."""
    total = 0.0
    for bucket in bucket_items(items, assignment, num_containers):
        total += sum(item.value for item in bucket) + synergy_bonus(bucket, rules)
    return total
