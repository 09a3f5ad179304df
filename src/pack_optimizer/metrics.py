from __future__ import annotations

from typing import Any

from pack_optimizer.models import ContainerResult, Solution


def universe_count(num_containers: int, num_items: int) -> int:
    """Raw assignment combinations: each item goes to a container or nowhere."""
    return (num_containers + 1) ** num_items


def format_universe_count(count: int) -> str:
    return f"{count:,}"


def fill_rate(container: ContainerResult) -> float:
    return 0.0 if container.capacity == 0 else container.total_weight / container.capacity


def compute_metrics(solution: Solution) -> dict[str, Any]:
    used_weight = sum(c.total_weight for c in solution.containers)
    capacity = sum(c.capacity for c in solution.containers)
    base_value = sum(item.value for c in solution.containers for item in c.items)
    packed = sum(1 for slot in solution.assignment if slot is not None)

    return {
        "packed_items": packed,
        "unpacked_items": len(solution.assignment) - packed,
        "used_weight": used_weight,
        "total_capacity": capacity,
        "weight_fill_rate": 0.0 if capacity == 0 else used_weight / capacity,
        "container_fill_rates": [fill_rate(c) for c in solution.containers],
        "base_value": base_value,
        "synergy_value": solution.total_value - base_value,
        "total_value": solution.total_value,
        "universe_count": format_universe_count(solution.universe_count),
    }
