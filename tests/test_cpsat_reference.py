"""Cross-checks between the search engine, the greedy packer and the CP-SAT model."""

from __future__ import annotations

import pytest

from pack_optimizer.catalog import generate_items
from pack_optimizer.cpsat_optimizer import solve_cpsat
from pack_optimizer.models import Item, SynergyRule
from pack_optimizer.solver import solve
from pack_optimizer.synergy import DEFAULT_SYNERGIES


def test_cpsat_single_container() -> None:
    items = [
        Item(id="a", name="a", weight=2, value=100),
        Item(id="b", name="b", weight=3, value=200),
        Item(id="c", name="c", weight=1, value=50),
    ]

    solution = solve(items, [5], method="cpsat")

    assert solution.total_value == 300
    assert solution.method == "cpsat"


def test_cpsat_scores_synergy() -> None:
    items = [
        Item(id="1", name="Laptop", weight=2, value=2000),
        Item(id="2", name="Charger", weight=1, value=50),
    ]
    rules = [SynergyRule(items=frozenset({"Laptop", "Charger"}), bonus=200)]

    assert solve(items, [5], rules, method="cpsat").total_value == 2250


def test_cpsat_finds_pair_the_default_search_misses() -> None:
    items = [
        Item(id="1", name="Laptop", weight=2, value=100),
        Item(id="2", name="Charger", weight=2, value=10),
        Item(id="3", name="Book", weight=2, value=60),
    ]
    rules = [SynergyRule(items=frozenset({"Laptop", "Charger"}), bonus=100)]

    exact = solve(items, [4], rules)
    reference = solve(items, [4], rules, method="cpsat")

    assert exact.total_value == 160
    assert reference.total_value == 210


def test_cpsat_skips_rules_naming_absent_items() -> None:
    items = [Item(id="1", name="Laptop", weight=2, value=100)]
    rules = [SynergyRule(items=frozenset({"Laptop", "Charger"}), bonus=500)]

    assert solve_cpsat(items, [5], rules) == [0]


def test_cpsat_empty_items() -> None:
    assert solve_cpsat([], [5], DEFAULT_SYNERGIES) == []


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_reference_bounds_other_methods(seed: int) -> None:
    items = generate_items(8, seed=seed)
    capacities = [5, 4]

    reference = solve(items, capacities, DEFAULT_SYNERGIES, method="cpsat")
    exact = solve(items, capacities, DEFAULT_SYNERGIES)
    greedy = solve(items, capacities, DEFAULT_SYNERGIES, method="greedy")

    assert exact.total_value <= reference.total_value + 1e-6
    assert greedy.total_value <= reference.total_value + 1e-6


def test_cpsat_never_overfills_with_fractional_weights() -> None:
    # 1.004 + 0.999 = 2.003 would fit if each weight were rounded to 2 decimals
    items = [
        Item(id="a", name="a", weight=1.004, value=10),
        Item(id="b", name="b", weight=0.999, value=10),
    ]

    solution = solve(items, [2.0], method="cpsat")

    assert solution.total_value == 10
    assert solution.containers[0].total_weight <= 2.0
    assert sorted(solution.assignment, key=lambda s: s is None) == [0, None]


def test_cpsat_keeps_exact_fits_with_fractional_weights() -> None:
    # 1.1 * 100 is 110.00000000000001 in floating point
    items = [
        Item(id="a", name="a", weight=1.1, value=10),
        Item(id="b", name="b", weight=0.9, value=10),
    ]

    solution = solve(items, [2.0], method="cpsat")

    assert solution.total_value == 20
    assert solution.assignment == [0, 0]
