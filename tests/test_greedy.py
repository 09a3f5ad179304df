from pack_optimizer.models import Item
from pack_optimizer.packing.greedy import greedy_assignment
from pack_optimizer.solver import solve


def test_greedy_prefers_most_remaining_capacity():
    items = [
        Item(id="A", name="A", weight=3, value=30),
        Item(id="B", name="B", weight=3, value=30),
        Item(id="C", name="C", weight=3, value=30),
    ]

    assignment = greedy_assignment(items, [4, 6])

    # A -> the 6, B -> the 4 (now 4 vs 3), C -> the 6's leftover 3
    assert assignment == [1, 0, 1]


def test_greedy_leaves_out_items_that_fit_nowhere():
    items = [
        Item(id="A", name="A", weight=5, value=50),
        Item(id="B", name="B", weight=2, value=10),
    ]

    assignment = greedy_assignment(items, [4])

    assert assignment == [None, 0]


def test_greedy_can_miss_the_optimum():
    # ratio order packs A and B, leaving no room for C
    items = [
        Item(id="A", name="A", weight=10, value=60),
        Item(id="B", name="B", weight=20, value=100),
        Item(id="C", name="C", weight=30, value=120),
    ]

    greedy = solve(items, [50], method="greedy")
    exact = solve(items, [50])

    assert greedy.total_value == 160
    assert exact.total_value == 220
    assert greedy.method == "greedy"
    assert greedy.stats is None
