from __future__ import annotations

import pytest

from pack_optimizer.catalog import ITEM_CATALOG, category_for, generate_items


def test_same_seed_same_items() -> None:
    first = generate_items(20, seed=42)
    second = generate_items(20, seed=42)

    assert first == second


def test_names_and_ids_are_unique() -> None:
    items = generate_items(30, seed=7)

    assert len({i.name for i in items}) == 30
    assert [i.id for i in items] == [str(n) for n in range(30)]


def test_catalog_overflow_gets_variant_names() -> None:
    count = len(ITEM_CATALOG) + 8
    items = generate_items(count, seed=1)

    names = [i.name for i in items]
    assert len(set(names)) == count
    assert sum("#" in name for name in names) == 8
    # variants keep their base category
    for item in items:
        assert item.category == category_for(item.name.split(" #")[0])


def test_generated_values_stay_in_bands() -> None:
    for item in generate_items(100, seed=9):
        assert 1 <= item.weight <= 5
        assert 50 <= item.value <= 2499
        if item.value >= 1500:
            assert item.weight <= 2
        elif item.value >= 500:
            assert item.weight <= 3


def test_zero_items() -> None:
    assert generate_items(0, seed=1) == []


def test_negative_count_rejected() -> None:
    with pytest.raises(ValueError):
        generate_items(-1)


def test_category_lookup() -> None:
    assert category_for("Laptop") == "Electronics"
    assert category_for(" Tent ") == "Tools"
    assert category_for("Rubber Duck") == "Other"
