# src/pack_optimizer/catalog.py
from __future__ import annotations

import random
from typing import Optional

from pack_optimizer.models import Item

CATEGORIES = ("Electronics", "Clothing", "Food", "Tools", "Accessories", "Other")

# Preset item names, chosen so the default synergy rules can fire.
ITEM_CATALOG: dict[str, str] = {
    "Laptop": "Electronics",
    "Camera": "Electronics",
    "Headphones": "Electronics",
    "Drone": "Electronics",
    "iPad": "Electronics",
    "Charger": "Electronics",
    "Power Bank": "Electronics",
    "Tablet": "Electronics",
    "Phone": "Electronics",
    "Speaker": "Electronics",
    "Watch": "Electronics",
    "GPS": "Electronics",
    "Calculator": "Electronics",
    "Keyboard": "Electronics",
    "Mouse": "Electronics",
    "Monitor": "Electronics",
    "Printer": "Electronics",
    "Scanner": "Electronics",
    "Projector": "Electronics",
    "Action Camera": "Electronics",
    "GoPro": "Electronics",
    "VR Headset": "Electronics",
    "Game Controller": "Electronics",
    "Joystick": "Electronics",
    "Steering Wheel": "Electronics",
    "Racing Seat": "Electronics",
    "Simulator": "Electronics",
    "Jacket": "Clothing",
    "Shoes": "Clothing",
    "Backpack": "Clothing",
    "Water Bottle": "Food",
    "Snacks": "Food",
    "Tent": "Tools",
    "Sleeping Bag": "Tools",
    "Stove": "Tools",
    "Lantern": "Tools",
    "Water Filter": "Tools",
    "Compass": "Tools",
    "Map": "Tools",
    "Flashlight": "Tools",
    "Rope": "Tools",
    "Tripod": "Tools",
    "Gimbal": "Tools",
    "Binoculars": "Tools",
    "Telescope": "Tools",
    "Microscope": "Tools",
    "Book": "Accessories",
    "Notebook": "Accessories",
    "Sunglasses": "Accessories",
    "First Aid": "Accessories",
    "Batteries": "Accessories",
    "Memory Card": "Accessories",
}


def category_for(name: str) -> str:
    """Catalog category of an item name; unknown names fall into 'Other'."""
    return ITEM_CATALOG.get(name.strip(), "Other")


def _unique_name(rng: random.Random, index: int, used: set[str]) -> str:
    names = list(ITEM_CATALOG)
    if len(used) < len(names):
        choice = rng.choice(names)
        while choice in used:
            choice = rng.choice(names)
        return choice

    # catalog exhausted: suffix a variant number
    base = rng.choice(names)
    suffix = (index - len(names)) // len(names) + 1
    variant = (index - len(names)) % len(names)
    name = f"{base} #{suffix}-{variant}"
    while name in used:
        base = rng.choice(names)
        name = f"{base} #{suffix}-{variant}"
    return name


def generate_items(count: int, seed: Optional[int] = None) -> list[Item]:
    """
    Generate `count` items with unique catalog names.

    Value/weight bands:
      - 30% high:   weight 1-2, value 1500-2499
      - 40% medium: weight 1-3, value 500-1499
      - 30% low:    weight 1-5, value 50-499
    Earlier items get a slight boost towards the better bands. The same seed
    always produces the same items.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    rng = random.Random(seed)
    used: set[str] = set()
    items: list[Item] = []

    for i in range(count):
        name = _unique_name(rng, i, used)
        used.add(name)

        position_factor = i / count
        draw = rng.random() * (1 - position_factor * 0.15)

        if draw < 0.3:
            weight = rng.randint(1, 2)
            value = rng.randint(1500, 2499)
        elif draw < 0.7:
            weight = rng.randint(1, 3)
            value = rng.randint(500, 1499)
        else:
            weight = rng.randint(1, 5)
            value = rng.randint(50, 499)

        items.append(Item(
            id=str(i),
            name=name,
            weight=weight,
            value=value,
            category=category_for(name.split(" #")[0]),
        ))

    return items
