from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Item(BaseModel):
    """Item that can be packed into at most one container."""

    id: str = Field(description="Unique identifier for the item")
    name: str = Field(min_length=1, description="Item name, matched against synergy rules")
    weight: float = Field(gt=0, description="Weight consumed from a container's capacity")
    value: float = Field(gt=0, description="Base value earned when the item is packed")
    category: str = Field(default="Other", description="Descriptive category (not used in solving)")

    @property
    def ratio(self) -> float:
        return self.value / self.weight


class SynergyRule(BaseModel):
    """Bonus awarded once per container when all named items share it."""

    items: frozenset[str] = Field(min_length=1, description="Required item names")
    bonus: float = Field(ge=0, description="Bonus value added to the container")


class ContainerResult(BaseModel):
    """Packed contents and totals of a single container."""

    items: list[Item] = Field(default_factory=list)
    total_weight: float = 0.0
    # base value of the items plus the container's synergy bonus
    total_value: float = 0.0
    capacity: float = Field(gt=0, description="Container capacity")


class SearchStats(BaseModel):
    """Counters collected by the branch-and-bound search."""

    nodes: int = 0
    leaves: int = 0
    pruned: int = 0
    skips_pruned: int = 0
    improvements: int = 0
    cancelled: bool = False


class Solution(BaseModel):
    """Standard result returned by solvers."""

    containers: list[ContainerResult] = Field(default_factory=list)
    total_value: float = 0.0
    universe_count: int = Field(default=0, ge=0, description="(containers + 1) ** items")
    runtime_ms: float = 0.0
    # input item index -> container index, None when left out
    assignment: list[Optional[int]] = Field(default_factory=list)
    method: str = "exact"
    stats: Optional[SearchStats] = None
