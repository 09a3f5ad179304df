"""Data schemas for input/output operations."""

from typing import List, Optional

from pydantic import BaseModel, Field

from pack_optimizer.catalog import category_for, generate_items
from pack_optimizer.models import Item, SynergyRule
from pack_optimizer.synergy import DEFAULT_SYNERGIES


class ItemSchema(BaseModel):
    """Schema for an item."""
    id: Optional[str] = Field(None, description="Item id; defaults to its position in the list")
    name: str = Field(min_length=1, description="Item name")
    weight: float = Field(gt=0, description="Weight of the item")
    value: float = Field(gt=0, description="Value of the item")
    category: Optional[str] = Field(None, description="Category; looked up in the catalog when omitted")


class GenerateSchema(BaseModel):
    """Schema for generated demo items."""
    count: int = Field(ge=0, le=1000, description="Number of items to generate")
    seed: Optional[int] = Field(None, description="Random seed for reproducible items")


class SolveRequestSchema(BaseModel):
    """Schema for a solve request."""
    capacities: List[float] = Field(description="Container capacities")
    items: Optional[List[ItemSchema]] = Field(None, description="Items to pack")
    generate: Optional[GenerateSchema] = Field(None, description="Generate items instead of listing them")
    synergies: Optional[List[SynergyRule]] = Field(None, description="Synergy rules; defaults to the preset table")

    def to_items(self) -> List[Item]:
        if self.items is not None:
            return [
                Item(
                    id=item.id if item.id is not None else str(idx),
                    name=item.name,
                    weight=item.weight,
                    value=item.value,
                    category=item.category or category_for(item.name),
                )
                for idx, item in enumerate(self.items)
            ]
        if self.generate is not None:
            return generate_items(self.generate.count, seed=self.generate.seed)
        return []

    def to_rules(self) -> List[SynergyRule]:
        return list(DEFAULT_SYNERGIES) if self.synergies is None else list(self.synergies)
