"""Engine configuration and dataset schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rankmedian.schemas.catalog import Expert, Heuristic, Item, Vote

# Hard ceiling on columns handed to the exhaustive search (7! = 5040 permutations)
MAX_SEARCH_ITEMS = 7


class EngineConfig(BaseModel):
    """Tunable behaviour of the consensus engine.

    Loaded from the ``[engine]`` table of defaults.toml.
    """

    max_items: int = Field(
        default=MAX_SEARCH_ITEMS,
        ge=1,
        le=MAX_SEARCH_ITEMS,
        description="Items kept for the permutation search; extra items are pruned",
    )
    allow_partial_rows: bool = Field(
        default=False,
        description="Search over rows with unranked (0) cells instead of complete rows only",
    )
    reference_seed: int | None = Field(
        default=None,
        description="Seed for the random reference ranking (None = fresh entropy)",
    )
    default_heuristic: Heuristic = Field(
        default=Heuristic.STANDARD, description="Heuristic used when none is given",
    )


class Dataset(BaseModel):
    """Items, votes and experts loaded from a single file."""

    items: list[Item] = Field(default_factory=list)
    votes: list[Vote] = Field(default_factory=list)
    experts: list[Expert] = Field(default_factory=list)
