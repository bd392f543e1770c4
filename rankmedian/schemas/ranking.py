"""Aggregation result schemas.

Defines the per-item tally (VotingResult), the dense expert×item
RankingMatrix, the tie-preserving MedianResult for each of the four
consensus objectives (RankingMedians), and the ConsensusBundle returned
to callers, together with the derived statistics and export records.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from rankmedian.schemas.catalog import Heuristic, Item


class RankingMethod(StrEnum):
    """Consensus objective: a distance metric paired with sum or max."""

    COOK_SAYFORD = "cook_sayford"
    GV = "gv"
    KEMENY_SNELL = "kemeny_snell"
    VG = "vg"


METHOD_LABELS: dict[RankingMethod, str] = {
    RankingMethod.COOK_SAYFORD: "Cook-Sayford",
    RankingMethod.GV: "GV",
    RankingMethod.KEMENY_SNELL: "Kemeny-Snell",
    RankingMethod.VG: "VG",
}

METHOD_DESCRIPTIONS: dict[RankingMethod, str] = {
    RankingMethod.COOK_SAYFORD: "Minimizes the sum of Cook distances to all expert rankings.",
    RankingMethod.GV: "Minimizes the largest Cook distance to any single expert ranking.",
    RankingMethod.KEMENY_SNELL: "Minimizes the sum of Hamming distances between pairwise codes.",
    RankingMethod.VG: "Minimizes the largest Hamming distance to any single expert ranking.",
}


def _empty_rank_counts() -> dict[int, int]:
    return {1: 0, 2: 0, 3: 0}


class VotingResult(BaseModel):
    """Tally for a single catalog item."""

    item_id: str = Field(description="Catalog identifier of the item")
    title: str = Field(description="Item title")
    artist: str = Field(default="", description="Item artist")
    total_points: int = Field(default=0, description="Sum of (4 - rank) over all votes")
    vote_count: int = Field(default=0, description="Number of votes the item received")
    rank_counts: dict[int, int] = Field(
        default_factory=_empty_rank_counts,
        description="Rank (1, 2, 3) → how many times the item was placed there",
    )


class RankingMatrix(BaseModel):
    """Expert×item matrix of assigned ranks.

    Columns follow ``items`` (sorted by id). A cell holds the rank the
    expert gave that item, or 0 when the expert did not rank it.
    """

    items: list[Item] = Field(
        default_factory=list, description="Retained items in canonical column order",
    )
    expert_ids: list[str] = Field(
        default_factory=list, description="Expert id for each row, in row order",
    )
    rows: list[list[int]] = Field(
        default_factory=list, description="One row of ranks per expert",
    )
    truncated: bool = Field(
        default=False, description="Whether columns were pruned by the item cap",
    )
    dropped_items: list[Item] = Field(
        default_factory=list, description="Items removed by the item cap",
    )

    @property
    def size(self) -> int:
        """Number of columns (retained items)."""
        return len(self.items)


class MedianResult(BaseModel):
    """Every permutation achieving the optimum for one objective."""

    rankings: list[list[int]] = Field(
        default_factory=list,
        description="Tied optimal permutations (slot index → rank value)",
    )
    distance: int = Field(default=0, description="Optimal objective value shared by all rankings")


class RankingMedians(BaseModel):
    """Median results for all four consensus objectives."""

    cook_sayford: MedianResult = Field(description="Minimum sum of Cook distances")
    gv: MedianResult = Field(description="Minimum maximum Cook distance")
    kemeny_snell: MedianResult = Field(description="Minimum sum of Hamming distances")
    vg: MedianResult = Field(description="Minimum maximum Hamming distance")

    def get(self, method: RankingMethod) -> MedianResult:
        return getattr(self, RankingMethod(method).value)


class ItemRankings(BaseModel):
    """Median permutations mapped back onto catalog items.

    Each entry is one ordering: index 0 holds the item ranked first.
    """

    cook_sayford: list[list[Item]] = Field(default_factory=list)
    gv: list[list[Item]] = Field(default_factory=list)
    kemeny_snell: list[list[Item]] = Field(default_factory=list)
    vg: list[list[Item]] = Field(default_factory=list)

    def get(self, method: RankingMethod) -> list[list[Item]]:
        return getattr(self, RankingMethod(method).value)


class ConsensusBundle(BaseModel):
    """Everything produced by one consensus run."""

    heuristic: Heuristic = Field(description="Heuristic used to select items")
    filtered_items: list[Item] = Field(
        default_factory=list, description="Items retained by the heuristic, in heuristic order",
    )
    ranking_matrix: RankingMatrix = Field(
        default_factory=RankingMatrix, description="Matrix built from the retained items",
    )
    usable_rows: list[list[int]] = Field(
        default_factory=list, description="Matrix rows handed to the consensus search",
    )
    reference_ranking: list[int] = Field(
        default_factory=list, description="Random reference permutation (informational)",
    )
    distances: list[int] = Field(
        default_factory=list,
        description="Cook distance from the reference to each usable row",
    )
    medians: RankingMedians | None = Field(
        default=None, description="Consensus results, or None when data is insufficient",
    )
    item_rankings: ItemRankings = Field(
        default_factory=ItemRankings, description="Median permutations as item orderings",
    )
    notices: list[str] = Field(
        default_factory=list, description="Non-fatal diagnostics (truncation, empty data)",
    )

    @property
    def has_medians(self) -> bool:
        return self.medians is not None


class ItemAppearance(BaseModel):
    """How often an item sits in the top three of the median rankings."""

    item: Item
    counts: dict[int, int] = Field(default_factory=_empty_rank_counts)

    @property
    def top3_total(self) -> int:
        return sum(self.counts.values())


class ConsensusStatistics(BaseModel):
    """Agreement between the four consensus methods."""

    total_methods: int = Field(default=len(RankingMethod))
    top_position_agreement: int = Field(
        default=0, description="Items whose first-place count equals the number of methods",
    )
    top3_agreement: int = Field(
        default=0, description="Items whose top-three count reaches the number of methods",
    )
    distances: dict[RankingMethod, int] = Field(
        default_factory=dict, description="Optimal objective value per method",
    )
    tie_counts: dict[RankingMethod, int] = Field(
        default_factory=dict, description="Number of tied optimal rankings per method",
    )
    leaders: list[ItemAppearance] = Field(
        default_factory=list, description="Most frequent top-three items, best first",
    )


class ExportRecord(BaseModel):
    """One exported (method, position, item) row."""

    method: RankingMethod
    variant: int = Field(default=1, description="1-based index within the tie set")
    position: int = Field(ge=1)
    title: str
    artist: str = ""
    genre: str = ""
