"""rankmedian schema definitions.

All Pydantic v2 models shared by the tally, matrix, search and export layers.
"""

from rankmedian.schemas.catalog import (
    Expert,
    ExpertRole,
    Heuristic,
    Item,
    Vote,
)
from rankmedian.schemas.engine import (
    MAX_SEARCH_ITEMS,
    Dataset,
    EngineConfig,
)
from rankmedian.schemas.ranking import (
    METHOD_DESCRIPTIONS,
    METHOD_LABELS,
    ConsensusBundle,
    ConsensusStatistics,
    ExportRecord,
    ItemAppearance,
    ItemRankings,
    MedianResult,
    RankingMatrix,
    RankingMedians,
    RankingMethod,
    VotingResult,
)

__all__ = [
    "MAX_SEARCH_ITEMS",
    "METHOD_DESCRIPTIONS",
    "METHOD_LABELS",
    "ConsensusBundle",
    "ConsensusStatistics",
    "Dataset",
    "EngineConfig",
    "Expert",
    "ExpertRole",
    "ExportRecord",
    "Heuristic",
    "Item",
    "ItemAppearance",
    "ItemRankings",
    "MedianResult",
    "RankingMatrix",
    "RankingMedians",
    "RankingMethod",
    "Vote",
    "VotingResult",
]
