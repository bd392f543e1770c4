"""Catalog and ballot schemas.

Defines the read-only input records consumed by the engine: catalog
items, individual votes, the experts who cast them, and the named
selection heuristics.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Heuristic(StrEnum):
    """Named item selection heuristic applied before aggregation."""

    STANDARD = "standard"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    H7 = "h7"


class ExpertRole(StrEnum):
    """Whether a participant casts ballots or only reviews results."""

    EXPERT = "expert"
    TEACHER = "teacher"


class Item(BaseModel):
    """A single catalog entry that participants can rank."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Stable catalog identifier")
    title: str = Field(description="Display title")
    artist: str = Field(default="", description="Performing artist")
    genre: str = Field(default="", description="Genre label")


class Vote(BaseModel):
    """One ranked choice: a voter placed an item 1st, 2nd or 3rd."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    voter_id: str = Field(
        validation_alias=AliasChoices("voter_id", "expert_id"),
        description="Identifier of the expert who cast the vote",
    )
    item_id: str = Field(
        validation_alias=AliasChoices("item_id", "song_id"),
        description="Identifier of the ranked item",
    )
    rank: int = Field(ge=1, le=3, description="Choice position (1 = first choice)")


class Expert(BaseModel):
    """A panel participant."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Participant identifier")
    name: str = Field(default="", description="Display name")
    role: ExpertRole = Field(
        default=ExpertRole.EXPERT,
        description="'expert' rows enter the ranking matrix, 'teacher' rows never do",
    )
