"""Pydantic models for Challonge v2 (JSON:API) responses.

Only the shape of the envelope is enforced. Record fields are read
leniently: a null or unparseable value becomes "missing" instead of failing
validation for the whole tournament.
"""

from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

# Challonge sends ids as strings, older fixtures and some endpoints as numbers
ResourceId = Union[str, int]

_DATETIME = TypeAdapter(datetime)
_NUMBER = TypeAdapter(float)


def _lenient(adapter: TypeAdapter, value: Any) -> Any:
    if value is None:
        return None
    try:
        return adapter.validate_python(value)
    except ValidationError:
        return None


def _empty_if_null(value: Any) -> Any:
    return {} if value is None else value


class ChallongeResourceRef(BaseModel):
    """Reference to another resource ({"id": ..., "type": ...})"""

    id: Optional[ResourceId] = None
    type: Optional[str] = None


class ChallongeRelationship(BaseModel):
    """A to-one relationship; data is null when the slot is empty"""

    data: Optional[ChallongeResourceRef] = None


class ChallongeMatchRelationships(BaseModel):
    """Participants and station linked to a match"""

    player1: Optional[ChallongeRelationship] = None
    player2: Optional[ChallongeRelationship] = None
    station: Optional[ChallongeRelationship] = None


class ChallongeMatchTimestamps(BaseModel):
    """Lifecycle timestamps of a match"""

    startedAt: Optional[datetime] = None
    underwayAt: Optional[datetime] = None

    @field_validator("startedAt", "underwayAt", mode="before")
    @classmethod
    def unparseable_is_missing(cls, value: Any) -> Any:
        return _lenient(_DATETIME, value)


class ChallongeMatchAttributes(BaseModel):
    """Match attributes"""

    state: Optional[str] = None
    suggestedPlayOrder: Optional[float] = None
    timestamps: Optional[ChallongeMatchTimestamps] = None

    @field_validator("suggestedPlayOrder", mode="before")
    @classmethod
    def unparseable_is_missing(cls, value: Any) -> Any:
        return _lenient(_NUMBER, value)


class ChallongeMatch(BaseModel):
    """A match record"""

    id: ResourceId
    type: Optional[str] = None
    attributes: ChallongeMatchAttributes = Field(
        default_factory=ChallongeMatchAttributes
    )
    relationships: ChallongeMatchRelationships = Field(
        default_factory=ChallongeMatchRelationships
    )

    null_is_empty = field_validator("attributes", "relationships", mode="before")(
        _empty_if_null
    )

    def related_id(self, name: str) -> str | None:
        """String id of the player1/player2/station relationship, if any"""
        relationship: ChallongeRelationship | None = getattr(
            self.relationships, name
        )
        if relationship and relationship.data and relationship.data.id is not None:
            return str(relationship.data.id)
        return None


class ChallongeNamedAttributes(BaseModel):
    """Attributes shared by participants and stations"""

    name: Optional[str] = None


class ChallongeIncluded(BaseModel):
    """A sideloaded resource (participants ride along with matches)"""

    id: ResourceId
    type: Optional[str] = None
    attributes: ChallongeNamedAttributes = Field(
        default_factory=ChallongeNamedAttributes
    )

    null_is_empty = field_validator("attributes", mode="before")(_empty_if_null)


class ChallongeStation(BaseModel):
    """A station (table/court) record"""

    id: ResourceId
    type: Optional[str] = None
    attributes: ChallongeNamedAttributes = Field(
        default_factory=ChallongeNamedAttributes
    )

    null_is_empty = field_validator("attributes", mode="before")(_empty_if_null)


class ChallongeMatchesResponse(BaseModel):
    """Response of GET /tournaments/{id}/matches.json"""

    data: List[ChallongeMatch]
    included: List[ChallongeIncluded] = Field(default_factory=list)

    @field_validator("included", mode="before")
    @classmethod
    def null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ChallongeStationsResponse(BaseModel):
    """Response of GET /tournaments/{id}/stations.json"""

    data: List[ChallongeStation]
