from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class Level(str, Enum):
    """Hierarchy level of a location.

    The values are the strings stored on Location nodes and are fixed by
    the data the service consumes; the set is closed.
    """

    DISTRICT = "District"
    MUNICIPALITY = "Gemeente"
    REFERENCE_REGION = "Referentieregio"
    PROVINCE = "Provincie"
    COMPOSED_SCOPE = "Samengesteld werkingsgebied"


class Location(BaseModel):
    uri: str = Field(..., description="Stable global identifier of the location")
    uuid: str = Field(..., description="Externally exposed short identifier")
    label: str = Field(..., description="Display label")
    level: Level

    model_config = {"frozen": True}


class Organization(BaseModel):
    uri: str
    uuid: str
    location: Optional[str] = Field(None, description="URI of the current scope of operation")


class LocationUuids(BaseModel):
    locations: List[str] = Field(default_factory=list, description="UUIDs of the locations in the scope")


class ScopeForLocationsRequest(BaseModel):
    """Body of the explicit-set routes: {"data": {"locations": ["UUID1", ...]}}."""

    data: LocationUuids
