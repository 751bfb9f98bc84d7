from .location import (
    Level,
    Location,
    Organization,
    LocationUuids,
    ScopeForLocationsRequest,
)

__all__ = [
    'Level',
    'Location',
    'Organization',
    'LocationUuids',
    'ScopeForLocationsRequest',
]
