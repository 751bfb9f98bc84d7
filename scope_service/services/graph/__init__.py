"""Graph store access for locations and organizations.

All functions are re-exported at package level.
"""
from .locations import (
    location_uris_for_uuids,
    get_location_details,
    lookup_by_uuids,
    get_location_by_uuid,
    contained_within,
    candidates_with_contained_count,
    contained_uris,
    create_location,
    link_contained,
)
from .organizations import get_organization_details, link_organization_to_location

__all__ = [
    # locations (read)
    'location_uris_for_uuids','get_location_details','lookup_by_uuids','get_location_by_uuid',
    'contained_within','candidates_with_contained_count','contained_uris',
    # locations (write)
    'create_location','link_contained',
    # organizations
    'get_organization_details','link_organization_to_location',
]
