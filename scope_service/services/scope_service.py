"""Scope Resolver.

Answers which label and which locations make up a scope of operation, and
turns an explicit list of location UUIDs into a single scope.
"""
import logging
from typing import List, Optional, Sequence, Set, Tuple

from scope_service.errors import InvalidLocationSet, LocationNotFound
from scope_service.models.location import Location
from scope_service.services.canonicalizer import find_or_create
from scope_service.services.graph.locations import (
    contained_within,
    get_location_by_uuid,
    get_location_details,
    lookup_by_uuids,
)
from scope_service.services.graph.organizations import (
    get_organization_details,
    link_organization_to_location,
)
from scope_service.services.labels import aggregate_label
from scope_service.services.levels import is_subdividable, needs_aggregate_label

logger = logging.getLogger(__name__)


def scope_label_for(location: Location) -> Optional[str]:
    """Display label of the scope represented by `location`.

    Provinces and reference regions are labelled after their contents; a
    location without recorded contents falls back to its own label. A
    composed scope already stores the aggregate of its contents as label.
    """
    if not needs_aggregate_label(location):
        return location.label
    contained = contained_within(location.uri)
    if contained:
        return aggregate_label(contained)
    return location.label


def scope_locations_for(location: Location) -> Set[str]:
    """UUIDs of the locations making up the scope of `location`."""
    if not is_subdividable(location):
        return {location.uuid}
    return {contained.uuid for contained in contained_within(location.uri)}


def scope_for_explicit_set_with_status(uuids: Sequence[str]) -> Tuple[Location, bool]:
    """Like scope_for_explicit_set, also reporting whether a composite was created."""
    uuids = list(uuids or [])
    if not uuids:
        raise InvalidLocationSet("No UUIDs provided.")
    resolved = lookup_by_uuids(uuids)
    if len(resolved) != len(uuids):
        raise InvalidLocationSet("Not all provided UUIDs identify a known location.")
    return find_or_create(resolved)


def scope_for_explicit_set(uuids: Sequence[str]) -> Location:
    """The location whose direct contents are exactly the given locations."""
    location, _ = scope_for_explicit_set_with_status(uuids)
    return location


def _scope_of_organization(organization_uuid: str) -> Location:
    organization = get_organization_details(organization_uuid)
    if organization is None:
        raise LocationNotFound(f"Organization {organization_uuid} not found")
    if not organization.location:
        raise LocationNotFound(f"Organization {organization_uuid} has no scope of operation")
    details = get_location_details([organization.location])
    if not details:
        raise LocationNotFound(f"Scope {organization.location} of organization {organization_uuid} not found")
    return details[0]


def _location(location_uuid: str) -> Location:
    location = get_location_by_uuid(location_uuid)
    if location is None:
        raise LocationNotFound(f"Location {location_uuid} not found")
    return location


def label_for_organization(organization_uuid: str) -> Optional[str]:
    return scope_label_for(_scope_of_organization(organization_uuid))


def locations_for_organization(organization_uuid: str) -> List[str]:
    return sorted(scope_locations_for(_scope_of_organization(organization_uuid)))


def label_for_location(location_uuid: str) -> Optional[str]:
    return scope_label_for(_location(location_uuid))


def locations_for_location(location_uuid: str) -> List[str]:
    return sorted(scope_locations_for(_location(location_uuid)))


def set_locations_as_scope(organization_uuid: str, uuids: Sequence[str]) -> Tuple[Location, bool]:
    """Resolve `uuids` to a scope and make it the organization's scope."""
    organization = get_organization_details(organization_uuid)
    if organization is None:
        raise LocationNotFound(f"Organization {organization_uuid} not found")
    scope, created = scope_for_explicit_set_with_status(uuids)
    link_organization_to_location(organization.uri, scope.uri)
    logger.info("Scope of organization %s set to %s", organization.uri, scope.uri)
    return scope, created
