"""Set Canonicalizer.

Finds, or creates, the single composed scope whose direct contents are
exactly a given set of locations. Lookup and creation are separate store
calls with no lock around them: two concurrent requests for the same new
set may both create a composite. Such duplicates are harmless for later
lookups. A failure between creating the location and linking its members
leaves a composite without contents, which never matches a lookup.
"""
import logging
from typing import Collection, Optional, Tuple

from scope_service.models.location import Level, Location
from scope_service.services.graph.locations import (
    candidates_with_contained_count,
    contained_uris,
    create_location,
    get_location_details,
    link_contained,
)
from scope_service.services.labels import aggregate_label

logger = logging.getLogger(__name__)


def find_matching_location(members: Collection[Location]) -> Optional[Location]:
    """Return the location whose direct contents equal `members`, if any.

    Candidates are those containing exactly as many locations as there
    are members, checked in URI order. The first exact match wins; other
    exact matches are reported but not returned.
    """
    wanted = {m.uri for m in members}
    matches = [
        candidate
        for candidate in candidates_with_contained_count(len(wanted))
        if contained_uris(candidate) == wanted
    ]
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "Found %d composite locations containing the same %d locations: %s; using %s",
            len(matches), len(wanted), matches, matches[0],
        )
    details = get_location_details([matches[0]])
    return details[0] if details else None


def create_composed_scope(members: Collection[Location]) -> Location:
    """Create a composed scope labelled after, and containing, `members`."""
    label = aggregate_label(members)
    location = create_location(label, Level.COMPOSED_SCOPE)
    link_contained(location.uri, [m.uri for m in members])
    logger.info("Created composed scope %s (%s) containing %d locations", location.uri, label, len(members))
    return location


def find_or_create(members: Collection[Location]) -> Tuple[Location, bool]:
    """Resolve `members` to a single location; also report whether it is new.

    A single member is its own scope. `members` must not be empty.
    """
    members = set(members)
    if not members:
        raise ValueError("Cannot resolve a scope for an empty set of locations")
    if len(members) == 1:
        return next(iter(members)), False
    existing = find_matching_location(members)
    if existing is not None:
        return existing, False
    return create_composed_scope(members), True


def resolve_or_create(members: Collection[Location]) -> Location:
    """Return the location whose direct contents are exactly `members`."""
    location, _ = find_or_create(members)
    return location
