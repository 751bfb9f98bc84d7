"""Location Directory: Cypher access to Location nodes and WITHIN edges.

Schema: (:Location {uri, uuid, label, level}) with one-level containment
edges (contained)-[:WITHIN]->(container). Nodes lacking uuid, label or
level are not considered location records.
"""
import logging
import uuid as uuid_lib
from typing import Iterable, List, Optional, Set

from pydantic import ValidationError

from scope_service.config import get_settings
from scope_service.db.neo4j_connector import run_cypher
from scope_service.errors import StoreError
from scope_service.models.location import Level, Location

logger = logging.getLogger(__name__)

_LOCATION_FIELDS = "l.uri AS uri, l.uuid AS uuid, l.label AS label, l.level AS level"
_IS_RECORD = "l.uuid IS NOT NULL AND l.label IS NOT NULL AND l.level IS NOT NULL"


def _to_location(row: dict) -> Location:
    try:
        return Location.model_validate(row)
    except ValidationError as exc:
        invalid = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise StoreError(
            f"Location {row.get('uri')!r} is not a valid location record (invalid: {', '.join(invalid)})",
            operation="decode_location",
        ) from exc


def location_uris_for_uuids(uuids: Iterable[str]) -> List[str]:
    """Find the URIs of the locations with the given UUIDs.

    UUIDs without a corresponding location are ignored. URIs of locations
    don't share a single prefix, so they cannot be derived from the UUID.
    """
    uuids = list(uuids)
    if not uuids:
        return []
    q = (
        "MATCH (l:Location) "
        f"WHERE l.uuid IN $uuids AND {_IS_RECORD} "
        "RETURN DISTINCT l.uri AS uri"
    )
    rows = run_cypher(q, {"uuids": uuids}, operation="location_uris_for_uuids")
    if not rows:
        logger.debug("No locations found for UUIDs %s", uuids)
    return [r["uri"] for r in rows if r.get("uri")]


def get_location_details(uris: Iterable[str]) -> List[Location]:
    """Return the records of the given locations; unknown URIs are dropped."""
    uris = list(uris)
    if not uris:
        return []
    q = (
        "MATCH (l:Location) "
        f"WHERE l.uri IN $uris AND {_IS_RECORD} "
        f"RETURN DISTINCT {_LOCATION_FIELDS}"
    )
    rows = run_cypher(q, {"uris": uris}, operation="get_location_details")
    return [_to_location(r) for r in rows]


def lookup_by_uuids(uuids: Iterable[str]) -> List[Location]:
    """Resolve UUIDs to location records, silently dropping unknown ones."""
    return get_location_details(location_uris_for_uuids(uuids))


def get_location_by_uuid(location_uuid: str) -> Optional[Location]:
    found = lookup_by_uuids([location_uuid])
    return found[0] if found else None


def contained_within(uri: str) -> List[Location]:
    """Return every location with a direct WITHIN edge to `uri`."""
    q = (
        "MATCH (l:Location)-[:WITHIN]->(:Location {uri: $uri}) "
        f"WHERE {_IS_RECORD} "
        f"RETURN DISTINCT {_LOCATION_FIELDS}"
    )
    rows = run_cypher(q, {"uri": uri}, operation="contained_within")
    if not rows:
        logger.debug("No locations found within %s", uri)
    return [_to_location(r) for r in rows]


def candidates_with_contained_count(count: int) -> List[str]:
    """URIs of the locations that directly contain exactly `count` locations.

    Ordered by URI so that callers iterate candidates deterministically.
    """
    q = (
        "MATCH (m:Location)-[:WITHIN]->(c:Location) "
        "WITH c, count(DISTINCT m) AS contained "
        "WHERE contained = $count "
        "RETURN c.uri AS uri "
        "ORDER BY uri"
    )
    rows = run_cypher(q, {"count": count}, operation="candidates_with_contained_count")
    return [r["uri"] for r in rows if r.get("uri")]


def contained_uris(uri: str) -> Set[str]:
    """The raw set of URIs directly contained in `uri`."""
    q = (
        "MATCH (m:Location)-[:WITHIN]->(:Location {uri: $uri}) "
        "RETURN collect(DISTINCT m.uri) AS uris"
    )
    rows = run_cypher(q, {"uri": uri}, operation="contained_uris")
    if not rows:
        return set()
    return {u for u in (rows[0].get("uris") or []) if u}


def create_location(label: str, level: Level) -> Location:
    """Create a new Location node with a fresh identifier and return it.

    Raises StoreError if the store does not confirm the insert.
    """
    settings = get_settings()
    new_uuid = str(uuid_lib.uuid4())
    uri = f"{settings.location_uri_base}{new_uuid}"
    q = (
        "CREATE (l:Location {uri: $uri, uuid: $uuid, label: $label, level: $level, "
        "creator: $creator, created: datetime()}) "
        f"RETURN {_LOCATION_FIELDS}"
    )
    rows = run_cypher(
        q,
        {
            "uri": uri,
            "uuid": new_uuid,
            "label": label,
            "level": level.value,
            "creator": settings.creator_uri,
        },
        operation="create_location",
    )
    if not rows:
        raise StoreError(f"Location {uri} was not created", operation="create_location")
    return _to_location(rows[0])


def link_contained(container: str, contained: Iterable[str]) -> int:
    """Add a WITHIN edge from each contained location to `container`.

    Returns the number of edges the store reports as present afterwards.
    """
    contained = sorted(set(contained))
    if not contained:
        return 0
    q = (
        "MATCH (c:Location {uri: $container}) "
        "UNWIND $contained AS member_uri "
        "MATCH (m:Location {uri: member_uri}) "
        "MERGE (m)-[:WITHIN]->(c) "
        "RETURN count(m) AS linked"
    )
    rows = run_cypher(q, {"container": container, "contained": contained}, operation="link_contained")
    linked = (rows[0].get("linked") if rows else 0) or 0
    if linked != len(contained):
        raise StoreError(
            f"Linked {linked} of {len(contained)} locations to {container}",
            operation="link_contained",
        )
    return linked
