from typing import Optional
from scope_service.db.neo4j_connector import run_cypher
from scope_service.errors import StoreError
from scope_service.models.location import Organization


def get_organization_details(organization_uuid: str) -> Optional[Organization]:
    """Fetch an organization and the URI of its current scope, if any."""
    q = (
        "MATCH (o:Organization {uuid: $uuid}) "
        "OPTIONAL MATCH (o)-[:HAS_SCOPE]->(l:Location) "
        "RETURN o.uri AS uri, o.uuid AS uuid, l.uri AS location "
        "LIMIT 1"
    )
    res = run_cypher(q, {"uuid": organization_uuid}, operation="get_organization_details")
    if not res:
        return None
    return Organization.model_validate(res[0])


def link_organization_to_location(organization_uri: str, location_uri: str) -> dict:
    """Make `location_uri` the organization's only scope of operation.

    The current scope is only removed once both nodes are known to exist.
    Raises StoreError if the store does not confirm the link.
    """
    q = (
        "MATCH (o:Organization {uri: $organization}) "
        "MATCH (l:Location {uri: $location}) "
        "OPTIONAL MATCH (o)-[old:HAS_SCOPE]->(:Location) "
        "DELETE old "
        "WITH DISTINCT o, l "
        "MERGE (o)-[:HAS_SCOPE]->(l) "
        "RETURN o.uri AS organization, l.uri AS location"
    )
    res = run_cypher(
        q,
        {"organization": organization_uri, "location": location_uri},
        operation="link_organization_to_location",
    )
    if not res:
        raise StoreError(
            f"Organization {organization_uri} was not linked to {location_uri}",
            operation="link_organization_to_location",
        )
    return res[0]
