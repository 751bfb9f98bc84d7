import pytest

from scope_service.config import get_settings
from scope_service.errors import StoreError
from scope_service.models.location import Level, Location, Organization


class FakeGraph:
    """In-memory stand-in for the Location Directory and organization store."""

    def __init__(self):
        self.locations = {}
        self.within = {}
        self.organizations = {}
        self.scopes = {}
        self.created = []
        self.fail_on = set()

    # setup helpers
    def add(self, uuid: str, label: str, level: Level, contains=()) -> Location:
        loc = Location(uri=f"http://example.org/locations/{uuid}", uuid=uuid, label=label, level=level)
        self.locations[loc.uri] = loc
        if contains:
            self.within[loc.uri] = {c.uri for c in contains}
        return loc

    def add_organization(self, uuid: str, scope: Location | None = None) -> Organization:
        org = Organization(uri=f"http://example.org/organizations/{uuid}", uuid=uuid)
        self.organizations[uuid] = org
        if scope is not None:
            self.scopes[org.uri] = scope.uri
        return org

    def _check(self, operation):
        if operation in self.fail_on:
            raise StoreError(f"Graph store operation '{operation}' failed", operation=operation)

    def by_uuid(self, uuid: str) -> Location:
        return next(l for l in self.locations.values() if l.uuid == uuid)

    # directory
    def location_uris_for_uuids(self, uuids):
        wanted = set(uuids)
        return [l.uri for l in self.locations.values() if l.uuid in wanted]

    def get_location_details(self, uris):
        self._check("get_location_details")
        return [self.locations[u] for u in dict.fromkeys(uris) if u in self.locations]

    def lookup_by_uuids(self, uuids):
        self._check("lookup_by_uuids")
        return self.get_location_details(self.location_uris_for_uuids(uuids))

    def get_location_by_uuid(self, uuid):
        found = self.lookup_by_uuids([uuid])
        return found[0] if found else None

    def contained_within(self, uri):
        self._check("contained_within")
        return [self.locations[u] for u in sorted(self.within.get(uri, ()))]

    def candidates_with_contained_count(self, count):
        return sorted(uri for uri, members in self.within.items() if len(members) == count)

    def contained_uris(self, uri):
        return set(self.within.get(uri, ()))

    def create_location(self, label, level):
        self._check("create_location")
        uuid = f"composed-{len(self.created) + 1}"
        loc = self.add(uuid, label, level)
        self.created.append(loc)
        return loc

    def link_contained(self, container, contained):
        self._check("link_contained")
        self.within.setdefault(container, set()).update(contained)
        return len(set(contained))

    # organizations
    def get_organization_details(self, uuid):
        org = self.organizations.get(uuid)
        if org is None:
            return None
        return org.model_copy(update={"location": self.scopes.get(org.uri)})

    def link_organization_to_location(self, organization_uri, location_uri):
        self._check("link_organization_to_location")
        self.scopes[organization_uri] = location_uri
        return {"organization": organization_uri, "location": location_uri}


_PATCHES = {
    "scope_service.services.canonicalizer": (
        "candidates_with_contained_count",
        "contained_uris",
        "create_location",
        "get_location_details",
        "link_contained",
    ),
    "scope_service.services.scope_service": (
        "contained_within",
        "get_location_by_uuid",
        "get_location_details",
        "lookup_by_uuids",
        "get_organization_details",
        "link_organization_to_location",
    ),
}


@pytest.fixture
def graph(monkeypatch):
    fake = FakeGraph()
    for module, names in _PATCHES.items():
        for name in names:
            monkeypatch.setattr(f"{module}.{name}", getattr(fake, name))
    return fake


@pytest.fixture
def flanders(graph):
    """Two municipalities in a province, plus a district."""
    ghent = graph.add("m-ghent", "Ghent", Level.MUNICIPALITY)
    bruges = graph.add("m-bruges", "Bruges", Level.MUNICIPALITY)
    ostend = graph.add("m-ostend", "Ostend", Level.MUNICIPALITY)
    graph.add("d-deurne", "Deurne", Level.DISTRICT)
    graph.add("p-wvl", "West-Vlaanderen", Level.PROVINCE, contains=[bruges, ostend])
    graph.add("r-empty", "Regio Leeg", Level.REFERENCE_REGION)
    return graph


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; re-read them for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
