from fastapi.testclient import TestClient

from scope_service.main import app


client = TestClient(app)


def test_index():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == "Hello from scope-of-operation-service!"


def test_label_for_scope(flanders):
    flanders.add_organization("org-1", scope=flanders.by_uuid("p-wvl"))
    resp = client.get("/label-for-scope/org-1")
    assert resp.status_code == 200
    assert resp.json() == "Bruges, Ostend"


def test_label_for_scope_unknown_organization(flanders):
    resp = client.get("/label-for-scope/nope")
    assert resp.status_code == 404


def test_locations_in_scope(flanders):
    flanders.add_organization("org-1", scope=flanders.by_uuid("m-ghent"))
    resp = client.get("/locations-in-scope/org-1")
    assert resp.status_code == 200
    assert resp.json() == ["m-ghent"]


def test_location_keyed_routes(flanders):
    assert client.get("/locations/p-wvl/scope-label").json() == "Bruges, Ostend"
    assert client.get("/locations/p-wvl/locations-in-scope").json() == ["m-bruges", "m-ostend"]
    assert client.get("/locations/nope/scope-label").status_code == 404


def test_scope_for_locations_creates_then_reuses(flanders):
    body = {"data": {"locations": ["m-ghent", "m-bruges"]}}
    first = client.post("/scope-for-locations", json=body)
    assert first.status_code == 201
    second = client.post("/scope-for-locations", json={"data": {"locations": ["m-bruges", "m-ghent"]}})
    assert second.status_code == 200
    assert second.json() == first.json()
    assert flanders.by_uuid(first.json()).label == "Bruges, Ghent"


def test_scope_for_locations_validation(flanders):
    assert client.post("/scope-for-locations", json={"data": {"locations": []}}).status_code == 400
    resp = client.post("/scope-for-locations", json={"data": {"locations": ["m-ghent", "unknown"]}})
    assert resp.status_code == 400
    assert client.post("/scope-for-locations", json={}).status_code == 422


def test_set_locations_as_scope(flanders):
    org = flanders.add_organization("org-9")
    resp = client.post("/set-locations-as-scope/org-9", json={"data": {"locations": ["m-ghent"]}})
    assert resp.status_code == 200
    assert resp.json() == "m-ghent"
    assert flanders.scopes[org.uri] == flanders.by_uuid("m-ghent").uri

    missing = client.post("/set-locations-as-scope/nope", json={"data": {"locations": ["m-ghent"]}})
    assert missing.status_code == 404


def test_store_failure_is_not_exposed(flanders):
    flanders.add_organization("org-1", scope=flanders.by_uuid("p-wvl"))
    flanders.fail_on.add("contained_within")
    resp = client.get("/label-for-scope/org-1")
    assert resp.status_code == 500
    assert "contained_within" not in resp.json()["detail"]


def test_set_locations_as_scope_creates_composite(flanders):
    org = flanders.add_organization("org-10", scope=flanders.by_uuid("m-ghent"))
    resp = client.post("/set-locations-as-scope/org-10", json={"data": {"locations": ["m-ghent", "m-ostend"]}})
    assert resp.status_code == 201
    scope = flanders.by_uuid(resp.json())
    assert scope.label == "Ghent, Ostend"
    assert flanders.scopes[org.uri] == scope.uri


def test_set_locations_as_scope_validation(flanders):
    flanders.add_organization("org-11")
    empty = client.post("/set-locations-as-scope/org-11", json={"data": {"locations": []}})
    assert empty.status_code == 400
    unknown = client.post("/set-locations-as-scope/org-11", json={"data": {"locations": ["m-ghent", "unknown"]}})
    assert unknown.status_code == 400


def test_post_routes_map_store_failures_to_500(flanders):
    flanders.add_organization("org-12")
    body = {"data": {"locations": ["m-ghent", "m-bruges"]}}

    flanders.fail_on.add("create_location")
    resp = client.post("/scope-for-locations", json=body)
    assert resp.status_code == 500
    assert "create_location" not in resp.json()["detail"]

    flanders.fail_on = {"link_organization_to_location"}
    resp = client.post("/set-locations-as-scope/org-12", json=body)
    assert resp.status_code == 500
    assert "link_organization_to_location" not in resp.json()["detail"]
