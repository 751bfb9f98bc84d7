import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from scope_service.errors import InvalidLocationSet, LocationNotFound, StoreError
from scope_service.models.location import ScopeForLocationsRequest
from scope_service.services.scope_service import (
    label_for_organization,
    locations_for_organization,
    label_for_location,
    locations_for_location,
    scope_for_explicit_set_with_status,
    set_locations_as_scope,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scope"])


def _store_failure(what: str, exc: StoreError) -> HTTPException:
    logger.exception("Something went wrong while %s (operation: %s)", what, exc.operation)
    return HTTPException(status_code=500, detail=f"Something went wrong while {what}")


@router.get("/")
def read_index():
    return "Hello from scope-of-operation-service!"


@router.get("/label-for-scope/{organization_uuid}")
def api_label_for_scope(organization_uuid: str):
    """Display label of the organization's scope of operation."""
    try:
        return label_for_organization(organization_uuid)
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"retrieving the scope label of organization {organization_uuid}", exc)


@router.get("/locations-in-scope/{organization_uuid}")
def api_locations_in_scope(organization_uuid: str):
    """UUIDs of the locations in the organization's scope of operation."""
    try:
        return locations_for_organization(organization_uuid)
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"retrieving the locations of organization {organization_uuid}", exc)


@router.get("/locations/{location_uuid}/scope-label")
def api_location_scope_label(location_uuid: str):
    try:
        return label_for_location(location_uuid)
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"retrieving the scope label of location {location_uuid}", exc)


@router.get("/locations/{location_uuid}/locations-in-scope")
def api_location_locations_in_scope(location_uuid: str):
    try:
        return locations_for_location(location_uuid)
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"retrieving the locations in location {location_uuid}", exc)


@router.post("/scope-for-locations")
def api_scope_for_locations(payload: ScopeForLocationsRequest):
    """Return the UUID of the scope made up of exactly the given locations.

    201 when a new composed scope had to be created, 200 otherwise.
    """
    uuids = payload.data.locations
    try:
        scope, created = scope_for_explicit_set_with_status(uuids)
    except InvalidLocationSet as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"retrieving the scope for locations {uuids}", exc)
    return JSONResponse(status_code=201 if created else 200, content=scope.uuid)


@router.post("/set-locations-as-scope/{organization_uuid}")
def api_set_locations_as_scope(organization_uuid: str, payload: ScopeForLocationsRequest):
    uuids = payload.data.locations
    try:
        scope, created = set_locations_as_scope(organization_uuid, uuids)
    except LocationNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except InvalidLocationSet as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StoreError as exc:
        raise _store_failure(f"setting the scope of organization {organization_uuid}", exc)
    return JSONResponse(status_code=201 if created else 200, content=scope.uuid)
