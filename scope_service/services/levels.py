"""Level Classifier: behaviour flags derived from a location's level."""
from scope_service.models.location import Level, Location


# District is finer grained than a municipality, but both are atomic scopes
# of operation: they are never expanded into contained locations.
UNDIVIDABLE_LEVELS = frozenset({Level.MUNICIPALITY, Level.DISTRICT})

# Composed scopes store the aggregate label when they are created, and
# municipalities and districts carry their own label.
AGGREGATE_LABEL_LEVELS = frozenset({Level.REFERENCE_REGION, Level.PROVINCE})


def is_subdividable(location: Location) -> bool:
    """True unless the location is a municipality or a district."""
    return location.level not in UNDIVIDABLE_LEVELS


def needs_aggregate_label(location: Location) -> bool:
    """True if the display label must be built from the contained locations."""
    return location.level in AGGREGATE_LABEL_LEVELS
