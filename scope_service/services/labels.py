from functools import lru_cache
from typing import Iterable, Optional

from pyuca import Collator

from scope_service.models.location import Location

LABEL_SEPARATOR = ", "


@lru_cache(maxsize=1)
def _collator() -> Collator:
    # Dutch has no tailoring on top of the root collation, so the default
    # Unicode collation table gives the "nl" order.
    return Collator()


def collation_key(label: str):
    """Sort key placing labels in Dutch alphabetical order.

    Labels the collation considers equal fall back to code point order so
    the result never depends on input order.
    """
    return (_collator().sort_key(label), label)


def aggregate_label(locations: Iterable[Location]) -> Optional[str]:
    """Join the labels of `locations` in Dutch alphabetical order.

    Returns None when no locations are given.
    """
    labels = [location.label for location in locations]
    if not labels:
        return None
    return LABEL_SEPARATOR.join(sorted(labels, key=collation_key))
