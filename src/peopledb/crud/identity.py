"""
Identity field discovery.

An entity is a dataclass with exactly one field declared through
``identity_field()``. The field may be hidden from ``__init__`` and
``repr``; it is found through the dataclass field metadata.
"""

import dataclasses
from functools import lru_cache

from peopledb.exceptions import ConfigurationError

IDENTITY_KEY = "peopledb.identity"


def identity_field(**kwargs):
    """Declare a dataclass field as the entity's store-assigned integer key."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[IDENTITY_KEY] = True
    if "default_factory" not in kwargs:
        kwargs.setdefault("default", None)
    return dataclasses.field(metadata=metadata, **kwargs)


@lru_cache(maxsize=None)
def identity_field_name(entity_type: type) -> str:
    if not dataclasses.is_dataclass(entity_type):
        raise ConfigurationError(f"{entity_type.__name__} is not a dataclass entity")

    names = [f.name for f in dataclasses.fields(entity_type) if f.metadata.get(IDENTITY_KEY)]
    if not names:
        raise ConfigurationError(f"No identity field found on {entity_type.__name__}")
    if len(names) > 1:
        raise ConfigurationError(
            f"{entity_type.__name__} declares more than one identity field: {names}"
        )
    return names[0]


def get_identity(entity) -> int | None:
    """Return the entity's identity, or None if it has not been saved."""
    return getattr(entity, identity_field_name(type(entity)))


def set_identity(entity, value: int) -> None:
    """Write a store-generated identity into the entity in place."""
    name = identity_field_name(type(entity))
    try:
        setattr(entity, name, int(value))
    except dataclasses.FrozenInstanceError as e:
        raise ConfigurationError(
            f"Cannot assign identity on frozen entity {type(entity).__name__}"
        ) from e
