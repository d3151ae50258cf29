"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Entities here are snapshots of provider state (users, identities,
    outgoing mail), so they are never mutated after construction.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
