"""Result types for contact creation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactCreated:
    """The base contact record was created. Ethereum fields are attached best-effort."""

    contact_id: str


@dataclass(frozen=True)
class CreateFailed:
    """The base contact record could not be created; nothing was written."""

    reason: str
