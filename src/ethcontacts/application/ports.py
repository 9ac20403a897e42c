"""Application ports (interfaces). Implemented by infrastructure adapters.

Adapters raise StoreAccessDenied when access is refused and ContactStoreError for
any other store failure; the application layer converts both to its own results.
"""

from collections.abc import Iterable
from typing import Protocol

from ethcontacts.domain import ContactHeader, DataRow, FieldKind, MimeType

ENS_KEY_PREFIX = "ENS_"


def ens_override_key(contact_id: str | int) -> str:
    """Preference key for a contact's ENS override, e.g. "ENS_42"."""
    return f"{ENS_KEY_PREFIX}{contact_id}"


class ContactSource(Protocol):
    """Relational contact store: typed data rows per numeric contact id."""

    def list_data_rows(self, mime_types: Iterable[MimeType]) -> list[DataRow]:
        """Return all rows of the given kinds, ordered by contact_id ascending."""
        ...

    def get_contact_header(self, contact_id: int) -> ContactHeader | None:
        """Return display name and photo for the contact, or None if unknown."""
        ...

    def query_field(self, contact_id: int, kind: FieldKind) -> str | None:
        """Return the first phone or email value for the contact, or None."""
        ...

    def get_auxiliary_field(self, contact_id: int) -> str | None:
        """Return the auxiliary slot of the contact's name row, or None."""
        ...

    def set_auxiliary_field(self, contact_id: int, value: str) -> bool:
        """Update the name row's auxiliary slot. False if the contact has no name row."""
        ...

    def create_contact(
        self,
        display_name: str,
        phone_number: str | None = None,
        email: str | None = None,
    ) -> int | None:
        """Create the contact with its name/phone/email rows as one batch. Returns the id or None."""
        ...


class PreferenceStore(Protocol):
    """Namespaced string key-value store holding ENS overrides."""

    def get_ens_override(self, contact_id: str) -> str | None:
        ...

    def set_ens_override(self, contact_id: str, value: str) -> None:
        ...
