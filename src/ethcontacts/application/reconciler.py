"""Merge contact-source rows and preference-store overrides into Contact values."""

import logging
from dataclasses import dataclass, field

from ethcontacts.application.ports import ContactSource, PreferenceStore
from ethcontacts.domain import (
    ABSENT,
    AuxiliaryValue,
    Contact,
    ContactStoreError,
    DataRow,
    FieldKind,
    MimeType,
    StoreAccessDenied,
    read_auxiliary,
)
from ethcontacts.domain.entities import ens_name_of, eth_address_of

logger = logging.getLogger(__name__)

LISTED_MIME_TYPES = (
    MimeType.STRUCTURED_NAME,
    MimeType.PHONE,
    MimeType.EMAIL,
    MimeType.PHOTO,
)


def parse_contact_id(contact_id: str | int) -> int | None:
    """Return the numeric source id, or None if contact_id is not a decimal integer."""
    if isinstance(contact_id, bool):
        return None
    if isinstance(contact_id, int):
        return contact_id if contact_id >= 0 else None
    text = (contact_id or "").strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


@dataclass
class _TempContactData:
    """Scratch record filled while scanning rows for one contact id."""

    display_name: str | None = None
    phone: str | None = None
    email: str | None = None
    photo_uri: str | None = None
    auxiliary: AuxiliaryValue = field(default=ABSENT)
    seen: set[MimeType] = field(default_factory=set)

    def absorb(self, row: DataRow) -> None:
        # First row of each kind wins even when its value is null, like query_field.
        if row.mime_type in self.seen:
            return
        self.seen.add(row.mime_type)
        if row.mime_type == MimeType.STRUCTURED_NAME:
            self.display_name = row.primary_value
            self.auxiliary = read_auxiliary(row.auxiliary_value)
        elif row.mime_type == MimeType.PHONE:
            self.phone = row.primary_value
        elif row.mime_type == MimeType.EMAIL:
            self.email = row.primary_value
        elif row.mime_type == MimeType.PHOTO:
            self.photo_uri = row.photo_uri


class ContactReconciler:
    """Builds Contact values from a ContactSource and a PreferenceStore.

    The ENS name derived from the source's auxiliary field takes precedence over the
    preference-store override; the override only fills in when the source has none.
    """

    def __init__(self, source: ContactSource, preferences: PreferenceStore) -> None:
        self._source = source
        self._prefs = preferences

    def list_all(self) -> list[Contact]:
        """Return every contact, sorted by display name (case-insensitive, stable)."""
        try:
            rows = self._source.list_data_rows(LISTED_MIME_TYPES)
            scratch: dict[int, _TempContactData] = {}
            for row in rows:
                scratch.setdefault(row.contact_id, _TempContactData()).absorb(row)
            contacts = [
                self._build(
                    contact_id=str(source_id),
                    display_name=data.display_name,
                    phone=data.phone,
                    email=data.email,
                    photo_uri=data.photo_uri,
                    auxiliary=data.auxiliary,
                )
                for source_id, data in scratch.items()
            ]
        except StoreAccessDenied:
            logger.error("Read access to contacts denied; returning no contacts", exc_info=True)
            return []
        except ContactStoreError:
            logger.error("Listing contacts failed; returning no contacts", exc_info=True)
            return []
        return sorted(contacts, key=lambda c: c.display_name.lower())

    def get_by_id(self, contact_id: str | int) -> Contact | None:
        """Return the contact, or None if it does not exist or has no display name."""
        source_id = parse_contact_id(contact_id)
        if source_id is None:
            return None
        try:
            header = self._source.get_contact_header(source_id)
            if header is None or not header.display_name:
                return None
            phone = self._source.query_field(source_id, FieldKind.PHONE)
            email = self._source.query_field(source_id, FieldKind.EMAIL)
            auxiliary = read_auxiliary(self._source.get_auxiliary_field(source_id))
            return self._build(
                contact_id=str(source_id),
                display_name=header.display_name,
                phone=phone,
                email=email,
                photo_uri=header.photo_uri,
                auxiliary=auxiliary,
            )
        except StoreAccessDenied:
            logger.error("Read access denied for contact %s", source_id, exc_info=True)
            return None
        except ContactStoreError:
            logger.error("Lookup of contact %s failed", source_id, exc_info=True)
            return None

    def _build(
        self,
        *,
        contact_id: str,
        display_name: str | None,
        phone: str | None,
        email: str | None,
        photo_uri: str | None,
        auxiliary: AuxiliaryValue,
    ) -> Contact:
        ens_name = ens_name_of(auxiliary)
        override = self._ens_override(contact_id) if ens_name is None else None
        return Contact(
            contact_id=contact_id,
            display_name=display_name or "",
            phone_number=phone,
            email=email,
            photo_uri=photo_uri,
            eth_address=eth_address_of(auxiliary),
            ens_name=ens_name if ens_name is not None else override,
        )

    def _ens_override(self, contact_id: str) -> str | None:
        # An unreadable preference store only loses the override, not the contact.
        try:
            return self._prefs.get_ens_override(contact_id)
        except ContactStoreError:
            logger.warning("Reading ENS override for contact %s failed", contact_id, exc_info=True)
            return None
