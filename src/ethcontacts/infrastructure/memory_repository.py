"""In-memory implementations of ContactSource and PreferenceStore (no DB)."""

from collections.abc import Iterable
from dataclasses import replace

from ethcontacts.application.ports import ens_override_key
from ethcontacts.domain import ContactHeader, DataRow, FieldKind, MimeType


class InMemoryContactSource:
    """Stores data rows in memory. Row order within a contact is insertion order.
    Contact ids are allocated sequentially from 1, like an autoincrement column.
    """

    def __init__(self) -> None:
        self._rows: dict[int, list[DataRow]] = {}
        self._next_id = 1

    def add_row(
        self,
        contact_id: int,
        mime_type: MimeType,
        primary_value: str | None = None,
        *,
        auxiliary_value: str | None = None,
        photo_uri: str | None = None,
    ) -> DataRow:
        """Append a raw row (no validation). Used to seed existing data."""
        row = DataRow(
            contact_id=contact_id,
            mime_type=mime_type,
            primary_value=primary_value,
            auxiliary_value=auxiliary_value,
            photo_uri=photo_uri,
        )
        self._rows.setdefault(contact_id, []).append(row)
        self._next_id = max(self._next_id, contact_id + 1)
        return row

    def list_data_rows(self, mime_types: Iterable[MimeType]) -> list[DataRow]:
        wanted = set(mime_types)
        return [
            row
            for cid in sorted(self._rows)
            for row in self._rows[cid]
            if row.mime_type in wanted
        ]

    def get_contact_header(self, contact_id: int) -> ContactHeader | None:
        if contact_id not in self._rows:
            return None
        name_row = self._first(contact_id, MimeType.STRUCTURED_NAME)
        photo_row = self._first(contact_id, MimeType.PHOTO)
        return ContactHeader(
            display_name=name_row.primary_value if name_row else None,
            photo_uri=photo_row.photo_uri if photo_row else None,
        )

    def query_field(self, contact_id: int, kind: FieldKind) -> str | None:
        row = self._first(contact_id, kind.mime_type)
        return row.primary_value if row else None

    def get_auxiliary_field(self, contact_id: int) -> str | None:
        row = self._first(contact_id, MimeType.STRUCTURED_NAME)
        return row.auxiliary_value if row else None

    def set_auxiliary_field(self, contact_id: int, value: str) -> bool:
        rows = self._rows.get(contact_id, [])
        for i, row in enumerate(rows):
            if row.mime_type == MimeType.STRUCTURED_NAME:
                rows[i] = replace(row, auxiliary_value=value)
                return True
        return False

    def create_contact(
        self,
        display_name: str,
        phone_number: str | None = None,
        email: str | None = None,
    ) -> int | None:
        contact_id = self._next_id
        batch = [DataRow(contact_id, MimeType.STRUCTURED_NAME, display_name)]
        if phone_number and phone_number.strip():
            batch.append(DataRow(contact_id, MimeType.PHONE, phone_number))
        if email and email.strip():
            batch.append(DataRow(contact_id, MimeType.EMAIL, email))
        self._rows[contact_id] = batch
        self._next_id = contact_id + 1
        return contact_id

    def _first(self, contact_id: int, mime_type: MimeType) -> DataRow | None:
        for row in self._rows.get(contact_id, []):
            if row.mime_type == mime_type:
                return row
        return None


class InMemoryPreferenceStore:
    """Namespaced string key-value store held in a dict."""

    def __init__(self, namespace: str = "contact_prefs") -> None:
        self.namespace = namespace
        self._values: dict[str, str] = {}

    def get_string(self, key: str) -> str | None:
        return self._values.get(key)

    def put_string(self, key: str, value: str) -> None:
        self._values[key] = value

    def get_ens_override(self, contact_id: str) -> str | None:
        return self.get_string(ens_override_key(contact_id))

    def set_ens_override(self, contact_id: str, value: str) -> None:
        self.put_string(ens_override_key(contact_id), value)
