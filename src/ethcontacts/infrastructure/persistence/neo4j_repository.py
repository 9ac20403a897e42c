"""Neo4j implementation of ContactSource.
Graph: (c:Contact {id})-[:HAS_DATA]->(d:ContactData {mimetype, data1, data15, photo_uri, position}).
data1 holds the row's primary value (name, number, address); data15 is the name row's auxiliary
slot (wallet address or ENS name). Contact ids come from a (:Sequence {name: "contact"}) counter.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from neo4j.exceptions import AuthError, DriverError, Forbidden, Neo4jError

from ethcontacts.domain import (
    ContactHeader,
    ContactStoreError,
    DataRow,
    FieldKind,
    MimeType,
    StoreAccessDenied,
)

CONTACT_SEQUENCE = "contact"

_LIST_ROWS_QUERY = """
MATCH (c:Contact)-[:HAS_DATA]->(d:ContactData)
WHERE d.mimetype IN $mimetypes
RETURN c.id AS contact_id, d.mimetype AS mimetype, d.data1 AS data1,
       d.data15 AS data15, d.photo_uri AS photo_uri
ORDER BY c.id, d.position
"""

_HEADER_QUERY = """
MATCH (c:Contact {id: $contact_id})
OPTIONAL MATCH (c)-[:HAS_DATA]->(n:ContactData {mimetype: $name_mimetype})
WITH c, n ORDER BY n.position
WITH c, head(collect(n)) AS name_row
OPTIONAL MATCH (c)-[:HAS_DATA]->(p:ContactData {mimetype: $photo_mimetype})
WITH name_row, p ORDER BY p.position
WITH name_row, head(collect(p)) AS photo_row
RETURN name_row.data1 AS display_name, photo_row.photo_uri AS photo_uri
"""

_FIRST_VALUE_QUERY = """
MATCH (c:Contact {id: $contact_id})-[:HAS_DATA]->(d:ContactData {mimetype: $mimetype})
RETURN d.data1 AS data1, d.data15 AS data15
ORDER BY d.position
LIMIT 1
"""

_SET_AUXILIARY_QUERY = """
MATCH (c:Contact {id: $contact_id})-[:HAS_DATA]->(d:ContactData {mimetype: $mimetype})
WITH d ORDER BY d.position
LIMIT 1
SET d.data15 = $value
RETURN 1 AS ok
"""

# One auto-commit statement: the id allocation and every row are written together or not at all.
_CREATE_CONTACT_QUERY = """
MERGE (seq:Sequence {name: $sequence})
ON CREATE SET seq.value = 0
SET seq.value = seq.value + 1
CREATE (c:Contact {id: seq.value})
WITH c
UNWIND $rows AS row
CREATE (c)-[:HAS_DATA]->(:ContactData {
    mimetype: row.mimetype,
    data1: row.data1,
    position: row.position
})
RETURN DISTINCT c.id AS contact_id
"""


class Neo4jContactSource:
    """ContactSource backed by Neo4j. Driver errors are mapped to the domain's store errors."""

    def __init__(self, driver: object, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    @contextmanager
    def _session(self) -> Iterator[object]:
        try:
            with self._driver.session(database=self._database) as session:
                yield session
        except (Forbidden, AuthError) as e:
            raise StoreAccessDenied(str(e)) from e
        except (Neo4jError, DriverError) as e:
            raise ContactStoreError(str(e)) from e

    def list_data_rows(self, mime_types: Iterable[MimeType]) -> list[DataRow]:
        mimetypes = [MimeType(m).value for m in mime_types]
        with self._session() as session:
            result = session.run(_LIST_ROWS_QUERY, mimetypes=mimetypes)
            return [_record_to_row(rec) for rec in result]

    def get_contact_header(self, contact_id: int) -> ContactHeader | None:
        with self._session() as session:
            result = session.run(
                _HEADER_QUERY,
                contact_id=contact_id,
                name_mimetype=MimeType.STRUCTURED_NAME.value,
                photo_mimetype=MimeType.PHOTO.value,
            )
            record = result.single()
        if not record:
            return None
        return ContactHeader(
            display_name=record["display_name"],
            photo_uri=record["photo_uri"],
        )

    def query_field(self, contact_id: int, kind: FieldKind) -> str | None:
        record = self._first_row(contact_id, kind.mime_type)
        return record["data1"] if record else None

    def get_auxiliary_field(self, contact_id: int) -> str | None:
        record = self._first_row(contact_id, MimeType.STRUCTURED_NAME)
        if not record:
            return None
        value = record["data15"]
        return value if isinstance(value, str) else None

    def set_auxiliary_field(self, contact_id: int, value: str) -> bool:
        """Set data15 on the contact's name row. Returns True if updated, False if no such row."""
        with self._session() as session:
            result = session.run(
                _SET_AUXILIARY_QUERY,
                contact_id=contact_id,
                mimetype=MimeType.STRUCTURED_NAME.value,
                value=value,
            )
            return result.single() is not None

    def create_contact(
        self,
        display_name: str,
        phone_number: str | None = None,
        email: str | None = None,
    ) -> int | None:
        rows = [{"mimetype": MimeType.STRUCTURED_NAME.value, "data1": display_name}]
        if phone_number and phone_number.strip():
            rows.append({"mimetype": MimeType.PHONE.value, "data1": phone_number})
        if email and email.strip():
            rows.append({"mimetype": MimeType.EMAIL.value, "data1": email})
        for position, row in enumerate(rows):
            row["position"] = position
        with self._session() as session:
            result = session.run(
                _CREATE_CONTACT_QUERY,
                sequence=CONTACT_SEQUENCE,
                rows=rows,
            )
            record = result.single()
        if not record:
            return None
        return int(record["contact_id"])

    def add_row(
        self,
        contact_id: int,
        mime_type: MimeType,
        primary_value: str | None = None,
        *,
        auxiliary_value: str | None = None,
        photo_uri: str | None = None,
    ) -> None:
        """Append a raw row to a contact, creating the Contact node if needed. Used for imports."""
        with self._session() as session:
            session.run(
                """
                MERGE (c:Contact {id: $contact_id})
                WITH c
                OPTIONAL MATCH (c)-[:HAS_DATA]->(existing:ContactData)
                WITH c, count(existing) AS position
                CREATE (c)-[:HAS_DATA]->(:ContactData {
                    mimetype: $mimetype,
                    data1: $data1,
                    data15: $data15,
                    photo_uri: $photo_uri,
                    position: position
                })
                WITH c
                MERGE (seq:Sequence {name: $sequence})
                ON CREATE SET seq.value = 0
                SET seq.value = CASE WHEN seq.value < c.id THEN c.id ELSE seq.value END
                """,
                contact_id=contact_id,
                mimetype=MimeType(mime_type).value,
                data1=primary_value,
                data15=auxiliary_value,
                photo_uri=photo_uri,
                sequence=CONTACT_SEQUENCE,
            )

    def _first_row(self, contact_id: int, mime_type: MimeType):
        with self._session() as session:
            result = session.run(
                _FIRST_VALUE_QUERY,
                contact_id=contact_id,
                mimetype=mime_type.value,
            )
            return result.single()


def _record_to_row(record) -> DataRow:
    data15 = record["data15"]
    return DataRow(
        contact_id=int(record["contact_id"]),
        mime_type=MimeType(record["mimetype"]),
        primary_value=record["data1"],
        auxiliary_value=data15 if isinstance(data15, str) else None,
        photo_uri=record["photo_uri"],
    )
