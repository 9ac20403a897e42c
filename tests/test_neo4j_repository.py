"""Integration tests for Neo4jContactSource. Require Docker
(testcontainers)."""

import pytest

from ethcontacts.application import ContactCreated, ContactService
from ethcontacts.domain import (
    ContactHeader,
    ContactStoreError,
    FieldKind,
    MimeType,
    StoreAccessDenied,
)
from ethcontacts.infrastructure import InMemoryPreferenceStore, Neo4jContactSource

ADDRESS = "0x" + "ef" * 20


@pytest.fixture(scope="session")
def neo4j_driver():
    from testcontainers.neo4j import Neo4jContainer

    with Neo4jContainer() as neo4j:
        driver = neo4j.get_driver()
        try:
            yield driver
        finally:
            driver.close()


@pytest.fixture
def clean_neo4j(neo4j_driver):
    """Clear the graph before each test so tests are independent."""
    with neo4j_driver.session() as session:
        session.run("MATCH (n) DETACH DELETE n")
    yield neo4j_driver


def test_create_contact_and_read_back(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    contact_id = source.create_contact("Alice", phone_number="+12025551111", email="a@example.com")
    assert contact_id == 1

    assert source.get_contact_header(contact_id) == ContactHeader(display_name="Alice")
    assert source.query_field(contact_id, FieldKind.PHONE) == "+12025551111"
    assert source.query_field(contact_id, FieldKind.EMAIL) == "a@example.com"
    assert source.get_auxiliary_field(contact_id) is None


def test_create_contact_ids_increase(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    first = source.create_contact("A")
    second = source.create_contact("B", phone_number="  ")
    assert second == first + 1
    rows = source.list_data_rows([MimeType.PHONE])
    assert rows == []


def test_list_data_rows_ordered_and_filtered(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    source.add_row(2, MimeType.STRUCTURED_NAME, "Bob", auxiliary_value="bob.eth")
    source.add_row(1, MimeType.STRUCTURED_NAME, "Alice", auxiliary_value=ADDRESS)
    source.add_row(1, MimeType.PHOTO, photo_uri="content://photos/1")
    source.add_row(1, MimeType.PHONE, "+12025551111")

    rows = source.list_data_rows([MimeType.STRUCTURED_NAME, MimeType.PHOTO])
    assert [(r.contact_id, r.mime_type) for r in rows] == [
        (1, MimeType.STRUCTURED_NAME),
        (1, MimeType.PHOTO),
        (2, MimeType.STRUCTURED_NAME),
    ]
    assert rows[0].auxiliary_value == ADDRESS
    assert rows[1].photo_uri == "content://photos/1"
    assert rows[2].primary_value == "Bob"


def test_add_row_advances_sequence(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    source.add_row(10, MimeType.STRUCTURED_NAME, "Imported")
    assert source.create_contact("New") == 11


def test_header_includes_photo(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    source.add_row(5, MimeType.STRUCTURED_NAME, "Eve")
    source.add_row(5, MimeType.PHOTO, photo_uri="content://photos/5")
    assert source.get_contact_header(5) == ContactHeader(
        display_name="Eve", photo_uri="content://photos/5"
    )
    assert source.get_contact_header(6) is None


def test_set_auxiliary_field(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    contact_id = source.create_contact("Alice")
    assert source.set_auxiliary_field(contact_id, ADDRESS) is True
    assert source.get_auxiliary_field(contact_id) == ADDRESS


def test_set_auxiliary_field_without_name_row(clean_neo4j):
    source = Neo4jContactSource(clean_neo4j)
    source.add_row(3, MimeType.PHONE, "+12025551111")
    assert source.set_auxiliary_field(3, ADDRESS) is False
    assert source.set_auxiliary_field(99, ADDRESS) is False


def test_service_over_neo4j_listing_matches_lookup(clean_neo4j):
    prefs = InMemoryPreferenceStore()
    service = ContactService(Neo4jContactSource(clean_neo4j), prefs)
    created = service.create_contact("bob", eth_address=ADDRESS, ens_name="bob.eth")
    assert isinstance(created, ContactCreated)
    service.create_contact("Alice", ens_name="alice.eth")
    service.create_contact("carol", phone_number="+12025552222")

    listed = service.list_all()
    assert [c.display_name for c in listed] == ["Alice", "bob", "carol"]
    for contact in listed:
        assert service.get_by_id(contact.contact_id) == contact

    bob = service.get_by_id(created.contact_id)
    assert bob.eth_address == ADDRESS
    assert bob.ens_name == "bob.eth"
    assert [c.display_name for c in service.list_with_either_eth_field()] == ["Alice", "bob"]


def test_driver_errors_are_mapped():
    from neo4j.exceptions import Forbidden, ServiceUnavailable

    class _Driver:
        def __init__(self, error):
            self._error = error

        def session(self, **kwargs):
            raise self._error

    with pytest.raises(StoreAccessDenied):
        Neo4jContactSource(_Driver(Forbidden("no access"))).list_data_rows([MimeType.PHONE])
    with pytest.raises(ContactStoreError):
        Neo4jContactSource(_Driver(ServiceUnavailable("down"))).get_contact_header(1)
