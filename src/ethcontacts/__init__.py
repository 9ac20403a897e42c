"""
ethcontacts core: contacts enriched with an Ethereum wallet address and ENS name.

- domain: Contact, auxiliary-slot variants, classifier, errors. No outer dependencies.
- application: ContactReconciler, ContactService, ports (ContactSource, PreferenceStore).
- infrastructure: adapters (in-memory, Neo4j, JSON preference file) and Settings.
"""

from ethcontacts.application import (
    ContactCreated,
    ContactReconciler,
    ContactService,
    ContactSource,
    CreateFailed,
    PreferenceStore,
)
from ethcontacts.domain import (
    AuxiliaryKind,
    Contact,
    ContactStoreError,
    InvalidWalletAddress,
    StoreAccessDenied,
    classify,
)
from ethcontacts.infrastructure import (
    InMemoryContactSource,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    Neo4jContactSource,
)

__all__ = [
    "AuxiliaryKind",
    "Contact",
    "ContactCreated",
    "ContactReconciler",
    "ContactService",
    "ContactSource",
    "ContactStoreError",
    "CreateFailed",
    "InMemoryContactSource",
    "InMemoryPreferenceStore",
    "InvalidWalletAddress",
    "JsonFilePreferenceStore",
    "Neo4jContactSource",
    "PreferenceStore",
    "StoreAccessDenied",
    "classify",
]
