"""Infrastructure layer: concrete implementations of application ports."""

from ethcontacts.infrastructure.memory_repository import (
    InMemoryContactSource,
    InMemoryPreferenceStore,
)
from ethcontacts.infrastructure.persistence.neo4j_repository import Neo4jContactSource
from ethcontacts.infrastructure.preferences import JsonFilePreferenceStore
from ethcontacts.infrastructure.settings import Settings

__all__ = [
    "InMemoryContactSource",
    "InMemoryPreferenceStore",
    "JsonFilePreferenceStore",
    "Neo4jContactSource",
    "Settings",
]
