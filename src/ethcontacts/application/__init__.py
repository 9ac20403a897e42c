"""Application layer: reconciler, contact service, ports, and result types. Depends only on domain."""

from ethcontacts.application.contact_service import ContactService
from ethcontacts.application.dto import ContactCreated, CreateFailed
from ethcontacts.application.ports import (
    ContactSource,
    PreferenceStore,
    ens_override_key,
)
from ethcontacts.application.reconciler import ContactReconciler

__all__ = [
    "ContactCreated",
    "ContactReconciler",
    "ContactService",
    "ContactSource",
    "CreateFailed",
    "PreferenceStore",
    "ens_override_key",
]
