"""Domain layer: entities, classifier and errors. No dependencies on outer layers."""

from ethcontacts.domain.classifier import AuxiliaryKind, classify, is_wallet_address
from ethcontacts.domain.entities import (
    ABSENT,
    AuxiliaryValue,
    Contact,
    ContactHeader,
    DataRow,
    EnsLabel,
    FieldKind,
    MimeType,
    Unclassified,
    WalletAddress,
    read_auxiliary,
)
from ethcontacts.domain.errors import (
    ContactStoreError,
    InvalidWalletAddress,
    StoreAccessDenied,
)

__all__ = [
    "ABSENT",
    "AuxiliaryKind",
    "AuxiliaryValue",
    "Contact",
    "ContactHeader",
    "ContactStoreError",
    "DataRow",
    "EnsLabel",
    "FieldKind",
    "InvalidWalletAddress",
    "MimeType",
    "StoreAccessDenied",
    "Unclassified",
    "WalletAddress",
    "classify",
    "is_wallet_address",
    "read_auxiliary",
]
