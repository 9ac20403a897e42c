"""Domain entities: Contact, the auxiliary-slot variants, and source row shapes."""

from dataclasses import dataclass
from enum import Enum

from ethcontacts.domain.classifier import AuxiliaryKind, classify, is_wallet_address


class MimeType(str, Enum):
    """Data row kinds. Values match the Android ContactsContract item types."""

    STRUCTURED_NAME = "vnd.android.cursor.item/name"
    PHONE = "vnd.android.cursor.item/phone_v2"
    EMAIL = "vnd.android.cursor.item/email_v2"
    PHOTO = "vnd.android.cursor.item/photo"


class FieldKind(str, Enum):
    PHONE = "phone"
    EMAIL = "email"

    @property
    def mime_type(self) -> MimeType:
        return MimeType.PHONE if self is FieldKind.PHONE else MimeType.EMAIL


@dataclass(frozen=True)
class DataRow:
    """One row of the contact source: a single typed value belonging to a contact."""

    contact_id: int
    mime_type: MimeType
    primary_value: str | None = None
    auxiliary_value: str | None = None
    photo_uri: str | None = None


@dataclass(frozen=True)
class ContactHeader:
    display_name: str | None = None
    photo_uri: str | None = None


# --- auxiliary slot: exactly one of these per name row ---


@dataclass(frozen=True)
class WalletAddress:
    value: str

    def __post_init__(self):
        if not is_wallet_address(self.value):
            raise ValueError(f"Not a wallet address: {self.value!r}")


@dataclass(frozen=True)
class EnsLabel:
    value: str


@dataclass(frozen=True)
class Unclassified:
    """Value present in the slot but neither an address nor an ENS name."""

    value: str


@dataclass(frozen=True)
class _Absent:
    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

AuxiliaryValue = WalletAddress | EnsLabel | Unclassified | _Absent


def read_auxiliary(value: str | None) -> AuxiliaryValue:
    """Wrap a raw auxiliary-field value in its classified variant."""
    if value is None:
        return ABSENT
    kind = classify(value)
    if kind is AuxiliaryKind.WALLET_ADDRESS:
        return WalletAddress(value)
    if kind is AuxiliaryKind.ENS_NAME:
        return EnsLabel(value)
    return Unclassified(value)


def eth_address_of(aux: AuxiliaryValue) -> str | None:
    return aux.value if isinstance(aux, WalletAddress) else None


def ens_name_of(aux: AuxiliaryValue) -> str | None:
    return aux.value if isinstance(aux, EnsLabel) else None


@dataclass(frozen=True)
class Contact:
    """
    A contact merged from the contact source and the preference store.
    Built fresh on every query; never persisted as a whole.
    """

    contact_id: str
    display_name: str = ""
    phone_number: str | None = None
    email: str | None = None
    photo_uri: str | None = None
    eth_address: str | None = None
    ens_name: str | None = None

    def __post_init__(self):
        if self.display_name is None:
            object.__setattr__(self, "display_name", "")
        if self.eth_address is not None and not is_wallet_address(self.eth_address):
            raise ValueError(
                "Contact eth_address must be 0x followed by 40 hex characters."
            )

    @property
    def has_eth_address(self) -> bool:
        return bool(self.eth_address and self.eth_address.strip())

    @property
    def has_ens(self) -> bool:
        return bool(self.ens_name and self.ens_name.strip())
