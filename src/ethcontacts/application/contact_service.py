"""Contact queries and Ethereum-field writes over a ContactSource and a PreferenceStore."""

import logging

from ethcontacts.application.dto import ContactCreated, CreateFailed
from ethcontacts.application.ports import ContactSource, PreferenceStore
from ethcontacts.application.reconciler import ContactReconciler, parse_contact_id
from ethcontacts.domain import (
    Contact,
    ContactStoreError,
    InvalidWalletAddress,
    is_wallet_address,
)
from ethcontacts.domain.phone import normalize_phone, same_number

logger = logging.getLogger(__name__)


class ContactService:
    """Query facade and mutation operations. Stores are injected; no caching, no locking."""

    def __init__(self, source: ContactSource, preferences: PreferenceStore) -> None:
        self._source = source
        self._prefs = preferences
        self._reconciler = ContactReconciler(source, preferences)

    # --- queries ---

    def list_all(self) -> list[Contact]:
        return self._reconciler.list_all()

    def list_with_wallet(self) -> list[Contact]:
        return [c for c in self.list_all() if c.has_eth_address]

    def list_with_ens(self) -> list[Contact]:
        return [c for c in self.list_all() if c.has_ens]

    def list_with_either_eth_field(self) -> list[Contact]:
        return [c for c in self.list_all() if c.has_eth_address or c.has_ens]

    def get_by_id(self, contact_id: str | int) -> Contact | None:
        return self._reconciler.get_by_id(contact_id)

    def find_by_phone(
        self, raw_phone: str, default_region: str | None = None
    ) -> Contact | None:
        """Return the first listed contact whose phone is the same number (E.164), or None."""
        wanted = normalize_phone(raw_phone, default_region=default_region)
        if wanted is None:
            return None
        for contact in self.list_all():
            if same_number(contact.phone_number, wanted, default_region):
                return contact
        return None

    # --- mutations ---

    def set_wallet_address(self, contact_id: str | int, address: str) -> bool:
        """Write a wallet address to the contact's auxiliary field.

        Raises InvalidWalletAddress before touching the store if the address is malformed.
        Returns False if the contact has no name row to update or the store refused the write.
        """
        if not is_wallet_address(address):
            raise InvalidWalletAddress(address)
        return self._write_auxiliary(contact_id, address)

    def set_ens_name(self, contact_id: str | int, ens_name: str) -> bool:
        """Write an ENS name to the auxiliary field only; the preference override is left as is."""
        return self._write_auxiliary(contact_id, ens_name)

    def save_ens_override(self, contact_id: str | int, ens_name: str) -> None:
        """Store an ENS override in the preference store only, keyed by the canonical id."""
        source_id = parse_contact_id(contact_id)
        if source_id is None:
            logger.warning("Not saving ENS override for malformed contact id %r", contact_id)
            return
        try:
            self._prefs.set_ens_override(str(source_id), ens_name)
        except ContactStoreError:
            logger.warning("Saving ENS override for contact %s failed", contact_id, exc_info=True)

    def create_contact(
        self,
        display_name: str,
        phone_number: str | None = None,
        email: str | None = None,
        eth_address: str | None = None,
        ens_name: str | None = None,
    ) -> ContactCreated | CreateFailed:
        """Create a contact, then attach Ethereum fields best-effort.

        Only the base record is atomic. A failure attaching the auxiliary value or the
        ENS override is logged and not rolled back; the result is still ContactCreated.
        """
        try:
            source_id = self._source.create_contact(
                display_name, phone_number=phone_number, email=email
            )
        except ContactStoreError as e:
            logger.error("Failed to add contact %r", display_name, exc_info=True)
            return CreateFailed(reason=str(e) or "Contact store error")
        if source_id is None:
            logger.error("Failed to add contact %r: store returned no id", display_name)
            return CreateFailed(reason="Contact store did not return an id")

        contact_id = str(source_id)
        auxiliary = eth_address if eth_address is not None else ens_name
        if auxiliary is not None and not self._write_auxiliary(source_id, auxiliary):
            logger.warning("Contact %s created without its ETH/ENS value", contact_id)

        if ens_name and ens_name.strip():
            self.save_ens_override(contact_id, ens_name)

        logger.info("Created contact %s", contact_id)
        return ContactCreated(contact_id=contact_id)

    def _write_auxiliary(self, contact_id: str | int, value: str) -> bool:
        source_id = parse_contact_id(contact_id)
        if source_id is None:
            return False
        try:
            return self._source.set_auxiliary_field(source_id, value)
        except ContactStoreError:
            logger.warning("Writing auxiliary field of contact %s failed", source_id, exc_info=True)
            return False
