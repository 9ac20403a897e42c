"""Errors raised by store adapters and by the validating write path."""


class ContactStoreError(Exception):
    """A contact source or preference store could not complete a read or write."""


class StoreAccessDenied(ContactStoreError, PermissionError):
    """The caller lacks read or write access to the underlying store."""


class InvalidWalletAddress(ValueError):
    """Raised before any I/O when a wallet address is not 0x + 40 hex characters."""

    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(
            "Invalid ETH address: must match 0x followed by 40 hex characters"
        )
