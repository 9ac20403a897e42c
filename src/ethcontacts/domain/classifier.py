"""Classify the auxiliary name-row value as a wallet address, an ENS name, or neither."""

import re
from enum import Enum

ETH_ADDRESS_PATTERN = re.compile(r"0x[0-9a-fA-F]{40}")

ENS_SEPARATOR = "."


class AuxiliaryKind(str, Enum):
    WALLET_ADDRESS = "wallet_address"
    ENS_NAME = "ens_name"
    NEITHER = "neither"


def is_wallet_address(value: str | None) -> bool:
    """True when value is exactly 0x followed by 40 hex digits (no surrounding whitespace)."""
    if value is None:
        return False
    return ETH_ADDRESS_PATTERN.fullmatch(value) is not None


def classify(value: str) -> AuxiliaryKind:
    """Return the kind of the auxiliary value.

    A wallet address wins over the ENS rule, so "0x" + 40 hex never counts as a name.
    Anything else containing a dot is taken to be an ENS name (e.g. "vitalik.eth").
    """
    if is_wallet_address(value):
        return AuxiliaryKind.WALLET_ADDRESS
    if ENS_SEPARATOR in value:
        return AuxiliaryKind.ENS_NAME
    return AuxiliaryKind.NEITHER
