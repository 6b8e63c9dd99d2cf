"""Solana cluster types."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Type

from framemint.exception import InvalidArgumentException

__all__ = ["Cluster", "EXPLORER_URL"]

EXPLORER_URL = "https://explorer.solana.com"


class Cluster(Enum):
    """
    Cluster a token is minted on
    """

    DEVNET = "devnet"
    TESTNET = "testnet"
    MAINNET = "mainnet-beta"

    @property
    def query(self) -> str:
        """Query string block explorers expect for this cluster."""
        if self is Cluster.MAINNET:
            return ""
        return f"?cluster={self.value}"

    @property
    def chain(self) -> str:
        """Chain identifier used by hosted minting APIs."""
        return "solana"

    def address_url(self, address: str) -> str:
        return f"{EXPLORER_URL}/address/{address}{self.query}"

    def transaction_url(self, signature: str) -> str:
        return f"{EXPLORER_URL}/tx/{signature}{self.query}"

    @classmethod
    def from_primitive(cls: Type[Cluster], value: Optional[str]) -> Cluster:
        if not value:
            return cls.DEVNET
        value = value.strip().lower()
        if value == "mainnet":
            return cls.MAINNET
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentException(
                f"Unknown cluster: {value}, expected one of {[c.value for c in cls]}"
            )
