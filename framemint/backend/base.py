"""Defines interfaces for client codes to interact with storage and minting services."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from framemint.network import Cluster
from framemint.nft import NftData
from framemint.types import JsonDict, typechecked

__all__ = [
    "Commitment",
    "MintedNft",
    "StorageContext",
    "MintContext",
]


class Commitment(Enum):
    """How settled a transaction has to be before a call returns."""

    PROCESSED = "processed"
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class MintedNft:
    """A token known to the minting service."""

    address: str
    """Address the minting service looks the token up by."""

    mint_address: str
    """On-chain mint address."""

    uri: str

    name: str

    symbol: str = ""

    is_collection: bool = False

    collection: Optional[str] = None
    """Address of the collection the token belongs to."""

    signature: Optional[str] = None
    """Signature of the transaction that created or last updated the token."""


@typechecked
class StorageContext:
    """Interfaces through which the library uploads files to decentralized storage."""

    def upload(self, data: bytes, file_name: str) -> str:
        """Upload a file.

        Args:
            data (bytes): Full content of the file.
            file_name (str): Name of the file, used to infer its content type.

        Returns:
            str: URI of the uploaded file.

        Raises:
            :class:`UploadFailedException`: When the storage service rejects the upload.
        """
        raise NotImplementedError()

    def upload_metadata(self, metadata: JsonDict) -> str:
        """Upload a JSON metadata document.

        Args:
            metadata (JsonDict): The document.

        Returns:
            str: URI of the uploaded document.

        Raises:
            :class:`UploadFailedException`: When the storage service rejects the upload.
        """
        raise NotImplementedError()


@typechecked
class MintContext:
    """Interfaces through which the library mints and updates tokens."""

    @property
    def cluster(self) -> Cluster:
        """Cluster tokens are minted on"""
        raise NotImplementedError()

    def create_nft(
        self,
        uri: str,
        nft_data: NftData,
        collection: Optional[str] = None,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> MintedNft:
        """Mint a token.

        A :class:`CollectionNftData` mints a collection NFT. Otherwise, when ``collection`` is given,
        the token is minted as a member of that collection but is not verified yet.

        Args:
            uri (str): URI of the metadata document.
            nft_data (NftData): Descriptive fields of the token.
            collection (Optional[str]): Address of the collection NFT.
            commitment (Commitment): Confirmation level to wait for.

        Returns:
            MintedNft: The minted token.

        Raises:
            :class:`MintFailedException`: When the token could not be minted.
        """
        raise NotImplementedError()

    def verify_collection(
        self,
        mint_address: str,
        collection_mint_address: str,
        is_sized_collection: bool = True,
    ) -> Optional[str]:
        """Verify a token as a member of a certified collection.

        Args:
            mint_address (str): Address of the member token.
            collection_mint_address (str): Address of the collection NFT.
            is_sized_collection (bool): Whether the collection keeps track of its size.

        Returns:
            Optional[str]: Signature of the verification transaction, if the service reports one.

        Raises:
            :class:`VerificationFailedException`: When the membership could not be verified.
        """
        raise NotImplementedError()

    def find_nft(self, address: str) -> MintedNft:
        """Look up a token by address.

        Args:
            address (str): Address of the token.

        Returns:
            MintedNft: The token.
        """
        raise NotImplementedError()

    def update_uri(
        self,
        nft: MintedNft,
        uri: str,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> str:
        """Point an existing token at a new metadata document.

        Args:
            nft (MintedNft): The token to update.
            uri (str): URI of the new metadata document.
            commitment (Commitment): Confirmation level to wait for.

        Returns:
            str: Signature of the update transaction.
        """
        raise NotImplementedError()
