"""Sequencing uploads, mints and verification of a collection and its members."""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from framemint.backend.base import Commitment, MintContext, MintedNft
from framemint.keyframes import EmptyKeyframeSource, KeyframesData, KeyframeSource
from framemint.logging import logger
from framemint.metadata import KeyframeMetadataBuilder, MetadataBuilder
from framemint.nft import CollectionNftData, NftData
from framemint.uploader import AssetUploader

__all__ = ["MintOrchestrator", "MintRun"]


@dataclass
class MintRun:
    """Outcome of one run of the mint sequence."""

    run_id: str

    collection: Optional[MintedNft] = None

    members: List[MintedNft] = field(default_factory=list)

    def to_primitive(self) -> dict:
        return {
            "run_id": self.run_id,
            "collection": self.collection.address if self.collection else None,
            "members": [m.address for m in self.members],
        }


class MintOrchestrator:
    """Mints a collection NFT and its members, one step after the other.

    Every step waits for the previous one. A failure stops the run and propagates unchanged.
    Nothing already minted is rolled back, so a member can be left minted but unverified.

    Args:
        uploader (AssetUploader): Uploads images and metadata documents.
        mint_context (MintContext): Mints, verifies and updates tokens.
        builder (MetadataBuilder): Metadata strategy. Defaults to keyframe attributes.
        keyframe_source (KeyframeSource): Where animation keyframes are loaded from.
    """

    def __init__(
        self,
        uploader: AssetUploader,
        mint_context: MintContext,
        builder: Optional[MetadataBuilder] = None,
        keyframe_source: Optional[KeyframeSource] = None,
    ):
        self.uploader = uploader
        self.mint_context = mint_context
        self.builder = builder or KeyframeMetadataBuilder()
        self.keyframe_source = keyframe_source or EmptyKeyframeSource()

    def upload_metadata(
        self, nft_data: NftData, keyframes: Optional[KeyframesData] = None
    ) -> str:
        return self.uploader.upload_nft(nft_data, self.builder, keyframes)

    def create_collection_nft(self, uri: str, data: CollectionNftData) -> MintedNft:
        nft = self.mint_context.create_nft(
            uri, data, commitment=Commitment.FINALIZED
        )
        logger.info(
            f"Collection Mint: {self.mint_context.cluster.address_url(nft.mint_address)}"
        )
        return nft

    def create_nft(
        self, uri: str, nft_data: NftData, collection: MintedNft
    ) -> MintedNft:
        """Mint a member NFT and verify it as part of the collection."""
        nft = self.mint_context.create_nft(
            uri,
            nft_data,
            collection=collection.address,
            commitment=Commitment.FINALIZED,
        )
        logger.info(
            f"Token Mint: {self.mint_context.cluster.address_url(nft.mint_address)}"
        )

        # this is what verifies our collection as a Certified Collection
        self.mint_context.verify_collection(
            nft.address, collection.address, is_sized_collection=True
        )
        return nft

    def run(
        self,
        collection_data: CollectionNftData,
        members: Sequence[NftData],
        run_id: Optional[str] = None,
    ) -> MintRun:
        """Mint the collection, then each member in order.

        Args:
            collection_data (CollectionNftData): The collection NFT.
            members (Sequence[NftData]): Member NFTs, minted in this order.
            run_id (Optional[str]): Token identifying the run. Generated if not given.

        Returns:
            MintRun: Addresses of everything minted.
        """
        result = MintRun(run_id=run_id or uuid.uuid4().hex)
        logger.info(f"Starting mint run {result.run_id}")

        keyframes = self.keyframe_source.load()

        collection_uri = self.upload_metadata(collection_data, keyframes)
        result.collection = self.create_collection_nft(collection_uri, collection_data)

        for nft_data in members:
            uri = self.upload_metadata(nft_data, keyframes)
            result.members.append(self.create_nft(uri, nft_data, result.collection))

        logger.info(f"Finished mint run {result.run_id}")
        return result

    def update_nft_uri(self, uri: str, address: str) -> str:
        """Point an existing token at a new metadata URI.

        There is no check against concurrent updates, the last one to settle wins.

        Returns:
            str: Signature of the update transaction.
        """
        # fetch NFT data using its address
        nft = self.mint_context.find_nft(address)

        signature = self.mint_context.update_uri(
            nft, uri, commitment=Commitment.FINALIZED
        )

        cluster = self.mint_context.cluster
        logger.info(f"Token Mint: {cluster.address_url(nft.mint_address)}")
        logger.info(f"Transaction: {cluster.transaction_url(signature)}")
        return signature

    def update_nft(self, nft_data: NftData, address: str) -> str:
        """Upload new metadata for ``nft_data`` and point the token at ``address`` to it."""
        uri = self.upload_metadata(nft_data, self.keyframe_source.load())
        return self.update_nft_uri(uri, address)
