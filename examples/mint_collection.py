"""
A complete walk through of minting an animated NFT collection.

The keyframes exported by the animation editor are written into the metadata of
the collection NFT and of its member, both are minted, and the member is
verified as part of the collection.

Set FRAMEMINT_PINATA_JWT, FRAMEMINT_CROSSMINT_API_KEY and FRAMEMINT_WALLET before running.
"""
import logging
import os
import pathlib

from framemint import *
from framemint.logging import logger

logger.setLevel(logging.INFO)

"""Preparation"""
# Images are read from this directory
ASSET_DIR = pathlib.Path("src")

# Keyframes exported from the editor, optional
KEYFRAMES_FILE = ASSET_DIR / "keyframes.json"

WALLET = os.environ["FRAMEMINT_WALLET"]

storage = PinataStorageContext(os.environ["FRAMEMINT_PINATA_JWT"], timeout=60)

mint_context = CrossmintMintContext(
    os.environ["FRAMEMINT_CROSSMINT_API_KEY"],
    recipient=WALLET,
    cluster=Cluster.DEVNET,
)

"""Define NFTs"""
collection_nft_data = CollectionNftData(
    name="TestCollectionNFT",
    symbol="TEST",
    description="Test Description Collection",
    seller_fee_basis_points=100,
    image_file="pink.png",
    collection_authority=WALLET,
)

nft_data = NftData(
    name="Name",
    symbol="SYMBOL",
    description="Description",
    seller_fee_basis_points=0,
    image_file="pink.png",
)

"""Mint"""
orchestrator = MintOrchestrator(
    AssetUploader(storage, ASSET_DIR),
    mint_context,
    builder=KeyframeMetadataBuilder(),
    keyframe_source=JsonFileKeyframeSource(KEYFRAMES_FILE),
)

result = orchestrator.run(collection_nft_data, [nft_data])

print(f"Collection: {result.collection.address}")
for member in result.members:
    print(f"Member: {member.address}")
