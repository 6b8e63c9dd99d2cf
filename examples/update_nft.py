"""
Point an existing NFT at new metadata.

The member is re-uploaded with the five-scalar metadata layout and the NFT at
ADDRESS is updated to reference it.

Usage: python update_nft.py <collection id>:<nft id>
"""
import logging
import os
import sys

from framemint import *
from framemint.logging import logger

logger.setLevel(logging.INFO)

ADDRESS = sys.argv[1]

WALLET = os.environ["FRAMEMINT_WALLET"]

orchestrator = MintOrchestrator(
    AssetUploader(PinataStorageContext(os.environ["FRAMEMINT_PINATA_JWT"]), "src"),
    CrossmintMintContext(os.environ["FRAMEMINT_CROSSMINT_API_KEY"], recipient=WALLET),
    builder=ScalarMetadataBuilder(
        FrameScalars(x=10, y=20, rotation=0, scale=1, set=1), creator=WALLET
    ),
)

update_nft_data = NftData(
    name="Name",
    symbol="SYMBOL",
    description="Updated Description",
    seller_fee_basis_points=0,
    image_file="pink.png",
)

signature = orchestrator.update_nft(update_nft_data, ADDRESS)
print(f"Transaction: {orchestrator.mint_context.cluster.transaction_url(signature)}")
