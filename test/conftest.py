import json
import logging

import pytest

from framemint.logging import logger
from framemint.nft import CollectionNftData, NftData
from framemint.orchestrator import MintOrchestrator
from framemint.uploader import AssetUploader
from test.framemint.util import TEST_WALLET, FixedMintContext, FixedStorageContext

KEYFRAMES_PRIMITIVE = [
    [
        {"id": 1, "url": "a.png", "x": 10, "y": 20, "rotation": 0, "scale": 1},
        {"id": 2, "url": "b.png", "x": 5.5, "y": -3, "rotation": 90, "scale": 0.5},
    ],
    [{"id": 1, "url": "a.png", "x": 12, "y": 22, "rotation": 45, "scale": 1.0}],
]


@pytest.fixture(autouse=True)
def debug_logs():
    logger.setLevel(logging.DEBUG)
    yield


@pytest.fixture
def keyframes_primitive():
    return json.loads(json.dumps(KEYFRAMES_PRIMITIVE))


@pytest.fixture
def nft_data() -> NftData:
    return NftData(
        name="Name",
        symbol="SYMBOL",
        description="Description",
        seller_fee_basis_points=0,
        image_file="pink.png",
    )


@pytest.fixture
def collection_data() -> CollectionNftData:
    return CollectionNftData(
        name="TestCollectionNFT",
        symbol="TEST",
        description="Test Description Collection",
        seller_fee_basis_points=100,
        image_file="pink.png",
        collection_authority=TEST_WALLET,
    )


@pytest.fixture
def asset_dir(tmp_path):
    (tmp_path / "pink.png").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return tmp_path


@pytest.fixture
def calls():
    return []


@pytest.fixture
def storage(calls):
    return FixedStorageContext(calls)


@pytest.fixture
def mint_context(calls):
    return FixedMintContext(calls)


@pytest.fixture
def orchestrator(storage, mint_context, asset_dir):
    return MintOrchestrator(AssetUploader(storage, asset_dir), mint_context)
