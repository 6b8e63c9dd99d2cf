"""Shared setup of the tests running against the staging minting and storage services."""

import os
import pathlib

import pytest
from retry import retry

from framemint.config import Config

TEST_RETRIES = 8

if not os.environ.get("FRAMEMINT_CROSSMINT_API_KEY") or not os.environ.get(
    "FRAMEMINT_PINATA_JWT"
):
    pytest.skip(
        "Cannot find service credentials. Please specify environment variables "
        "FRAMEMINT_CROSSMINT_API_KEY and FRAMEMINT_PINATA_JWT",
        allow_module_level=True,
    )

# smallest valid PNG: one transparent pixel
PIXEL_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000154a24f5d0000000049454e44ae426082"
)


class TestBase:
    config = Config.from_env()

    storage = config.storage_context()

    mint_context = config.mint_context()

    @pytest.fixture
    def asset_dir(self, tmp_path) -> pathlib.Path:
        (tmp_path / "pixel.png").write_bytes(PIXEL_PNG)
        return tmp_path

    @retry(tries=TEST_RETRIES, delay=3, backoff=2)
    def assert_on_chain(self, address: str):
        nft = self.mint_context.find_nft(address)
        assert nft.signature, f"{address} is not on chain yet"
        return nft
